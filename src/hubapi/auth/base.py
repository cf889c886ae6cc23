"""Credential resolution from a client's current options.

This module defines :class:`AuthResult`, a plain container for the HTTP
headers and query parameters that authenticate a request, and
:func:`resolve_auth`, which builds one from an options mapping.

Resolution order (first match wins):

1. ``oauth_token`` -- ``Authorization: token <oauth_token>``
2. ``login`` + ``password`` -- HTTP basic ``Authorization`` header
3. ``client_id`` + ``client_secret`` -- sent as query parameters

See Also:
    :class:`~hubapi.client.transport.Transport`, which merges the result
    into every outgoing request.
"""

from __future__ import annotations

import base64
from typing import Any, Mapping


class AuthResult:
    """Container for authentication artifacts to inject into HTTP requests.

    Args:
        headers: HTTP headers to add (e.g. ``{"Authorization": "token ..."}``).
        params: Query-string parameters to add.

    Example::

        result = AuthResult(headers={"Authorization": "token tok123"})
        assert result.headers["Authorization"] == "token tok123"
    """

    def __init__(
        self,
        headers: dict[str, str] | None = None,
        params: dict[str, str] | None = None,
    ):
        self.headers = headers or {}
        self.params = params or {}

    def __bool__(self) -> bool:
        return bool(self.headers or self.params)

    def __repr__(self) -> str:
        return f"AuthResult(headers={sorted(self.headers)}, params={sorted(self.params)})"


def basic_auth_header(login: str, password: str) -> str:
    """Return the value of an HTTP basic ``Authorization`` header."""
    token = base64.b64encode(f"{login}:{password}".encode("utf-8")).decode("ascii")
    return f"Basic {token}"


def resolve_auth(options: Mapping[str, Any]) -> AuthResult:
    """Build an :class:`AuthResult` from resolved client options.

    Args:
        options: A client's current options mapping.

    Returns:
        The credentials to inject; empty when no credentials are configured.
    """
    token = options.get("oauth_token")
    if token:
        return AuthResult(headers={"Authorization": f"token {token}"})

    login = options.get("login")
    password = options.get("password")
    if login and password:
        return AuthResult(headers={"Authorization": basic_auth_header(login, password)})

    client_id = options.get("client_id")
    client_secret = options.get("client_secret")
    if client_id and client_secret:
        return AuthResult(params={"client_id": client_id, "client_secret": client_secret})

    return AuthResult()
