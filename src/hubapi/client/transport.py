"""Blocking HTTP transport used by the request helpers on :class:`~hubapi.api.base.API`.

:class:`Transport` opens an :class:`httpx.Client` configured from a
client's current options, sends one request at a time and hands back a
:class:`~hubapi.client.response.Response`. On top of httpx it adds:

- credentials from :func:`~hubapi.auth.resolve_auth` on every request,
- retries for 5xx answers and network failures, sleeping ``2 ** attempt``
  seconds between tries,
- typed :mod:`hubapi.exceptions` for 4xx/5xx answers.

Example::

    with Transport(client.current_options) as transport:
        response = transport.get("/users/octocat")
"""

from __future__ import annotations

import time
from typing import Any, Mapping, Optional

import httpx

from hubapi.auth import AuthResult, resolve_auth
from hubapi.client.response import Response
from hubapi.exceptions import (
    AuthError,
    ClientError,
    ConnectionError_,
    HubApiError,
    NotFoundError,
    ServerError,
)
from hubapi.output import get_output

DEFAULT_ACCEPT = "application/json"

RETRYABLE_ERRORS = (httpx.ConnectError, httpx.TimeoutException, httpx.NetworkError)

STATUS_ERRORS: dict[int, type[HubApiError]] = {
    401: AuthError,
    403: AuthError,
    404: NotFoundError,
}


def error_for_status(status: int) -> type[HubApiError]:
    """Return the exception class raised for an HTTP error *status*."""
    if status in STATUS_ERRORS:
        return STATUS_ERRORS[status]
    return ServerError if status >= 500 else ClientError


def error_message(response: httpx.Response) -> str:
    """Build ``HTTP <status>[: <detail>]`` from an error response."""
    try:
        detail = response.json()
    except ValueError:
        detail = response.text[:200]
    if isinstance(detail, dict):
        detail = detail.get("message") or detail.get("error") or ""
    text = str(detail) if detail else ""
    return f"HTTP {response.status_code}: {text}" if text else f"HTTP {response.status_code}"


class Transport:
    """Context manager around :class:`httpx.Client` for one client's options.

    Args:
        options: A client's current options. ``endpoint``, ``timeout``,
            ``ssl``, ``follow_redirects`` and ``adapter`` configure the
            underlying client; ``mime_type``, ``user_agent`` and
            ``connection_options`` become headers; ``per_page`` is added
            to GET queries; credentials go through :func:`resolve_auth`.
    """

    def __init__(self, options: Mapping[str, Any]) -> None:
        self._options = dict(options)
        self._auth: AuthResult = resolve_auth(self._options)
        self._client: Optional[httpx.Client] = None

    def __enter__(self) -> Transport:
        ssl = self._options.get("ssl") or {}
        self._client = httpx.Client(
            base_url=self._options.get("endpoint") or "",
            timeout=self._options.get("timeout") or 30,
            verify=ssl.get("verify", True),
            follow_redirects=bool(self._options.get("follow_redirects", True)),
            transport=self._options.get("adapter"),
        )
        return self

    def __exit__(self, *exc_info: object) -> None:
        if self._client is not None:
            self._client.close()
        self._client = None

    @property
    def max_retries(self) -> int:
        return int(self._options.get("max_retries") or 0)

    def request(
        self,
        method: str,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        json_body: Any = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Response:
        """Send a request and return the decoded response.

        Args:
            method: HTTP verb.
            path: Path relative to the ``endpoint`` option.
            params: Query parameters.
            json_body: Body serialised as JSON, if any.
            headers: Headers overriding the defaults.

        Raises:
            AuthError: 401 or 403.
            NotFoundError: 404.
            ClientError: Any other 4xx.
            ServerError: 5xx once retries are used up.
            ConnectionError_: Network failure once retries are used up.
        """
        if self._client is None:
            raise RuntimeError("Transport is not open; use it as a context manager")

        query = {**self._auth.params, **(params or {})}
        if method.upper() == "GET" and self._options.get("per_page"):
            query.setdefault("per_page", self._options["per_page"])
        request = self._client.build_request(
            method,
            path,
            params=query,
            headers={**self._auth.headers, **self._headers(), **(headers or {})},
            json=json_body,
        )

        response = self._send(request)
        if response.status_code >= 400:
            raise error_for_status(response.status_code)(
                error_message(response), status_code=response.status_code
            )
        return Response(response)

    def get(self, path: str, **kwargs: Any) -> Response:
        return self.request("GET", path, **kwargs)

    def post(self, path: str, **kwargs: Any) -> Response:
        return self.request("POST", path, **kwargs)

    def put(self, path: str, **kwargs: Any) -> Response:
        return self.request("PUT", path, **kwargs)

    def patch(self, path: str, **kwargs: Any) -> Response:
        return self.request("PATCH", path, **kwargs)

    def delete(self, path: str, **kwargs: Any) -> Response:
        return self.request("DELETE", path, **kwargs)

    def _headers(self) -> dict[str, str]:
        headers = {
            "Accept": self._options.get("mime_type") or DEFAULT_ACCEPT,
            "User-Agent": self._options.get("user_agent") or "hubapi",
        }
        for name, value in (self._options.get("connection_options") or {}).items():
            headers[str(name)] = str(value)
        return headers

    def _send(self, request: httpx.Request) -> httpx.Response:
        attempts = self.max_retries + 1
        for attempt in range(attempts):
            retries_left = attempt < attempts - 1
            try:
                response = self._client.send(request)
            except RETRYABLE_ERRORS as exc:
                if not retries_left:
                    raise ConnectionError_(f"Connection failed after {attempts} attempts: {exc}") from exc
                self._backoff(attempt, f"Connection error: {exc}")
                continue
            if response.status_code >= 500 and retries_left:
                self._backoff(attempt, f"Server error {response.status_code}")
                continue
            return response
        raise AssertionError("unreachable")  # pragma: no cover

    def _backoff(self, attempt: int, reason: str) -> None:
        delay = 2**attempt
        get_output().debug(f"{reason}, retrying in {delay}s (attempt {attempt + 1}/{self.max_retries})")
        time.sleep(delay)
