"""Authentication collaborator for hubapi.

The dispatch core only stores ``login``, ``password``, ``oauth_token`` and
client credentials as options. This package turns them into request
headers and parameters for the transport.

Modules:
    base: :class:`AuthResult` and :func:`resolve_auth`.
"""

from hubapi.auth.base import AuthResult, basic_auth_header, resolve_auth

__all__ = ["AuthResult", "basic_auth_header", "resolve_auth"]
