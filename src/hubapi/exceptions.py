"""Exception hierarchy for hubapi.

All exceptions inherit from :class:`HubApiError`. Errors raised by the
dispatch core for malformed input also inherit from :class:`ValueError` so
callers that only know the builtin hierarchy can still catch them. Errors
produced by the transport carry the HTTP ``status_code`` when one exists.

Subclass hierarchy::

    HubApiError
    +-- InvalidArgumentError   (also ValueError)
    |   +-- UnsupportedScopeError
    |   +-- RequiredParamsError
    +-- ConfigError
    +-- AuthError              (HTTP 401 / 403)
    +-- NotFoundError          (HTTP 404)
    +-- ClientError            (other HTTP 4xx)
    +-- ServerError            (HTTP 5xx)
    +-- ConnectionError_       (network failure)

Unknown attribute access on an API instance is reported with the builtin
:class:`AttributeError`, never with a class from this module.
"""

from __future__ import annotations


class HubApiError(Exception):
    """Base exception for all hubapi errors.

    Args:
        message: Human-readable error description.
        status_code: Optional HTTP status code associated with the failure.
    """

    status_code: int | None = None

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        if status_code is not None:
            self.status_code = status_code


class InvalidArgumentError(HubApiError, ValueError):
    """Raised for malformed option or argument input (e.g. ``set`` misuse)."""


class UnsupportedScopeError(InvalidArgumentError):
    """Raised when ``with_`` receives a shape it cannot turn into options."""


class RequiredParamsError(InvalidArgumentError):
    """Raised when a request method is missing required parameters.

    Args:
        missing: Names of the parameters that could not be resolved.
    """

    def __init__(self, missing: list[str] | tuple[str, ...]):
        self.missing = list(missing)
        super().__init__(f"Missing required parameters: {', '.join(self.missing)}")


class ConfigError(HubApiError):
    """Raised for invalid library-wide configuration values."""


class AuthError(HubApiError):
    """Raised when the API rejects the credentials (HTTP 401 / 403)."""


class NotFoundError(HubApiError):
    """Raised when the API returns HTTP 404 (resource not found)."""


class ClientError(HubApiError):
    """Raised for HTTP 4xx responses not covered by a more specific class."""


class ServerError(HubApiError):
    """Raised when the API returns an HTTP 5xx server error."""


class ConnectionError_(HubApiError):
    """Raised on network-level failures (timeout, DNS resolution, connection refused).

    Named with a trailing underscore to avoid shadowing the built-in
    ``ConnectionError``.
    """
