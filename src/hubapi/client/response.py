"""Response wrapper returned by request helpers.

:class:`Response` keeps the status, headers and decoded body of an
:class:`httpx.Response` together, and lets callers index into the body
directly (``response["id"]``, ``for item in response``).
"""

from __future__ import annotations

from typing import Any, Iterator

import httpx

from hubapi.output import get_output


def extract_response_data(response: httpx.Response) -> Any:
    """Extract the body from an HTTP response.

    Attempts to parse the body as JSON first.  If that fails (e.g. the
    response is HTML or plain text), returns the raw text.  Returns
    ``None`` for responses with no content.
    """
    if not response.content:
        return None

    try:
        return response.json()
    except ValueError:
        pass

    return response.text


class Response:
    """Decoded API response.

    Args:
        raw: The underlying :class:`httpx.Response`.
    """

    def __init__(self, raw: httpx.Response) -> None:
        self.raw = raw
        self.status_code = raw.status_code
        self.headers = dict(raw.headers)
        self.body = extract_response_data(raw)
        get_output().debug(f"HTTP {raw.status_code} {raw.reason_phrase or ''}")

    @property
    def success(self) -> bool:
        return 200 <= self.status_code < 300

    def __getitem__(self, key: Any) -> Any:
        return self.body[key]

    def __iter__(self) -> Iterator[Any]:
        return iter(self.body or ())

    def __len__(self) -> int:
        return len(self.body or ())

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Response):
            return self.body == other.body
        return self.body == other

    def __repr__(self) -> str:
        return f"<Response [{self.status_code}]>"
