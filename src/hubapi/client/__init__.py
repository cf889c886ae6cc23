"""HTTP transport for hubapi request methods.

Provides the blocking transport that wraps :mod:`httpx` with auth
injection, retry with exponential backoff, and typed error mapping, plus
the :class:`Response` wrapper request helpers return.

Example::

    from hubapi.client import Transport

    with Transport(client.current_options) as transport:
        resp = transport.get("/users/octocat")
"""

from hubapi.client.response import Response
from hubapi.client.transport import Transport

__all__ = ["Response", "Transport"]
