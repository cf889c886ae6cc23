"""Canonical Pydantic models shared across hubapi modules.

:class:`Settings` is the single declaration of every configuration property
an API instance exposes. Field order is significant: it is the order in
which :meth:`~hubapi.api.base.API.setup` assigns properties, and the order
reported by :func:`~hubapi.configuration.property_names`.

All models use Pydantic v2. ``Settings`` validates on assignment so that
:func:`~hubapi.configuration.configure` rejects bad values immediately.
"""

from __future__ import annotations

from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from hubapi import __version__


class Settings(BaseModel):
    """Library-wide configuration defaults.

    Every field becomes a read/write property on
    :class:`~hubapi.api.base.API`. The values held here are only defaults:
    each API instance copies them into its own option store when it is
    created and may override any of them.

    Example::

        Settings(endpoint="https://github.example.com/api/v3", per_page=50)
    """

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    adapter: Any = Field(
        default=None,
        description="httpx transport used for requests; None selects the default network transport",
    )
    client_id: Optional[str] = Field(default=None, description="OAuth application id")
    client_secret: Optional[str] = Field(
        default=None, description="OAuth application secret"
    )
    oauth_token: Optional[str] = Field(
        default=None, description="OAuth access token sent in the Authorization header"
    )
    endpoint: str = Field(
        default="https://api.github.com", description="Base URL for API requests"
    )
    site: str = Field(
        default="https://github.com", description="Web endpoint used for OAuth flows"
    )
    upload_endpoint: str = Field(
        default="https://uploads.github.com", description="Base URL for uploads"
    )
    ssl: dict[str, Any] = Field(
        default_factory=lambda: {"verify": True}, description="SSL options"
    )
    mime_type: Optional[str] = Field(
        default=None, description="Media type sent in the Accept header"
    )
    user_agent: str = Field(default=f"hubapi/{__version__}")
    connection_options: dict[str, Any] = Field(
        default_factory=dict, description="Extra headers sent with every request"
    )
    repo: Optional[str] = None
    user: Optional[str] = None
    org: Optional[str] = None
    login: Optional[str] = None
    password: Optional[str] = None
    basic_auth: Optional[Union[str, dict[str, Any]]] = Field(
        default=None, description="Either 'login:password' or {'login': ..., 'password': ...}"
    )
    auto_pagination: bool = False
    per_page: Optional[int] = None
    follow_redirects: bool = True
    timeout: int = Field(default=30, description="Request timeout in seconds")
    max_retries: int = Field(default=3, description="Max retry attempts")
