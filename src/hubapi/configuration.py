"""Library-wide configuration source with environment overrides.

This module owns the process-wide :class:`~hubapi.models.Settings`
instance that every new API client is seeded from:

* **Declared properties** -- :func:`property_names` lists the settable
  configuration keys, in declaration order.
* **Defaults** -- :func:`configure` changes library-wide defaults,
  :func:`reset_configuration` restores the built-in ones.
* **Precedence resolution** -- :func:`fetch` merges environment variables
  over the configured defaults. Caller options passed to an API constructor
  sit above both.

Precedence (high to low):
    1. Options passed to the API constructor
    2. Environment variables (``HUBAPI_ENDPOINT``, ``HUBAPI_OAUTH_TOKEN``, ...)
    3. Values set with :func:`configure`
    4. Built-in defaults
"""

from __future__ import annotations

import os
from typing import Any, Optional

from pydantic import ValidationError

from hubapi.exceptions import ConfigError
from hubapi.models import Settings

ENV_PREFIX = "HUBAPI_"

_ENV_PROPERTIES = (
    "endpoint",
    "oauth_token",
    "client_id",
    "client_secret",
    "user_agent",
    "basic_auth",
)


# --- Global settings instance ---

_settings: Optional[Settings] = None


def get_configuration() -> Settings:
    """Return the global :class:`~hubapi.models.Settings` instance.

    Created lazily with built-in defaults on first access.
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def configure(**changes: Any) -> Settings:
    """Change library-wide defaults.

    Args:
        **changes: Property names mapped to their new default values.

    Returns:
        The updated global settings.

    Raises:
        ConfigError: If a name is not a declared property or a value fails
            validation.
    """
    settings = get_configuration()
    for key, value in changes.items():
        if key not in Settings.model_fields:
            raise ConfigError(f"Unknown configuration property '{key}'")
        try:
            setattr(settings, key, value)
        except ValidationError as exc:
            raise ConfigError(f"Invalid value for '{key}': {exc}") from exc
    return settings


def reset_configuration() -> None:
    """Restore built-in defaults.

    Primarily useful in test suites to ensure a clean state between tests.
    """
    global _settings
    _settings = None


def property_names() -> list[str]:
    """Return every declared configuration property, in declaration order."""
    return list(Settings.model_fields)


# --- Precedence resolution ---


def _env_overrides() -> dict[str, Any]:
    """Collect ``HUBAPI_*`` environment variables for the supported properties."""
    overrides: dict[str, Any] = {}
    for key in _ENV_PROPERTIES:
        value = os.environ.get(f"{ENV_PREFIX}{key.upper()}")
        if value:
            overrides[key] = value
    return overrides


def fetch() -> dict[str, Any]:
    """Return the resolved default options as a fresh dict.

    Environment variables take precedence over configured defaults. The
    returned mapping is a copy; mutating it does not affect the global
    settings.

    Raises:
        ConfigError: If an environment variable holds an invalid value.
    """
    defaults = get_configuration().model_dump()
    overrides = _env_overrides()
    if overrides:
        try:
            Settings.model_validate({**defaults, **overrides})
        except ValidationError as exc:
            raise ConfigError(f"Invalid {ENV_PREFIX}* environment value: {exc}") from exc
        defaults.update(overrides)
    return defaults
