"""Parsing and validation of request method arguments.

Request methods typically accept a few positional values (``user``,
``repo``, an issue number) followed by keyword parameters. :class:`Arguments`
assigns the positionals to named slots, falls back to the client's current
options for anything not passed, checks that required names resolved, and
keeps the remaining keyword parameters as ``params``::

    def list(self, *args, **params):
        arguments = self.arguments(args, params, required=["user", "repo"])
        return self.get_request(f"/repos/{arguments.user}/{arguments.repo}/issues",
                                arguments.params)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Iterable, Mapping, Optional

from hubapi.exceptions import InvalidArgumentError, RequiredParamsError

if TYPE_CHECKING:
    from hubapi.api.base import API


class Arguments:
    """Parsed positional and keyword arguments of one request method call.

    Args:
        api: The client instance the request method was called on.
        required: Names that must resolve to a non-``None`` value, filled
            from positionals first.
        optional: Names filled from any positionals left after *required*.
    """

    def __init__(
        self,
        api: API,
        required: Iterable[str] = (),
        optional: Iterable[str] = (),
    ) -> None:
        self.api = api
        self.required = [str(name) for name in required]
        self.optional = [str(name) for name in optional]
        self.params: dict[str, Any] = {}
        self._values: dict[str, Any] = {}

    def parse(
        self,
        *args: Any,
        params: Optional[Mapping[str, Any]] = None,
        configure: Optional[Callable[[Arguments], Any]] = None,
    ) -> Arguments:
        """Parse *args* and *params*, returning ``self``.

        Raises:
            InvalidArgumentError: If more positionals are passed than there
                are required and optional names.
            RequiredParamsError: If a required name is still unresolved.
        """
        self._parse_positionals(args)
        self._parse_params(params or {})
        if configure is not None:
            configure(self)
        self._check_requirements()
        return self

    def _parse_positionals(self, args: tuple[Any, ...]) -> None:
        slots = self.required + self.optional
        if len(args) > len(slots):
            raise InvalidArgumentError(
                f"Wrong number of arguments (given {len(args)}, expected at most {len(slots)})"
            )
        for name, value in zip(slots, args):
            self._values[name] = value
            self.api.set(name, value)
        for name in slots[len(args):]:
            self._values[name] = getattr(self.api, name, None)

    def _parse_params(self, params: Mapping[str, Any]) -> None:
        if not isinstance(params, Mapping):
            raise InvalidArgumentError("Parameters must be a mapping")
        self.params = {str(k): v for k, v in params.items() if v is not None}

    def _check_requirements(self) -> None:
        missing = [name for name in self.required if self._values.get(name) is None]
        if missing:
            raise RequiredParamsError(missing)

    # ------------------------------------------------------------------ #
    # Validation helpers, usually called from the ``configure`` callback
    # ------------------------------------------------------------------ #

    def permit(self, keys: Iterable[str], key: Optional[str] = None, recursive: bool = True) -> Arguments:
        """Drop every parameter whose name is not in *keys*.

        With *key* the filter applies to the nested mapping ``params[key]``
        instead. Nested mappings are filtered with the same *keys* when
        *recursive* is true.
        """
        allowed = set(keys)
        target = self.params if key is None else self.params.get(key)
        if isinstance(target, dict):
            _filter_keys(target, allowed, recursive)
        return self

    def assert_values(self, values: Iterable[Any], key: str) -> Arguments:
        """Ensure ``params[key]``, when present, is one of *values*.

        Raises:
            InvalidArgumentError: If the value is not allowed.
        """
        allowed = list(values)
        if key in self.params and self.params[key] not in allowed:
            raise InvalidArgumentError(
                f"Wrong value of '{self.params[key]}' for parameter: {key}. "
                f"Use one of: {', '.join(str(v) for v in allowed)}"
            )
        return self

    def assert_required(self, keys: Iterable[str]) -> Arguments:
        """Ensure every name in *keys* is present in ``params``.

        Raises:
            RequiredParamsError: Naming every absent key.
        """
        missing = [key for key in keys if key not in self.params]
        if missing:
            raise RequiredParamsError(missing)
        return self

    @property
    def remaining(self) -> dict[str, Any]:
        """Parameters that do not shadow a positional name."""
        slots = set(self.required) | set(self.optional)
        return {k: v for k, v in self.params.items() if k not in slots}

    def __getattr__(self, name: str) -> Any:
        values = self.__dict__.get("_values", {})
        if name in values:
            return values[name]
        raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")

    def __repr__(self) -> str:
        return f"Arguments(values={self._values!r}, params={self.params!r})"


def _filter_keys(mapping: dict[str, Any], allowed: set[str], recursive: bool) -> None:
    for name in list(mapping):
        if name not in allowed:
            del mapping[name]
        elif recursive and isinstance(mapping[name], dict):
            _filter_keys(mapping[name], allowed, recursive)
