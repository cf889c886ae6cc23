"""Root class for every API surface.

:class:`API` holds framework infrastructure only -- option handling,
callback registration, the execution pipeline, namespaces and request
helpers. Concrete API classes subclass it and define request methods::

    class Issues(API):
        @before_request(only=["create"])
        def require_token(self):
            if not self.oauth_token:
                raise AuthError("token required")

        def list(self, *args, **params):
            arguments = self.arguments(args, params, required=["user", "repo"])
            return self.get_request(
                f"/repos/{arguments.user}/{arguments.repo}/issues", arguments.params
            )

    issues = Issues(oauth_token="...", user="octocat", repo="hello-world")
    issues.list(state="open")

Every public method defined on ``Issues`` is wrapped by
:class:`~hubapi.api.meta.APIMeta` so that calling it runs the registered
before-hooks, the method body, and the after-hooks, in that order.

Options
-------
Each instance keeps its configuration in :attr:`API.current_options`.
Declared properties (see :class:`~hubapi.models.Settings`) are exposed as
Python properties whose setters also merge into ``current_options``.
:meth:`API.set` writes declared properties and creates ad-hoc options for
any other key.
"""

from __future__ import annotations

import inspect
import re
from typing import Any, Callable, Iterable, Mapping, Optional, Union

from hubapi import configuration, hooks
from hubapi.api.arguments import Arguments
from hubapi.api.factory import Namespace
from hubapi.api.meta import APIMeta
from hubapi.client.response import Response
from hubapi.client.transport import Transport
from hubapi.exceptions import InvalidArgumentError, UnsupportedScopeError

_NOT_SET: Any = type("_NotSet", (), {"__repr__": lambda self: "<not set>"})()

_CALLBACK_SUFFIX = re.compile(r"_with(out)?_callback$")

API_KEYS = ("page", "jsonp_callback")
"""Plain request attributes that are not mirrored into ``current_options``."""


class API(metaclass=APIMeta, root=True):
    """Core class for API interface operations.

    Args:
        options: Option overrides applied over the library-wide defaults.
        configure: Optional callable invoked with the new instance once its
            options are set up.
        **kwargs: Additional option overrides, merged over *options*.
    """

    current_options: dict[str, Any]

    def __init__(
        self,
        options: Optional[Mapping[str, Any]] = None,
        configure: Optional[Callable[[API], Any]] = None,
        **kwargs: Any,
    ) -> None:
        object.__setattr__(self, "_adhoc", {})
        self._arguments: Optional[Arguments] = None
        for key in API_KEYS:
            setattr(self, key, None)
        self.setup({**dict(options or {}), **kwargs})
        if configure is not None:
            configure(self)

    # ------------------------------------------------------------------ #
    # Option store
    # ------------------------------------------------------------------ #

    def setup(self, options: Optional[Mapping[str, Any]] = None) -> None:
        """Configure options and process basic authorization.

        Library-wide defaults are merged with *options* (caller values win)
        and the result replaces the current snapshot. Every declared
        property is then assigned through its setter.
        """
        merged = {**configuration.fetch(), **dict(options or {})}
        self.current_options = merged
        for key in configuration.property_names():
            setattr(self, key, merged.get(key))
        self.process_basic_auth(merged.get("basic_auth"))

    def process_basic_auth(self, auth: Union[str, Mapping[str, Any], None]) -> None:
        """Extract login and password from a ``basic_auth`` value."""
        if isinstance(auth, str):
            login, sep, password = auth.partition(":")
            self.login = login
            self.password = password if sep else None
        elif isinstance(auth, Mapping):
            self.login = auth.get("login")
            self.password = auth.get("password")

    # ------------------------------------------------------------------ #
    # Option composer
    # ------------------------------------------------------------------ #

    def set(
        self,
        option: Any,
        value: Any = _NOT_SET,
        ignore_setter: bool = False,
        callback: Optional[Callable[[], Any]] = None,
    ) -> API:
        """Set an option to a given value.

        Called with a single mapping, every pair is applied in order. An
        explicit ``None`` value is ignored. Declared properties go through
        their setters; any other key becomes an ad-hoc option readable as an
        attribute.

        Args:
            option: Option name, or a mapping of names to values.
            value: The value to assign.
            ignore_setter: Skip an existing setter and (re)define the
                ad-hoc option directly.
            callback: Zero-argument callable producing the value; cannot be
                combined with *value*.

        Returns:
            ``self``, for chaining.

        Raises:
            InvalidArgumentError: If both *value* and *callback* are given,
                a non-mapping is passed without a value, or the name clashes
                with an API method.
        """
        if callback is not None and value is not _NOT_SET:
            raise InvalidArgumentError("Pass either a value or a callback, not both")
        if value is _NOT_SET and callback is not None:
            value = callback()
            if value is None:
                return self
        elif value is None:
            return self

        if value is _NOT_SET:
            self._set_options(option)
            return self

        option = str(option)
        if not ignore_setter and self._has_setter(option):
            setattr(self, option, value)
            return self

        self._define_accessors(option, value)
        return self

    def with_(self, args: Union[Mapping[str, Any], str]) -> API:
        """Scope for passing request required arguments.

        Accepts a mapping (applied with :meth:`set`) or an
        ``"owner/repository"`` string split into ``user`` and ``repo``.

        Raises:
            UnsupportedScopeError: For any other input.
        """
        if isinstance(args, Mapping):
            return self.set(args)
        if isinstance(args, str) and "/" in args:
            user, _, repo = args.partition("/")
            return self.set({"user": user, "repo": repo})
        raise UnsupportedScopeError("This api does not support passed in arguments")

    def is_set(self, name: str) -> bool:
        """Return the truthiness of attribute *name*.

        Raises:
            AttributeError: If the instance has no such attribute.
        """
        return bool(getattr(self, name))

    def clear(self, name: str) -> API:
        """Assign ``None`` to option *name* through its setter.

        Raises:
            AttributeError: If *name* is not a declared property, an ad-hoc
                option or a request attribute.
        """
        if not self._has_setter(name):
            raise AttributeError(f"{type(self).__name__!r} object has no option {name!r}")
        setattr(self, name, None)
        return self

    def _set_options(self, options: Any) -> None:
        if not isinstance(options, Mapping):
            raise InvalidArgumentError("cannot iterate over value")
        for key, value in options.items():
            self.set(key, value)

    def _has_setter(self, name: str) -> bool:
        if name in self._adhoc:
            return True
        attr = inspect.getattr_static(type(self), name, None)
        if isinstance(attr, property):
            return attr.fset is not None
        return attr is None and name in API_KEYS

    def _define_accessors(self, option: str, value: Any) -> None:
        if option.startswith("_") or option in self.__dict__:
            raise InvalidArgumentError(f"Option '{option}' clashes with an internal attribute")
        if option not in self._adhoc and inspect.getattr_static(type(self), option, None) is not None:
            raise InvalidArgumentError(f"Option '{option}' clashes with an existing attribute")
        self._adhoc[option] = value
        self.current_options[option] = value

    def __getattr__(self, name: str) -> Any:
        if name.startswith("__"):
            raise AttributeError(name)
        adhoc = self.__dict__.get("_adhoc", {})
        if name in adhoc:
            return adhoc[name]
        if name.startswith("has_") and len(name) > 4:
            return lambda: self.is_set(name[4:])
        if name.startswith("clear_") and len(name) > 6:
            return lambda: self.clear(name[6:])
        raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")

    def __setattr__(self, name: str, value: Any) -> None:
        adhoc = self.__dict__.get("_adhoc")
        if adhoc is not None and name in adhoc:
            self.set(name, value, True)
            return
        super().__setattr__(name, value)

    def __dir__(self) -> Iterable[str]:
        return sorted(set(super().__dir__()) | set(self._adhoc))

    # ------------------------------------------------------------------ #
    # Arguments
    # ------------------------------------------------------------------ #

    def arguments(
        self,
        args: Any = _NOT_SET,
        params: Optional[Mapping[str, Any]] = None,
        *,
        required: Iterable[str] = (),
        optional: Iterable[str] = (),
        configure: Optional[Callable[[Arguments], Any]] = None,
    ) -> Optional[Arguments]:
        """Acts as setter and getter for request arguments parsing.

        Without *args* the last parsed :class:`Arguments` is returned.
        Otherwise *args* (a tuple of positionals) and *params* are parsed,
        stored and returned.
        """
        if args is _NOT_SET:
            return self._arguments
        if not isinstance(args, (list, tuple)):
            args = (args,)
        self._arguments = Arguments(self, required=required, optional=optional).parse(
            *args, params=params, configure=configure
        )
        return self._arguments

    # ------------------------------------------------------------------ #
    # Callbacks and execution
    # ------------------------------------------------------------------ #

    @classmethod
    def callback_registry(cls) -> hooks.CallbackRegistry:
        return cls._callback_registry

    @classmethod
    def before_callbacks(cls) -> list[hooks.CallbackDescriptor]:
        """List of before callbacks."""
        return cls._callback_registry.before

    @classmethod
    def after_callbacks(cls) -> list[hooks.CallbackDescriptor]:
        """List of after callbacks."""
        return cls._callback_registry.after

    @classmethod
    def before_request(
        cls, callback: hooks.Callback, only: Optional[Iterable[str] | str] = None
    ) -> hooks.CallbackDescriptor:
        """Register a hook run before request methods of this class."""
        return cls._callback_registry.register(hooks.BEFORE, callback, only)

    @classmethod
    def after_request(
        cls, callback: hooks.Callback, only: Optional[Iterable[str] | str] = None
    ) -> hooks.CallbackDescriptor:
        """Register a hook run after request methods of this class."""
        return cls._callback_registry.register(hooks.AFTER, callback, only)

    @classmethod
    def request_methods(cls) -> frozenset[str]:
        """Names of the methods wrapped with the hook pipeline."""
        return cls._request_methods

    @classmethod
    def is_root(cls) -> bool:
        return cls.__dict__.get("_root", False)

    def filter_callbacks(self, kind: str, action_name: str) -> list[hooks.CallbackDescriptor]:
        """Return the *kind* (``"before"`` or ``"after"``) hooks applying to *action_name*."""
        return type(self)._callback_registry.filter(kind, action_name)

    def run_callbacks(self, action_name: str, body: Optional[Callable[[], Any]] = None) -> Any:
        """Run all callbacks associated with this action around *body*."""
        return hooks.HookRunner(self).run(action_name, body or (lambda: None))

    def execute(self, action: str, method: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        """Execute a request method body through the hook pipeline.

        Args:
            action: Request method name; a ``_with_callback`` or
                ``_without_callback`` suffix is stripped.
            method: The bound, unwrapped method body.
        """
        action_name = _CALLBACK_SUFFIX.sub("", str(action))
        return self.run_callbacks(action_name, lambda: method(*args, **kwargs))

    # ------------------------------------------------------------------ #
    # Namespaces
    # ------------------------------------------------------------------ #

    @classmethod
    def namespace(cls, *names: str, root: bool = False, full_name: Optional[str] = None) -> type:
        """Declare namespace accessors on this class.

        A name that already resolves to an attribute of the class is left
        untouched.
        """
        for name in names:
            if hasattr(cls, name):
                continue
            setattr(cls, name, Namespace(root=root, full_name=full_name))
        return cls

    @classmethod
    def namespaces(cls) -> dict[str, str]:
        """Map of namespace names to the fully qualified target names."""
        return {name: ns.target_name for name, ns in cls._namespaces.items()}

    # ------------------------------------------------------------------ #
    # Authorization
    # ------------------------------------------------------------------ #

    def is_basic_authed(self) -> bool:
        return bool(self.basic_auth) or bool(self.login and self.password)

    def is_authenticated(self) -> bool:
        return self.is_basic_authed() or bool(self.oauth_token)

    def authentication(self) -> dict[str, Any]:
        """Return the basic credentials in use, if any."""
        if self.login and self.password:
            return {"login": self.login, "password": self.password}
        if self.basic_auth:
            return {"basic_auth": self.basic_auth}
        return {}

    # ------------------------------------------------------------------ #
    # Request helpers
    # ------------------------------------------------------------------ #

    def request(
        self,
        method: str,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        json_body: Any = None,
    ) -> Response:
        with Transport(self.current_options) as transport:
            return transport.request(method, path, params=params, json_body=json_body)

    def get_request(self, path: str, params: Optional[Mapping[str, Any]] = None) -> Response:
        return self.request("GET", path, params=params)

    def delete_request(self, path: str, params: Optional[Mapping[str, Any]] = None) -> Response:
        return self.request("DELETE", path, params=params)

    def post_request(self, path: str, params: Optional[Mapping[str, Any]] = None) -> Response:
        return self.request("POST", path, json_body=dict(params or {}))

    def put_request(self, path: str, params: Optional[Mapping[str, Any]] = None) -> Response:
        return self.request("PUT", path, json_body=dict(params or {}))

    def patch_request(self, path: str, params: Optional[Mapping[str, Any]] = None) -> Response:
        return self.request("PATCH", path, json_body=dict(params or {}))

    def __repr__(self) -> str:
        return f"<{type(self).__qualname__} options={sorted(self.current_options)}>"


def _config_property(name: str) -> property:
    field = f"_{name}"

    def getter(self: API) -> Any:
        return self.__dict__.get(field)

    def setter(self: API, value: Any) -> None:
        self.__dict__[field] = value
        self.current_options[name] = value

    return property(getter, setter, doc=f"The ``{name}`` configuration property.")


for _name in configuration.property_names():
    setattr(API, _name, _config_property(_name))
