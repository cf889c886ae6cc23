"""Request method classification and interception.

:class:`APIMeta` is the metaclass of :class:`~hubapi.api.base.API`. When a
class is created it

1. seeds the class' :class:`~hubapi.hooks.CallbackRegistry` with a copy of
   its bases' registries and registers hooks marked in the class body,
2. computes the set of *request methods* -- public plain functions defined
   on the class, plus request methods inherited from non-root bases,
3. replaces every locally defined request method with a wrapper that runs
   the body through :meth:`~hubapi.api.base.API.execute`.

Root classes (created with ``root=True``) hold framework infrastructure;
nothing defined on them is ever a request method. Methods attached to a
class after creation go through the same classification in
:meth:`APIMeta.__setattr__`.

Wrappers carry a ``__request_method__`` marker; a function that already
carries it (an alias, an inherited wrapper) is never wrapped again.

Excluded from the request method set: names starting with ``_``,
properties, static and class methods, namespaces, methods marked as hooks,
and methods decorated with :func:`helper`.
"""

from __future__ import annotations

import functools
import inspect
import logging
import types
from typing import Any, Callable

from hubapi.api.factory import Namespace
from hubapi.hooks import CallbackRegistry, hook_marks

logger = logging.getLogger(__name__)

WRAPPED_MARKER = "__request_method__"
HELPER_MARKER = "__request_helper__"


def helper(func: Callable) -> Callable:
    """Exclude a public method from hook wrapping.

    Example::

        class Repos(API):
            @helper
            def full_name(self):
                return f"{self.user}/{self.repo}"
    """
    setattr(func, HELPER_MARKER, True)
    return func


def is_request_candidate(name: str, value: Any) -> bool:
    """Return True if *value* bound to *name* qualifies as a request method."""
    if name.startswith("_"):
        return False
    if not inspect.isfunction(value):
        return False
    if getattr(value, HELPER_MARKER, False) or hook_marks(value):
        return False
    return True


def is_wrapped(value: Any) -> bool:
    return getattr(value, WRAPPED_MARKER, False)


def wrap_request_method(name: str, func: Callable) -> Callable:
    """Return a wrapper that routes calls of *func* through ``execute``.

    The wrapper keeps the name, docstring and signature of *func*; the
    original body stays reachable as ``wrapper.__wrapped__``.
    """

    @functools.wraps(func)
    def wrapper(self, *args, **kwargs):
        return self.execute(name, types.MethodType(func, self), *args, **kwargs)

    setattr(wrapper, WRAPPED_MARKER, True)
    return wrapper


class APIMeta(type):
    """Metaclass wiring callback registries and request method wrapping."""

    def __new__(mcs, name: str, bases: tuple[type, ...], namespace: dict[str, Any], root: bool = False, **kwargs: Any):
        cls = super().__new__(mcs, name, bases, namespace, **kwargs)
        api_bases = [base for base in bases if isinstance(base, APIMeta)]

        registry = api_bases[0]._callback_registry.derive() if api_bases else CallbackRegistry()
        namespaces: dict[str, Namespace] = {}
        inherited: set[str] = set()
        for index, base in enumerate(api_bases):
            if index:
                registry.merge(base._callback_registry)
            for ns_name, ns in base._namespaces.items():
                namespaces.setdefault(ns_name, ns)
            if not base._root:
                inherited |= base._request_methods

        for attr, value in namespace.items():
            for kind, only in hook_marks(value):
                registry.register(kind, attr, only)
            if isinstance(value, Namespace):
                namespaces[attr] = value

        local = {attr for attr, value in namespace.items() if is_request_candidate(attr, value)}
        request_methods = frozenset() if root else frozenset(local | inherited)

        type.__setattr__(cls, "_root", root)
        type.__setattr__(cls, "_callback_registry", registry)
        type.__setattr__(cls, "_namespaces", namespaces)
        type.__setattr__(cls, "_request_methods", request_methods)

        if not root:
            for attr in sorted(local):
                cls._intercept(attr, namespace[attr])
        return cls

    def __init__(cls, name: str, bases: tuple[type, ...], namespace: dict[str, Any], root: bool = False, **kwargs: Any):
        super().__init__(name, bases, namespace, **kwargs)

    def __setattr__(cls, name: str, value: Any) -> None:
        if cls.__dict__.get("_root") is False and is_request_candidate(name, value) and not is_wrapped(value):
            type.__setattr__(cls, "_request_methods", cls._request_methods | {name})
            cls._intercept(name, value)
            return
        for kind, only in hook_marks(value):
            cls._callback_registry.register(kind, name, only)
        if isinstance(value, Namespace):
            if value.name is None:
                value.__set_name__(cls, name)
            cls._namespaces[name] = value
        super().__setattr__(name, value)

    def _intercept(cls, name: str, func: Callable) -> None:
        """Install the hook wrapper for request method *name* on this class."""
        if name not in cls._request_methods or is_wrapped(func):
            return
        type.__setattr__(cls, name, wrap_request_method(name, func))
        logger.debug("Wrapped request method %s.%s", cls.__qualname__, name)

