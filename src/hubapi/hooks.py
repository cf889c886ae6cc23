"""Callback descriptors, per-class registries, and the hook runner.

This module provides the three pieces of the before/after request pipeline:

* :class:`CallbackDescriptor` -- an immutable ``{callback, only}`` record
  declared with ``before_request`` / ``after_request``.
* :class:`CallbackRegistry` -- the ordered before/after descriptor lists
  owned by one API class. A subclass starts with a copy of its parent's
  registry taken when the subclass is created.
* :class:`HookRunner` -- runs the applicable before-hooks, the request
  body, then the applicable after-hooks for a single invocation.

The pipeline is fail-fast: an exception from a hook or from the body
aborts the invocation and propagates to the caller unchanged.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Iterable, Optional, Union

from hubapi.output import get_output

if TYPE_CHECKING:
    from hubapi.api.base import API

logger = logging.getLogger(__name__)

BEFORE = "before"
AFTER = "after"
KINDS = (BEFORE, AFTER)

HOOK_MARKER = "__request_hooks__"
"""Attribute set on methods decorated with :func:`before_request` / :func:`after_request`."""

Callback = Union[str, Callable[["API"], Any]]


def _normalize_only(only: Optional[Iterable[str] | str]) -> Optional[frozenset[str]]:
    if only is None:
        return None
    if isinstance(only, str):
        return frozenset([only])
    return frozenset(str(name) for name in only)


@dataclass(frozen=True)
class CallbackDescriptor:
    """A registered before/after hook.

    Attributes:
        callback: Name of a zero-argument method on the API instance, or a
            callable taking the instance.
        only: Request method names the hook applies to. ``None`` means every
            request method of the class and its subclasses.
    """

    callback: Callback
    only: Optional[frozenset[str]] = None

    @classmethod
    def build(cls, callback: Callback, only: Optional[Iterable[str] | str] = None) -> CallbackDescriptor:
        return cls(callback=callback, only=_normalize_only(only))

    def applies_to(self, action_name: str) -> bool:
        """Return True if this hook runs for *action_name*."""
        return self.only is None or action_name in self.only

    @property
    def label(self) -> str:
        if isinstance(self.callback, str):
            return self.callback
        return getattr(self.callback, "__qualname__", repr(self.callback))


@dataclass
class CallbackRegistry:
    """Ordered before/after descriptor lists for a single API class."""

    before: list[CallbackDescriptor] = field(default_factory=list)
    after: list[CallbackDescriptor] = field(default_factory=list)

    def derive(self) -> CallbackRegistry:
        """Return an independent copy for a newly created subclass.

        The copy is taken once; later registrations on this registry are not
        visible through the derived one.
        """
        return CallbackRegistry(before=list(self.before), after=list(self.after))

    def merge(self, other: CallbackRegistry) -> None:
        """Append entries of *other* that are not already present, keeping order."""
        for kind in KINDS:
            target = self.entries(kind)
            for descriptor in other.entries(kind):
                if descriptor not in target:
                    target.append(descriptor)

    def entries(self, kind: str) -> list[CallbackDescriptor]:
        if kind == BEFORE:
            return self.before
        if kind == AFTER:
            return self.after
        raise ValueError(f"Unknown callback kind '{kind}' (expected one of {KINDS})")

    def register(
        self,
        kind: str,
        callback: Callback,
        only: Optional[Iterable[str] | str] = None,
    ) -> CallbackDescriptor:
        """Append a descriptor to the *kind* list and return it."""
        descriptor = CallbackDescriptor.build(callback, only)
        self.entries(kind).append(descriptor)
        logger.debug("Registered %s hook '%s'", kind, descriptor.label)
        return descriptor

    def filter(self, kind: str, action_name: str) -> list[CallbackDescriptor]:
        """Return the *kind* descriptors that apply to *action_name*, in order."""
        return [d for d in self.entries(kind) if d.applies_to(action_name)]


# ------------------------------------------------------------------ #
# Class-body decorators
# ------------------------------------------------------------------ #


def _marker(kind: str, only: Optional[Iterable[str] | str]) -> Callable[[Callable], Callable]:
    def decorate(func: Callable) -> Callable:
        marks = list(getattr(func, HOOK_MARKER, ()))
        marks.append((kind, _normalize_only(only)))
        setattr(func, HOOK_MARKER, tuple(marks))
        return func

    return decorate


def before_request(only: Optional[Iterable[str] | str] = None) -> Callable[[Callable], Callable]:
    """Mark a method as a before-request hook of the class it is defined in.

    Example::

        class Issues(API):
            @before_request(only=["create"])
            def require_login(self):
                ...
    """
    return _marker(BEFORE, only)


def after_request(only: Optional[Iterable[str] | str] = None) -> Callable[[Callable], Callable]:
    """Mark a method as an after-request hook of the class it is defined in."""
    return _marker(AFTER, only)


def hook_marks(func: Any) -> tuple[tuple[str, Optional[frozenset[str]]], ...]:
    """Return the ``(kind, only)`` marks placed on *func* by the decorators."""
    return getattr(func, HOOK_MARKER, ())


# ------------------------------------------------------------------ #
# Runner
# ------------------------------------------------------------------ #


class HookRunner:
    """Executes the before/after hooks of one API instance.

    The runner reads the registry of the instance's class at call time, so
    every invocation sees the hooks registered on that exact class.
    """

    def __init__(self, api: API) -> None:
        self._api = api

    @property
    def registry(self) -> CallbackRegistry:
        return type(self._api).callback_registry()

    def run(self, action_name: str, body: Callable[[], Any]) -> Any:
        """Run before-hooks, *body*, then after-hooks, returning the body result.

        Args:
            action_name: Logical request method name used to filter hooks.
            body: Zero-argument callable executing the request method body.

        Returns:
            Whatever *body* returns.
        """
        self._run_kind(BEFORE, action_name)
        result = body()
        self._run_kind(AFTER, action_name)
        return result

    def _run_kind(self, kind: str, action_name: str) -> None:
        output = get_output()
        for descriptor in self.registry.filter(kind, action_name):
            output.debug(f"{kind} hook {descriptor.label} -> {action_name}")
            self._invoke(descriptor.callback)

    def _invoke(self, callback: Callback) -> Any:
        if isinstance(callback, str):
            return getattr(self._api, callback)()
        return callback(self._api)
