"""Namespace declaration and lazy construction of scoped sub-APIs.

A namespace groups related request methods behind an accessor on the parent
client::

    class Repos(API):
        commits = Namespace()          # -> Repos.Commits

    repos = Repos(user="octocat")
    repos.commits(per_page=10).list()
    repos.commits.list()               # same as repos.commits().list()

Calling the accessor builds a fresh instance of the target class whose
option store is the parent's current snapshot merged with the per-call
overrides. The target class is located by its fully qualified name and
imported on first use, so namespaces may point at classes defined later in
the module or in modules that are not imported yet.
"""

from __future__ import annotations

import importlib
import logging
from typing import TYPE_CHECKING, Any, Callable, Optional, Union

from hubapi.exceptions import InvalidArgumentError

if TYPE_CHECKING:
    from hubapi.api.base import API

logger = logging.getLogger(__name__)


def extract_class_name(name: str, owner: Optional[type] = None, root: bool = False) -> str:
    """Build the fully qualified target class name for namespace *name*.

    Underscore-delimited segments are capitalized and joined
    (``pull_requests`` -> ``PullRequests``). Unless *root* is set the result
    is qualified under *owner* (``pkg.mod.Repos.PullRequests``); otherwise
    it is placed at *owner*'s module level (``pkg.mod.PullRequests``).
    """
    converted = "".join(part.capitalize() for part in str(name).split("_"))
    if owner is None:
        return converted
    if root:
        return f"{owner.__module__}.{converted}"
    return f"{owner.__module__}.{owner.__qualname__}.{converted}"


class Factory:
    """Resolves class names and instantiates API classes with given options."""

    @staticmethod
    def resolve(target: Union[str, type]) -> type:
        """Return the class named by *target*.

        *target* is either a class or a dotted path. The longest importable
        module prefix is imported and the remaining segments are looked up as
        attributes, which supports nested classes (``pkg.mod.Outer.Inner``).
        A ``module:Qualname`` form is accepted as well.

        Raises:
            InvalidArgumentError: If the name cannot be resolved to a class.
        """
        if isinstance(target, type):
            return target
        if ":" in target:
            module_name, _, qualname = target.partition(":")
            return Factory._walk(importlib.import_module(module_name), qualname.split("."), target)

        parts = target.split(".")
        for index in range(len(parts) - 1, 0, -1):
            module_name = ".".join(parts[:index])
            try:
                module = importlib.import_module(module_name)
            except ModuleNotFoundError:
                continue
            return Factory._walk(module, parts[index:], target)
        raise InvalidArgumentError(f"Cannot resolve API class '{target}'")

    @staticmethod
    def _walk(obj: Any, attrs: list[str], target: str) -> type:
        for attr in attrs:
            try:
                obj = getattr(obj, attr)
            except AttributeError:
                raise InvalidArgumentError(f"Cannot resolve API class '{target}'") from None
        if not isinstance(obj, type):
            raise InvalidArgumentError(f"'{target}' does not name a class")
        return obj

    @staticmethod
    def create(
        target: Union[str, type],
        options: Optional[dict[str, Any]] = None,
        configure: Optional[Callable[[API], Any]] = None,
    ) -> API:
        """Instantiate the class named by *target* with *options*."""
        api_class = Factory.resolve(target)
        return api_class(dict(options or {}), configure=configure)


class Namespace:
    """Descriptor declaring a lazily constructed sub-API accessor.

    Args:
        target: Explicit target class or dotted name. When omitted the name
            is derived from the attribute name (or *full_name*).
        root: Place the derived target at module level instead of nesting it
            under the declaring class.
        full_name: Name to derive the target from instead of the attribute
            name.
    """

    def __init__(
        self,
        target: Union[str, type, None] = None,
        *,
        root: bool = False,
        full_name: Optional[str] = None,
    ) -> None:
        self._target = target
        self.root = root
        self.full_name = full_name
        self.name: Optional[str] = None
        self.owner: Optional[type] = None

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name
        self.owner = owner
        if self._target is None:
            self._target = extract_class_name(self.full_name or name, owner, self.root)
        logger.debug("Namespace '%s' on %s -> %s", name, owner.__qualname__, self.target_name)

    @property
    def target(self) -> Union[str, type, None]:
        return self._target

    @property
    def target_name(self) -> str:
        if isinstance(self._target, type):
            return f"{self._target.__module__}.{self._target.__qualname__}"
        return str(self._target)

    def __get__(self, instance: Optional[API], owner: type) -> Any:
        if instance is None:
            return self
        return _NamespaceAccessor(self, instance)

    def build(
        self,
        parent: API,
        options: Optional[dict[str, Any]] = None,
        configure: Optional[Callable[[API], Any]] = None,
    ) -> API:
        """Create the target API seeded with *parent*'s current options."""
        if self._target is None:
            raise InvalidArgumentError("Namespace has no target; assign it to a class attribute")
        merged = {**parent.current_options, **(options or {})}
        return Factory.create(self._target, merged, configure)


class _NamespaceAccessor:
    """Callable returned when a namespace is read from an instance.

    Calling it builds a child with per-call overrides. Reading any other
    public attribute builds a child with the parent's options only and
    returns that attribute of it.
    """

    __slots__ = ("_namespace", "_parent")

    def __init__(self, namespace: Namespace, parent: API) -> None:
        self._namespace = namespace
        self._parent = parent

    def __call__(
        self,
        options: Optional[dict[str, Any]] = None,
        configure: Optional[Callable[[API], Any]] = None,
        **overrides: Any,
    ) -> API:
        merged = {**(options or {}), **overrides}
        return self._namespace.build(self._parent, merged, configure)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        return getattr(self(), name)

    def __repr__(self) -> str:
        return f"<namespace {self._namespace.name} -> {self._namespace.target_name}>"
