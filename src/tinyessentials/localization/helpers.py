"""Helper registry and the read-only facade handed to helper code.

Helpers are plain callables registered by name. Entries reference them
either directly (callable leaves, in-memory only) or by name through a
HelperReference (``{"$fn": name}``), which keeps file-backed resources
pure data.

Architecture:
    - HelperRegistry: Manages registration, lookup and dict-like introspection
    - HelperFacade: Read-only view (has/call) exposed to helper and callable
      entries so they can compose other helpers without mutating the registry

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Mapping
from typing import Any

from tinyessentials.diagnostics import ErrorTemplate, UnknownHelperError
from tinyessentials.localization.types import Helper, HelperName

__all__ = ["HelperFacade", "HelperRegistry"]

logger = logging.getLogger(__name__)


class HelperRegistry:
    """Name → callable registry for translation helpers.

    Supports dict-like introspection:
        - list_helpers(): List all registered helper names
        - __iter__: Iterate over helper names
        - __len__: Count registered helpers
        - __contains__: Check if helper exists (supports 'in' operator)

    Example:
        >>> registry = HelperRegistry()
        >>> registry.register("upper", lambda params, helpers: params["text"].upper())
        >>> "upper" in registry
        True
        >>> len(registry)
        1
    """

    __slots__ = ("_helpers",)

    def __init__(self) -> None:
        """Initialize empty helper registry."""
        self._helpers: dict[HelperName, Helper] = {}

    def register(self, name: HelperName, func: Helper) -> None:
        """Register (or replace) a helper.

        Args:
            name: Non-empty helper name
            func: Callable taking (params, helpers)

        Raises:
            TypeError: If name is not a non-empty string or func is not callable
        """
        if not isinstance(name, str) or not name:
            msg = "register_helper: 'name' must be a non-empty string"
            raise TypeError(msg)
        if not callable(func):
            msg = "register_helper: 'fn' must be callable"
            raise TypeError(msg)
        if name in self._helpers:
            logger.debug("Replacing helper: %s", name)
        self._helpers[name] = func
        logger.debug("Registered helper: %s", name)

    def unregister(self, name: HelperName) -> bool:
        """Remove a helper.

        Returns:
            True if the helper was registered
        """
        removed = self._helpers.pop(name, None) is not None
        if removed:
            logger.debug("Unregistered helper: %s", name)
        return removed

    def get(self, name: HelperName) -> Helper | None:
        """Return the helper registered under name, or None."""
        return self._helpers.get(name)

    def has(self, name: HelperName) -> bool:
        """Check if helper is registered."""
        return name in self._helpers

    def list_helpers(self) -> list[HelperName]:
        """List all registered helper names in registration order."""
        return list(self._helpers)

    def facade(self) -> HelperFacade:
        """Return a read-only view over this registry."""
        return HelperFacade(self)

    def __iter__(self) -> Iterator[HelperName]:
        return iter(self._helpers)

    def __len__(self) -> int:
        return len(self._helpers)

    def __contains__(self, name: object) -> bool:
        return name in self._helpers

    def __repr__(self) -> str:
        """Return string representation for debugging.

        Example:
            >>> repr(HelperRegistry())
            'HelperRegistry(helpers=0)'
        """
        return f"HelperRegistry(helpers={len(self._helpers)})"


class HelperFacade:
    """Read-only helper access for code running inside entries.

    The facade observes the live registry, so helpers registered after the
    facade was created are visible. Calling an unknown helper always raises
    UnknownHelperError: inside user code, failures are the user's to handle,
    independent of the translator's strict flag.
    """

    __slots__ = ("_registry",)

    def __init__(self, registry: HelperRegistry) -> None:
        self._registry = registry

    def has(self, name: HelperName) -> bool:
        """Check if a helper with the given name is registered."""
        return self._registry.has(name)

    def call(
        self,
        name: HelperName,
        arg: Any,
        extras: Mapping[str, Any] | None = None,
    ) -> Any:
        """Invoke a helper by name.

        The helper receives ``arg`` in place of params and ``extras`` (or an
        empty dict) in place of the facade.

        Raises:
            UnknownHelperError: If no helper is registered under name
        """
        func: Callable[..., Any] | None = self._registry.get(name)
        if func is None:
            raise UnknownHelperError(ErrorTemplate.helper_not_found(name), helper_name=name)
        return func(arg, dict(extras) if extras is not None else {})

    def __repr__(self) -> str:
        return f"HelperFacade(helpers={len(self._registry)})"
