"""Module registry keyed by registered module name.

Handles are created only through ``add``. Lookups that miss fall back to
alias resolution once, and never create entries.
"""

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Callable

from .mappings import AliasResolver
from .mappings import MappingTable

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class Module:
    """Opaque handle for a registered module.

    Identity matters: the registry hands out the same instance for a name
    for the life of the registry.
    """

    name: str


ModuleFactory = Callable[[str], object]


class ModuleRegistry:
    """Registry of module handles in creation order."""

    def __init__(self, resolver: AliasResolver, module_factory: ModuleFactory = Module):
        """Initialize registry.

        Args:
            resolver: Resolver consulted when a name is not registered directly
            module_factory: Callable building a handle from a module name
        """
        self._modules: dict[str, object] = {}
        self._resolver = resolver
        self._module_factory = module_factory

    def add(self, name: str) -> object:
        """Return the handle for a name, creating it on first use."""
        module = self._modules.get(name)
        if module is None:
            module = self._module_factory(name)
            self._modules[name] = module
            logger.debug(f"[registry:add] {name}")
        return module

    def get(self, name: str, context_table: MappingTable | None = None) -> object | None:
        """Look up a module, resolving aliases if the name is not registered.

        Args:
            name: Requested module name
            context_table: Mappings scoped to the current load operation

        Returns:
            The module handle, or None if neither the name nor its
            resolved form is registered
        """
        module = self.lookup(name)
        if module is None:
            module = self.lookup(self._resolver.resolve(name, context_table))
        return module

    def lookup(self, name: str) -> object | None:
        """Return the handle registered under exactly this name, without resolving."""
        return self._modules.get(name)

    def get_many(self, names: Sequence[str]) -> list[object | None]:
        """Look up several modules, or all of them when ``names`` is empty.

        Bulk lookups never apply a contextual table.
        """
        if names:
            return [self.get(name) for name in names]
        return list(self._modules.values())

    def names(self) -> list[str]:
        return list(self._modules)

    def __contains__(self, name: object) -> bool:
        return name in self._modules

    def __len__(self) -> int:
        return len(self._modules)

    def __iter__(self) -> Iterator[object]:
        return iter(self._modules.values())
