"""Loader configuration store.

Owns the module registry, the global alias table and the path table, and
exposes the only operations that mutate them.
"""

import logging
from collections.abc import Mapping, Sequence
from types import MappingProxyType
from typing import Any

from .mappings import AliasResolver
from .mappings import MappingTable
from .mappings import Resolution
from .registry import Module
from .registry import ModuleFactory
from .registry import ModuleRegistry
from .settings import LoaderSettings

logger = logging.getLogger(__name__)

ContextMap = MappingTable | Mapping[str, Any]


def _as_table(context_map: ContextMap | None) -> MappingTable | None:
    if context_map is None:
        return None
    return MappingTable.from_dict(context_map)


class ConfigStore:
    """Module loader configuration.

    Usage:
        config = ConfigStore({"combine": True})
        config.add_mappings({"liferay": "liferay@1.0.0"})
        config.add_module("liferay@1.0.0")
        config.get_module("liferay")  # -> handle for liferay@1.0.0
    """

    def __init__(
        self,
        cfg: LoaderSettings | Mapping[str, Any] | None = None,
        module_factory: ModuleFactory = Module,
    ):
        """Initialize from a settings record.

        Args:
            cfg: Settings model or plain dict (camelCase or snake_case keys);
                missing keys take their defaults
            module_factory: Callable building a module handle from its name
        """
        if isinstance(cfg, LoaderSettings):
            self._settings = cfg
        else:
            self._settings = LoaderSettings.model_validate(dict(cfg or {}))

        self._maps = MappingTable()
        self._paths: dict[str, str] = {}
        self._resolver = AliasResolver(self._maps)
        self._registry = ModuleRegistry(self._resolver, module_factory)

        if self._settings.maps:
            self.add_mappings(self._settings.maps)
        if self._settings.paths:
            self.add_paths(self._settings.paths)
        for name in self._settings.modules:
            self.add_module(name)

    @property
    def settings(self) -> LoaderSettings:
        return self._settings

    @property
    def explain_resolutions(self) -> bool:
        """Whether to log how module lookups are resolved."""
        return self._settings.explain_resolutions

    @property
    def wait_timeout(self) -> int | float:
        """Time to wait for module script requests to load (ms)."""
        return self._settings.wait_timeout

    @property
    def base_path(self) -> str:
        """Base path modules are retrieved from."""
        return self._settings.base_path

    @property
    def combine(self) -> bool:
        """Whether to combine module requests into combo URLs."""
        return self._settings.combine

    @property
    def url(self) -> str:
        """URL of the module server."""
        return self._settings.url

    @property
    def url_max_length(self) -> int | float:
        """Maximum length of a combo URL; longer requests are split."""
        return self._settings.url_max_length

    @property
    def default_url_params(self) -> dict[str, Any] | None:
        """Parameters added to every module request URL."""
        return self._settings.default_url_params

    @property
    def paths(self) -> dict[str, str]:
        """Registered module paths (a copy)."""
        return dict(self._paths)

    @property
    def mappings(self) -> Mapping[str, Any]:
        """Global alias mappings in their plain configuration shape."""
        return MappingProxyType(self._maps.to_dict())

    def add_module(self, name: str) -> Any:
        """Register a module if needed and return its handle."""
        return self._registry.add(name)

    def add_mappings(self, mappings: ContextMap) -> None:
        """Merge alias mappings into the global table.

        Args:
            mappings: Alias -> replacement string, ``{"value", "exactMatch"}``
                object, or a callable under ``"*"`` for the wildcard handler
        """
        self._maps.update(mappings)
        logger.debug(f"[config:maps] {len(self._maps)} global mappings")

    def add_paths(self, paths: Mapping[str, str]) -> None:
        """Merge module path mappings."""
        self._paths.update(paths)

    def get_modules(self, names: Sequence[str] = ()) -> list[Any]:
        """Return the requested modules in order, or every module if none are named.

        Missing modules are returned as None. Contextual mappings do not
        apply to bulk lookups.
        """
        return self._registry.get_many(names)

    def get_module(self, name: str, context_map: ContextMap | None = None) -> Any:
        """Return the module registered for a name, or None.

        If the name is not registered directly it is resolved through the
        contextual mappings (if any) and then the global mappings, and the
        resolved name is looked up instead.
        """
        if (module := self._registry.lookup(name)) is not None:
            return module

        context_table = _as_table(context_map)

        if not self.explain_resolutions:
            return self._registry.get(name, context_table)

        resolution = self._resolver.explain(name, context_table)
        module = self._registry.lookup(resolution.resolved)
        found = module is not None
        logger.info(
            f"[config:explain] {resolution.describe()} ({'found' if found else 'not found'})",
            extra={
                "event": "module.resolve",
                "requested": resolution.requested,
                "resolved": resolution.resolved,
                "mapped": resolution.mapped,
                "steps": [step.to_dict() for step in resolution.steps],
                "found": found,
            },
        )
        return module

    def resolve(self, name: str, context_map: ContextMap | None = None) -> str:
        """Resolve a module name without touching the registry."""
        return self._resolver.resolve(name, _as_table(context_map))

    def explain(self, name: str, context_map: ContextMap | None = None) -> Resolution:
        """Resolve a module name and report which mappings fired."""
        return self._resolver.explain(name, _as_table(context_map))
