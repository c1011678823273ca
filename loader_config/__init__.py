"""Module loader configuration and alias resolution."""

from .config import ConfigStore
from .mappings import AliasResolver
from .mappings import MappingTable
from .mappings import Resolution
from .mappings import resolve_one
from .registry import Module
from .registry import ModuleRegistry
from .settings import LoaderSettings
from .settings import SettingsError
from .settings import load_settings

__all__ = [
    "AliasResolver",
    "ConfigStore",
    "LoaderSettings",
    "MappingTable",
    "Module",
    "ModuleRegistry",
    "Resolution",
    "SettingsError",
    "load_settings",
    "resolve_one",
]
