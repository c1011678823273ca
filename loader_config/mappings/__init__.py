"""Alias mapping tables and resolution."""

from .models import DirectEntry
from .models import MappingEntry
from .models import MappingTable
from .models import QualifiedEntry
from .resolver import AliasResolver
from .resolver import MatchStrategy
from .resolver import Resolution
from .resolver import ResolutionStep
from .resolver import resolve_one

__all__ = [
    "AliasResolver",
    "DirectEntry",
    "MappingEntry",
    "MappingTable",
    "MatchStrategy",
    "QualifiedEntry",
    "Resolution",
    "ResolutionStep",
    "resolve_one",
]
