"""Alias resolution.

Resolution order within one table (first match wins):
1. Direct key hit (entry keyed exactly by the name, flags ignored)
2. Exact-match entries
3. Partial-match entries (alias equals the name or is a path prefix of it)
4. Wildcard handler
5. The name itself

A contextual table, when given, is applied first and its result is then
offered to the global table.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .models import MappingTable

logger = logging.getLogger(__name__)


class MatchStrategy(str, Enum):
    """Which rule produced a resolution step."""

    DIRECT = "direct"
    EXACT = "exact"
    PARTIAL = "partial"
    WILDCARD = "wildcard"
    IDENTITY = "identity"


@dataclass
class ResolutionStep:
    """Outcome of resolving a name against one table.

    Attributes:
        scope: Which table was consulted ("context" or "global")
        strategy: Rule that produced the output
        requested: Name offered to the table
        resolved: Name the table returned
        alias: Alias that matched (None for wildcard and identity)
    """

    scope: str
    strategy: MatchStrategy
    requested: str
    resolved: str
    alias: str | None = None

    @property
    def mapped(self) -> bool:
        return self.strategy != MatchStrategy.IDENTITY

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "scope": self.scope,
            "strategy": self.strategy.value,
            "requested": self.requested,
            "resolved": self.resolved,
            "alias": self.alias,
        }


@dataclass
class Resolution:
    """Full account of how a module name was resolved."""

    requested: str
    resolved: str
    steps: list[ResolutionStep] = field(default_factory=list)

    @property
    def mapped(self) -> bool:
        """Whether any table actually rewrote the name."""
        return any(step.mapped for step in self.steps)

    def describe(self) -> str:
        if not self.steps:
            return f"'{self.requested}' not mapped (no tables)"
        parts = []
        for step in self.steps:
            via = f" via '{step.alias}'" if step.alias is not None else ""
            parts.append(f"{step.scope}: '{step.requested}' -> '{step.resolved}' ({step.strategy.value}{via})")
        return "; ".join(parts)


def _match_direct(name: str, table: MappingTable) -> tuple[str, str] | None:
    entry = table.get(name)
    if entry is not None and entry.value:
        return entry.value, name
    return None


def _match_exact(name: str, table: MappingTable) -> tuple[str, str] | None:
    for alias, entry in table.items():
        if not entry.exact_match:
            continue
        if alias == name:
            return entry.value, alias
    return None


def _match_partial(name: str, table: MappingTable) -> tuple[str, str] | None:
    for alias, entry in table.items():
        if entry.exact_match:
            continue
        if name == alias or name.startswith(alias + "/"):
            result = entry.value + name[len(alias) :]
            # An empty rewrite counts as no match
            if result:
                return result, alias
            return None
    return None


def _match_wildcard(name: str, table: MappingTable) -> str | None:
    if table.wildcard is None:
        return None
    result = table.wildcard(name)
    if isinstance(result, str) and result:
        return result
    return None


def resolve_step(name: str, table: MappingTable, scope: str = "global") -> ResolutionStep:
    """Resolve a name against a single table, recording which rule fired."""
    if hit := _match_direct(name, table):
        return ResolutionStep(scope, MatchStrategy.DIRECT, name, hit[0], hit[1])

    if hit := _match_exact(name, table):
        return ResolutionStep(scope, MatchStrategy.EXACT, name, hit[0], hit[1])

    if hit := _match_partial(name, table):
        return ResolutionStep(scope, MatchStrategy.PARTIAL, name, hit[0], hit[1])

    if (result := _match_wildcard(name, table)) is not None:
        return ResolutionStep(scope, MatchStrategy.WILDCARD, name, result)

    return ResolutionStep(scope, MatchStrategy.IDENTITY, name, name)


def resolve_one(name: str, table: MappingTable) -> str:
    """Resolve a name against a single table. Always returns a string."""
    return resolve_step(name, table).resolved


class AliasResolver:
    """Chains contextual resolution into global resolution."""

    def __init__(self, global_table: MappingTable):
        self.global_table = global_table

    def resolve(self, name: str, context_table: MappingTable | None = None) -> str:
        """Resolve a module name to the name it should be registered under."""
        return self.explain(name, context_table).resolved

    def explain(self, name: str, context_table: MappingTable | None = None) -> Resolution:
        """Resolve a module name and report every step taken."""
        resolution = Resolution(requested=name, resolved=name)

        if context_table is not None:
            step = resolve_step(resolution.resolved, context_table, scope="context")
            resolution.steps.append(step)
            resolution.resolved = step.resolved

        if self.global_table:
            step = resolve_step(resolution.resolved, self.global_table, scope="global")
            resolution.steps.append(step)
            resolution.resolved = step.resolved

        if resolution.mapped:
            logger.debug(f"[alias:resolve] {name} -> {resolution.resolved}")

        return resolution
