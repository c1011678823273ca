"""Mapping table data models.

Defines the types alias rules are stored as:
- DirectEntry: plain replacement string
- QualifiedEntry: replacement string plus an exact-match flag
- MappingTable: ordered alias table with an optional wildcard handler
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any, Callable

logger = logging.getLogger(__name__)

WILDCARD_KEY = "*"

# Wildcard handlers receive the requested name and may return a replacement
WildcardHandler = Callable[[str], "str | None"]


@dataclass(frozen=True)
class DirectEntry:
    """Alias that always rewrites the matched prefix.

    Attributes:
        value: Replacement module name
    """

    value: str

    exact_match = False

    def to_raw(self) -> str:
        """Serialize to the plain configuration shape."""
        return self.value


@dataclass(frozen=True)
class QualifiedEntry:
    """Alias carrying an explicit exact-match flag.

    Attributes:
        value: Replacement module name
        exact_match: Only apply when the request equals the alias
    """

    value: str
    exact_match: bool = False

    def to_raw(self) -> dict[str, Any]:
        """Serialize to the plain configuration shape."""
        return {"value": self.value, "exactMatch": self.exact_match}


MappingEntry = DirectEntry | QualifiedEntry


def decode_entry(raw: Any) -> MappingEntry | None:
    """Decode a raw configuration value into a mapping entry.

    Returns None for values that are neither a string nor an object
    carrying a string ``value``.
    """
    if isinstance(raw, (DirectEntry, QualifiedEntry)):
        return raw
    if isinstance(raw, str):
        return DirectEntry(raw)
    if isinstance(raw, Mapping):
        value = raw.get("value")
        if not isinstance(value, str) or not value:
            return None
        exact = raw.get("exactMatch", raw.get("exact_match", False))
        return QualifiedEntry(value=value, exact_match=bool(exact))
    return None


class MappingTable:
    """Ordered alias table.

    Aliases are kept in insertion order because the exact and partial
    passes return the first match they find. The wildcard handler lives
    outside the alias namespace, so a literal ``"*"`` string alias is
    just another alias.
    """

    def __init__(
        self,
        entries: Mapping[str, Any] | None = None,
        wildcard: WildcardHandler | None = None,
    ) -> None:
        self._entries: dict[str, MappingEntry] = {}
        self.wildcard: WildcardHandler | None = wildcard
        if entries:
            self.update(entries)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | MappingTable | None) -> MappingTable:
        """Create from a plain mapping, or return an existing table unchanged."""
        if isinstance(data, MappingTable):
            return data
        return cls(data)

    def update(self, entries: Mapping[str, Any] | MappingTable) -> None:
        """Shallow-merge entries into the table.

        Existing aliases are overwritten in place and keep their position;
        new aliases are appended in the order given. A malformed value
        still replaces what was there, so the alias stops mapping. The
        ``"*"`` key holds either the wildcard handler or a plain alias,
        never both.
        """
        if isinstance(entries, MappingTable):
            self._entries.update(entries._entries)
            if WILDCARD_KEY in entries._entries:
                self.wildcard = None
            if entries.wildcard is not None:
                self._entries.pop(WILDCARD_KEY, None)
                self.wildcard = entries.wildcard
            return

        for alias, raw in entries.items():
            if alias == WILDCARD_KEY:
                if callable(raw):
                    self._entries.pop(WILDCARD_KEY, None)
                    self.wildcard = raw
                    continue
                self.wildcard = None

            entry = decode_entry(raw)
            if entry is None:
                logger.debug(f"[alias:decode] dropping malformed mapping for '{alias}': {raw!r}")
                self._entries.pop(alias, None)
                continue
            self._entries[alias] = entry

    def get(self, alias: str) -> MappingEntry | None:
        return self._entries.get(alias)

    def items(self) -> Iterator[tuple[str, MappingEntry]]:
        return iter(self._entries.items())

    def aliases(self) -> list[str]:
        return list(self._entries)

    def to_dict(self) -> dict[str, Any]:
        """Serialize aliases to the plain configuration shape (wildcard excluded)."""
        return {alias: entry.to_raw() for alias, entry in self._entries.items()}

    def __contains__(self, alias: object) -> bool:
        return alias in self._entries

    def __len__(self) -> int:
        return len(self._entries) + (1 if self.wildcard is not None else 0)

    def __repr__(self) -> str:
        wildcard = ", wildcard" if self.wildcard is not None else ""
        return f"MappingTable({self.to_dict()!r}{wildcard})"
