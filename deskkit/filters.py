"""Parsing for ``Description|pattern`` file dialog filters."""

from __future__ import annotations

from dataclasses import dataclass
from fnmatch import fnmatch

_MATCH_ALL = {"*", "*.*"}


@dataclass(frozen=True, slots=True)
class FileFilter:
    """One selectable entry of a file dialog filter."""

    description: str
    patterns: tuple[str, ...]

    @property
    def matches_all(self) -> bool:
        return any(pattern in _MATCH_ALL for pattern in self.patterns)

    def matches(self, name: str) -> bool:
        """Return True when a file name passes this filter (case-insensitive)."""

        if self.matches_all:
            return True
        lowered = name.lower()
        return any(fnmatch(lowered, pattern.lower()) for pattern in self.patterns)


def parse_filter(text: str) -> tuple[FileFilter, ...]:
    """Split ``"Images|*.png;*.jpg|All files|*.*"`` into filter entries."""

    parts = text.split("|")
    if len(parts) % 2:
        raise ValueError(f"Filter needs description|pattern pairs: {text!r}")
    filters: list[FileFilter] = []
    for description, raw_patterns in zip(parts[::2], parts[1::2]):
        patterns = tuple(p.strip() for p in raw_patterns.split(";") if p.strip())
        if not description.strip() or not patterns:
            raise ValueError(f"Filter entry is missing a description or pattern: {text!r}")
        filters.append(FileFilter(description=description.strip(), patterns=patterns))
    return tuple(filters)


__all__ = ["FileFilter", "parse_filter"]
