"""Rule data models."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from rules_sync.constants import ALL_FILES_TOKEN, HEADER_SEPARATOR, NO_FILES_TOKEN


@dataclass(frozen=True)
class HeaderLine:
    """One line of a header block.

    ``key`` is ``None`` for lines that do not have the ``key: value`` shape;
    ``raw`` is always the line exactly as it appeared in the source.
    """

    raw: str
    key: Optional[str] = None
    value: str = ""


@dataclass(frozen=True)
class RuleDocument:
    source_path: Path
    header: tuple[HeaderLine, ...] = ()
    body: tuple[str, ...] = ()
    has_header: bool = False

    @property
    def name(self) -> str:
        return self.source_path.name

    @property
    def stem(self) -> str:
        return self.source_path.stem

    def get(self, key: str) -> Optional[str]:
        for line in self.header:
            if line.key == key:
                return line.value
        return None

    def source_lines(self) -> list[str]:
        """Rebuild the document lines, header block included."""
        if not self.has_header:
            return list(self.body)
        lines = [HEADER_SEPARATOR]
        lines.extend(line.raw for line in self.header)
        lines.append(HEADER_SEPARATOR)
        lines.extend(self.body)
        return lines


@dataclass(frozen=True)
class PatternList:
    """List-form scope: the ``globs`` + ``alwaysApply`` pair."""

    patterns: tuple[str, ...] = field(default_factory=tuple)
    always: bool = False


class Scope(ABC):
    """Merged-form scope, rendered as a single ``applyTo`` string."""

    @abstractmethod
    def render(self) -> str:
        """Return the ``applyTo`` value (unquoted)."""


@dataclass(frozen=True)
class AllFiles(Scope):
    def render(self) -> str:
        return ALL_FILES_TOKEN


@dataclass(frozen=True)
class NoFiles(Scope):
    def render(self) -> str:
        return NO_FILES_TOKEN


@dataclass(frozen=True)
class SinglePattern(Scope):
    pattern: str

    def render(self) -> str:
        return self.pattern


@dataclass(frozen=True)
class JoinedPatterns(Scope):
    patterns: tuple[str, ...]

    def render(self) -> str:
        return ",".join(self.patterns)


@dataclass(frozen=True)
class Section:
    identifier: str
    title: str
    body: tuple[str, ...] = ()

    def heading(self, level: int) -> str:
        marks = "#" * level
        if self.identifier:
            return f"{marks} [{self.identifier}] {self.title}"
        return f"{marks} {self.title}"


@dataclass(frozen=True)
class AggregatedDocument:
    scaffold: tuple[str, ...]
    sections: tuple[Section, ...] = ()
