"""Repository listing canonical rule documents."""

from __future__ import annotations

from pathlib import Path

from rules_sync.constants import SOURCE_SUFFIX
from rules_sync.rules.models import RuleDocument
from rules_sync.rules.parser import parse_rule


class RulesRepository:
    def __init__(self, rules_dir: Path, suffix: str = SOURCE_SUFFIX) -> None:
        self._rules_dir = rules_dir
        self._suffix = suffix

    @property
    def rules_dir(self) -> Path:
        return self._rules_dir

    def exists(self) -> bool:
        return self._rules_dir.is_dir()

    def list_paths(self) -> list[Path]:
        """Rule files under the rules dir, sorted by relative path."""
        if not self.exists():
            return []
        paths = [
            child
            for child in self._rules_dir.rglob(f"*{self._suffix}")
            if child.is_file() and not child.name.startswith(".")
        ]
        return sorted(paths, key=self.relative_key)

    def list_rules(self) -> list[RuleDocument]:
        return [parse_rule(path) for path in self.list_paths()]

    def relative_key(self, path: Path) -> str:
        return path.relative_to(self._rules_dir).as_posix()
