from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Any, Optional


class ActionKind(str, Enum):
    WRITE_TEXT = "write_text"
    COPY_FILE = "copy_file"


class ActionStatus(str, Enum):
    CREATE = "create"
    UPDATE = "update"


class SyncTarget(str, Enum):
    CURSOR = "cursor"
    GITHUB = "github"
    CLAUDE = "claude"
    GEMINI = "gemini"
    DOCS = "docs"

    @classmethod
    def parse(cls, value: str) -> Optional["SyncTarget"]:
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


DEFAULT_TARGETS: tuple[str, ...] = tuple(target.value for target in SyncTarget)


@dataclass
class Action:
    kind: ActionKind
    path: Path
    status: ActionStatus
    detail: str
    source: Optional[Path] = None
    payload: Optional[Any] = None
    target: Optional[str] = None


@dataclass(frozen=True)
class RunStats:
    processed: int = 0
    converted: int = 0
    skipped: int = 0
    errors: int = 0

    def __add__(self, other: "RunStats") -> "RunStats":
        return RunStats(
            processed=self.processed + other.processed,
            converted=self.converted + other.converted,
            skipped=self.skipped + other.skipped,
            errors=self.errors + other.errors,
        )

    def bump(self, **counts: int) -> "RunStats":
        return replace(
            self, **{key: getattr(self, key) + value for key, value in counts.items()}
        )

    def as_dict(self) -> dict[str, int]:
        return {
            "processed": self.processed,
            "converted": self.converted,
            "skipped": self.skipped,
            "errors": self.errors,
        }


@dataclass
class SyncPlan:
    actions: list[Action] = field(default_factory=list)
    errors: list[Exception] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    stats: RunStats = field(default_factory=RunStats)

    def is_valid(self) -> bool:
        return not self.errors

    def merge(self, other: "SyncPlan") -> "SyncPlan":
        return SyncPlan(
            actions=[*self.actions, *other.actions],
            errors=[*self.errors, *other.errors],
            skipped=[*self.skipped, *other.skipped],
            stats=self.stats + other.stats,
        )

    def targets(self) -> list[str]:
        seen: list[str] = []
        for action in self.actions:
            if action.target is not None and action.target not in seen:
                seen.append(action.target)
        return seen


@dataclass(frozen=True)
class ApplyResult:
    applied: int
    failed: int
    failures: list[str]
