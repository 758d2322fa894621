import logging
from typing import Optional, Protocol

from rules_sync.models import Action, ActionKind, ApplyResult, SyncPlan
from rules_sync.utils import backup_file, copy_file, write_text

logger = logging.getLogger(__name__)


class ActionHandler(Protocol):
    def handle(self, action: Action) -> tuple[bool, Optional[str]]: ...


class WriteTextHandler:
    def handle(self, action: Action) -> tuple[bool, Optional[str]]:
        if not isinstance(action.payload, str):
            return False, f"Missing text payload for write action: {action.path}"

        if action.path.exists():
            backup_file(action.path)
        write_text(action.path, action.payload)
        return True, None


class CopyFileHandler:
    def handle(self, action: Action) -> tuple[bool, Optional[str]]:
        if action.source is None:
            return False, f"Missing source for copy action: {action.path}"

        if action.path.exists():
            backup_file(action.path)
        copy_file(action.source, action.path)
        return True, None


class SyncExecutor:
    """Apply planned actions one by one; a failing action does not stop the run."""

    def __init__(self) -> None:
        self.handlers: dict[ActionKind, ActionHandler] = {
            ActionKind.WRITE_TEXT: WriteTextHandler(),
            ActionKind.COPY_FILE: CopyFileHandler(),
        }

    def execute(self, plan: SyncPlan) -> ApplyResult:
        applied = 0
        failed = 0
        failures: list[str] = []

        for action in plan.actions:
            try:
                handler = self.handlers.get(action.kind)
                if handler is None:
                    failed += 1
                    failures.append(f"Unknown action kind: {action.kind.value}")
                    continue

                changed, failure = handler.handle(action)
                if failure is not None:
                    failed += 1
                    failures.append(failure)
                    continue
                if changed:
                    applied += 1
                    logger.debug("Wrote %s", action.path)
            except OSError as exc:
                logger.error("%s failed for %s: %s", action.kind.value, action.path, exc)
                failed += 1
                failures.append(f"{action.kind.value} failed for {action.path}: {exc}")

        return ApplyResult(applied=applied, failed=failed, failures=failures)
