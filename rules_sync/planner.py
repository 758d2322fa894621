import logging
from pathlib import Path
from typing import Optional, Sequence

from rules_sync.config import SyncConfig
from rules_sync.constants import (
    CLAUDE_FILENAME,
    CURSOR_RULES_DIR,
    CURSOR_SUFFIX,
    DOC_FILENAMES,
    GEMINI_FILENAME,
    GITHUB_INSTRUCTIONS_DIR,
    README_FILENAME,
)
from rules_sync.errors import MissingSourceDirError, SyncFileError, TemplateNotFoundError
from rules_sync.models import Action, ActionKind, ActionStatus, RunStats, SyncPlan, SyncTarget
from rules_sync.rules.aggregator import DocumentAggregator
from rules_sync.rules.compilers import CopilotRuleCompiler
from rules_sync.rules.fences import balance_fences
from rules_sync.rules.models import RuleDocument
from rules_sync.rules.parser import parse_rule
from rules_sync.rules.repository import RulesRepository

logger = logging.getLogger(__name__)


def _status_for(path: Path) -> ActionStatus:
    return ActionStatus.UPDATE if path.exists() else ActionStatus.CREATE


class _BasePlanner:
    def __init__(
        self,
        config: SyncConfig,
        compiler: Optional[CopilotRuleCompiler] = None,
    ) -> None:
        self.config = config
        self.compiler = compiler or CopilotRuleCompiler(
            default_scope=config.default_scope
        )

    def _load_documents(
        self, repository: RulesRepository
    ) -> tuple[list[RuleDocument], SyncPlan]:
        documents: list[RuleDocument] = []
        failures = SyncPlan()
        for path in repository.list_paths():
            try:
                documents.append(parse_rule(path))
            except (OSError, UnicodeDecodeError) as exc:
                logger.error("Cannot read rule %s: %s", path, exc)
                failures.errors.append(SyncFileError(path, f"Cannot read rule ({exc})"))
                failures.stats = failures.stats.bump(processed=1, errors=1)
        return documents, failures

    def _copy_readme(
        self, asset: Path, target_dir: Path, target: str, only_if_missing: bool = False
    ) -> SyncPlan:
        destination = target_dir / README_FILENAME
        if not asset.is_file():
            logger.warning("README asset not found: %s", asset)
            return SyncPlan()
        if only_if_missing and destination.exists():
            return SyncPlan()
        return SyncPlan(
            actions=[
                Action(
                    ActionKind.COPY_FILE,
                    destination,
                    _status_for(destination),
                    "copy README from assets",
                    source=asset,
                    target=target,
                )
            ]
        )

    def _compile_rule(
        self, document: RuleDocument, destination_dir: Path, target: str
    ) -> SyncPlan:
        compiled = self.compiler.compile(document)
        destination = destination_dir / compiled.filename
        action = Action(
            ActionKind.WRITE_TEXT,
            destination,
            _status_for(destination),
            "placeholder for auto-generated rule"
            if compiled.skipped
            else "rewrite header to applyTo",
            source=document.source_path,
            payload=compiled.content,
            target=target,
        )
        if compiled.skipped:
            return SyncPlan(
                actions=[action],
                skipped=[f"Auto-generated rule skipped: {document.source_path}"],
                stats=RunStats(processed=1, skipped=1),
            )
        return SyncPlan(actions=[action], stats=RunStats(processed=1, converted=1))


class SyncPlanner(_BasePlanner):
    """Plan the generation of every requested target from the canonical rules."""

    def __init__(
        self,
        config: SyncConfig,
        repository: Optional[RulesRepository] = None,
        compiler: Optional[CopilotRuleCompiler] = None,
        aggregator: Optional[DocumentAggregator] = None,
    ) -> None:
        super().__init__(config, compiler=compiler)
        self.repository = repository or RulesRepository(config.source_dir)
        self.aggregator = aggregator or DocumentAggregator()

    def build(self, targets: Optional[Sequence[str]] = None) -> SyncPlan:
        if not self.repository.exists():
            raise MissingSourceDirError(self.repository.rules_dir)

        documents, plan = self._load_documents(self.repository)
        for name in targets if targets is not None else self.config.targets:
            target = SyncTarget.parse(name)
            if target is None:
                logger.warning("Unknown target: %s (skipping)", name)
                plan = plan.merge(
                    SyncPlan(
                        skipped=[f"Unknown target: {name}"],
                        stats=RunStats(skipped=1),
                    )
                )
                continue
            logger.info("Planning target: %s", target.value)
            plan = plan.merge(self.plan_target(target, documents))
        return plan

    def plan_target(self, target: SyncTarget, documents: list[RuleDocument]) -> SyncPlan:
        if target == SyncTarget.CURSOR:
            return self._plan_cursor(documents)
        if target == SyncTarget.GITHUB:
            return self._plan_github(documents)
        if target == SyncTarget.CLAUDE:
            return self._plan_aggregate(target, CLAUDE_FILENAME, documents)
        if target == SyncTarget.GEMINI:
            return self._plan_aggregate(target, GEMINI_FILENAME, documents)
        return self._plan_docs()

    def _plan_cursor(self, documents: list[RuleDocument]) -> SyncPlan:
        target_dir = self.config.project_root / CURSOR_RULES_DIR
        plan = self._copy_readme(
            self.config.assets_dir / CURSOR_RULES_DIR / README_FILENAME,
            target_dir,
            SyncTarget.CURSOR.value,
        )
        for document in documents:
            destination = target_dir / f"{document.stem}{CURSOR_SUFFIX}"
            plan = plan.merge(
                SyncPlan(
                    actions=[
                        Action(
                            ActionKind.COPY_FILE,
                            destination,
                            _status_for(destination),
                            "copy rule",
                            source=document.source_path,
                            target=SyncTarget.CURSOR.value,
                        )
                    ],
                    stats=RunStats(processed=1, converted=1),
                )
            )
        return plan

    def _plan_github(self, documents: list[RuleDocument]) -> SyncPlan:
        target_dir = self.config.project_root / GITHUB_INSTRUCTIONS_DIR
        plan = self._copy_readme(
            self.config.assets_dir / GITHUB_INSTRUCTIONS_DIR / README_FILENAME,
            target_dir,
            SyncTarget.GITHUB.value,
        )
        for document in documents:
            plan = plan.merge(
                self._compile_rule(document, target_dir, SyncTarget.GITHUB.value)
            )
        return plan

    def _plan_aggregate(
        self, target: SyncTarget, filename: str, documents: list[RuleDocument]
    ) -> SyncPlan:
        template = self.config.assets_dir / filename
        if not template.is_file():
            error = TemplateNotFoundError(template, target.value)
            logger.error("%s", error)
            return SyncPlan(errors=[error], stats=RunStats(errors=1))

        if not documents:
            logger.warning("No rule files found in %s", self.repository.rules_dir)

        destination = self.config.project_root / filename
        content = self.aggregator.compile(
            documents, template.read_text(encoding="utf-8")
        )
        return SyncPlan(
            actions=[
                Action(
                    ActionKind.WRITE_TEXT,
                    destination,
                    _status_for(destination),
                    f"aggregate {len(documents)} rules",
                    source=template,
                    payload=content,
                    target=target.value,
                )
            ],
            stats=RunStats(processed=len(documents), converted=len(documents)),
        )

    def _plan_docs(self) -> SyncPlan:
        plan = SyncPlan()
        for filename in DOC_FILENAMES:
            template = self.config.assets_dir / filename
            if not template.is_file():
                error = TemplateNotFoundError(template, SyncTarget.DOCS.value)
                logger.error("%s", error)
                plan = plan.merge(SyncPlan(errors=[error], stats=RunStats(errors=1)))
                continue
            destination = self.config.project_root / filename
            plan = plan.merge(
                SyncPlan(
                    actions=[
                        Action(
                            ActionKind.WRITE_TEXT,
                            destination,
                            _status_for(destination),
                            "copy documentation template",
                            source=template,
                            payload=balance_fences(
                                template.read_text(encoding="utf-8")
                            ),
                            target=SyncTarget.DOCS.value,
                        )
                    ],
                    stats=RunStats(converted=1),
                )
            )
        return plan


class CursorConversionPlanner(_BasePlanner):
    """Plan the migration of an existing ``.cursor/rules`` tree to Copilot instructions."""

    TARGET = SyncTarget.GITHUB.value

    def __init__(
        self,
        config: SyncConfig,
        compiler: Optional[CopilotRuleCompiler] = None,
    ) -> None:
        super().__init__(config, compiler=compiler)
        self.source_dir = config.project_root / CURSOR_RULES_DIR
        self.target_dir = config.project_root / GITHUB_INSTRUCTIONS_DIR
        self.repository = RulesRepository(self.source_dir, suffix=CURSOR_SUFFIX)

    def build(self) -> SyncPlan:
        if not self.repository.exists():
            raise MissingSourceDirError(self.source_dir)

        documents, plan = self._load_documents(self.repository)
        if not documents and not plan.errors:
            logger.warning("No %s files found in %s", CURSOR_SUFFIX, self.source_dir)
            return plan

        plan = plan.merge(
            self._copy_readme(
                self.config.assets_dir / GITHUB_INSTRUCTIONS_DIR / README_FILENAME,
                self.target_dir,
                self.TARGET,
                only_if_missing=True,
            )
        )
        for document in documents:
            relative = document.source_path.relative_to(self.source_dir)
            plan = plan.merge(
                self._compile_rule(
                    document, self.target_dir / relative.parent, self.TARGET
                )
            )
        return plan
