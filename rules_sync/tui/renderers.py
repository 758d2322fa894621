from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.panel import Panel

from rules_sync.models import ApplyResult, RunStats, SyncPlan
from rules_sync.tui.enums import TARGET_STYLE, UIStyle
from rules_sync.tui.tables import ApplyTable, PlanTable, StatsTable
from rules_sync.utils import compact_home_paths_in_text


def _section(title: str, body, style: str = UIStyle.BLUE.value, subtitle: Optional[str] = None) -> Panel:
    return Panel(body, title=title, subtitle=subtitle, border_style=style, padding=(0, 1))


SYNC_NEXT_STEPS = (
    "Review the generated files:\n"
    "- Codex CLI docs: AGENTS.md, ARCHITECTURE.md, RULES.md\n"
    "- Cursor IDE: .cursor/rules/\n"
    "- GitHub Copilot: .github/instructions/\n"
    "- Claude Code: CLAUDE.md\n"
    "- Gemini CLI: GEMINI.md"
)

CONVERT_NEXT_STEPS = (
    "- Review the converted files in .github/instructions\n"
    "- Adjust applyTo patterns if needed\n"
    "- Consider a single .github/copilot-instructions.md for global rules"
)


class SyncConsoleUI:
    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def render_plan(self, plan: SyncPlan, mode: str, project_root: Path) -> None:
        self.console.print(
            _section(
                "plan overview",
                PlanTable.summary_block(plan, mode=mode, project_root=project_root),
            )
        )

        grouped = PlanTable.split_actions(plan)
        for target, actions in grouped.items():
            self.console.print(
                _section(
                    target,
                    PlanTable.actions_table(actions, project_root),
                    style=TARGET_STYLE.get(target, UIStyle.CYAN.value),
                )
            )
        if not grouped:
            self.console.print(
                _section("actions", "No actions required.", style=UIStyle.DIM.value)
            )

        self.render_problems(plan)

    def render_problems(self, plan: SyncPlan) -> None:
        if plan.errors:
            errors_text = "\n".join(
                [f"- {compact_home_paths_in_text(str(item))}" for item in plan.errors]
            )
            self.console.print(_section("errors", errors_text, style=UIStyle.RED.value))

        if plan.skipped:
            skipped_text = "\n".join(
                [f"- {compact_home_paths_in_text(item)}" for item in plan.skipped]
            )
            self.console.print(
                _section("skipped", skipped_text, style=UIStyle.YELLOW.value)
            )

    def render_apply_result(self, result: ApplyResult) -> None:
        self.console.print(ApplyTable.stats_panel(result))
        if result.failures:
            failure_text = "\n".join(
                [f"- {compact_home_paths_in_text(item)}" for item in result.failures]
            )
            self.console.print(
                _section("failures", failure_text, style=UIStyle.RED.value)
            )

    def render_summary(self, stats: RunStats, title: str, next_steps: str) -> None:
        if stats.errors:
            headline = f"[red]{title} completed with {stats.errors} errors.[/red]"
        else:
            headline = f"[green]{title} complete![/green]"
        self.console.print(headline)
        self.console.print(StatsTable.stats_panel(stats, title=title.lower()))
        self.console.print(_section("next", next_steps, style=UIStyle.DIM.value))
