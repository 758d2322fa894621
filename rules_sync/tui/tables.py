from collections import Counter
from pathlib import Path

from rich.panel import Panel
from rich.table import Column, Table

from rules_sync.models import Action, ApplyResult, RunStats, SyncPlan
from rules_sync.tui.enums import ACTION_STATUS_STYLE, UIStyle
from rules_sync.utils import relative_display


class PlanTable:
    @staticmethod
    def summary_block(plan: SyncPlan, mode: str, project_root: Path) -> Table:
        counts = Counter(action.status.value for action in plan.actions)
        chips = [f"{key}={value}" for key, value in sorted(counts.items()) if value > 0]
        if not chips:
            chips = ["none"]

        table = Table.grid(padding=(0, 2))
        table.add_column(style="bold")
        table.add_column()
        table.add_row("Mode", mode)
        table.add_row("Project", str(project_root))
        table.add_row("Actions", str(len(plan.actions)))
        table.add_row("Statuses", "  ".join(chips))
        return table

    @staticmethod
    def split_actions(plan: SyncPlan) -> dict[str, list[Action]]:
        grouped: dict[str, list[Action]] = {}
        for action in plan.actions:
            grouped.setdefault(action.target or "other", []).append(action)
        return grouped

    @staticmethod
    def actions_table(actions: list[Action], project_root: Path) -> Table:
        table = Table(
            Column(header="Type", width=10),
            Column(header="Status", width=8),
            Column(header="Target", overflow="ellipsis", max_width=58),
            Column(header="Source", overflow="ellipsis", max_width=42),
            Column(header="Reason", overflow="ellipsis"),
            expand=True,
            header_style="bold",
        )

        for action in actions:
            source = ""
            if action.source is not None:
                source = relative_display(action.source, project_root)
            status_style = ACTION_STATUS_STYLE.get(action.status, UIStyle.WHITE.value)
            status_text = f"[{status_style}]{action.status.value}[/{status_style}]"
            table.add_row(
                action.kind.value,
                status_text,
                relative_display(action.path, project_root),
                source,
                action.detail,
            )
        return table


class StatsTable:
    @staticmethod
    def stats_panel(stats: RunStats, title: str) -> Panel:
        table = Table(show_header=False, box=None)
        for key, value in stats.as_dict().items():
            table.add_row(f"[bold]{key}[/bold]", str(value))
        return Panel(
            table,
            title=title,
            border_style=UIStyle.GREEN.value if stats.errors == 0 else UIStyle.RED.value,
        )


class ApplyTable:
    @staticmethod
    def stats_panel(result: ApplyResult) -> Panel:
        table = Table(show_header=False, box=None)
        table.add_row("[bold]written[/bold]", str(result.applied))
        table.add_row("[bold]failed[/bold]", str(result.failed))
        return Panel(
            table,
            title="apply",
            border_style=UIStyle.GREEN.value if result.failed == 0 else UIStyle.RED.value,
        )
