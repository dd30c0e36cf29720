from collections import Counter
from pathlib import Path
from typing import Optional

from rich.markup import escape
from rich.panel import Panel
from rich.table import Column, Table

from agent_rules.models import (
    Action,
    AgentSelectionStatus,
    AgentStatusRow,
    SyncPlan,
)
from agent_rules.tui.enums import ACTION_STATUS_STYLE, UIStyle
from agent_rules.utils import compact_home_path, relative_posix


def display_path(path: Path, project_root: Optional[Path]) -> str:
    if project_root is not None:
        relative = relative_posix(path, project_root)
        if relative is not None:
            return relative
    return compact_home_path(path)


class PlanTable:
    @staticmethod
    def summary_block(plan: SyncPlan, mode: str, agents: list[str]):
        counts = Counter(action.status.value for action in plan.actions)
        chips = [f"{key}={value}" for key, value in sorted(counts.items()) if value > 0]
        if not chips:
            chips = ["none"]

        table = Table.grid(padding=(0, 2))
        table.add_column(style="bold")
        table.add_column()
        table.add_row("Mode", mode)
        table.add_row("Agents", ", ".join(agents) if agents else "(none)")
        table.add_row("Actions", str(len(plan.actions)))
        table.add_row("Statuses", "  ".join(chips))
        return table

    @staticmethod
    def actions_table(actions: list[Action], project_root: Optional[Path] = None) -> Table:
        table = Table(
            Column(header="Agent", width=14),
            Column(header="Type", width=14),
            Column(header="Status", width=8),
            Column(header="Target", overflow="ellipsis", max_width=58),
            Column(header="Reason", overflow="ellipsis"),
            expand=True,
            header_style="bold",
        )

        for action in actions:
            status_style = ACTION_STATUS_STYLE.get(action.status, UIStyle.WHITE.value)
            status_value = action.status.value
            table.add_row(
                action.agent or "-",
                action.kind.value,
                f"[{status_style}]{status_value}[/{status_style}]",
                escape(display_path(action.path, project_root)),
                action.detail,
            )
        return table


class ResultTable:
    @staticmethod
    def stats_panel(title: str, applied: int, failed: int) -> Panel:
        stats: dict[str, str] = {
            "applied": str(applied),
            "failed": str(failed),
        }
        table = Table(show_header=False, box=None)
        for key, value in stats.items():
            table.add_row(f"[bold]{key}[/bold]", value)
        return Panel(
            table,
            title=title,
            border_style=UIStyle.GREEN.value if failed == 0 else UIStyle.RED.value,
        )


class AgentsTable:
    @staticmethod
    def agents_table(rows: list[AgentStatusRow]) -> Table:
        table = Table(
            Column(header="Agent", width=14),
            Column(header="Name", width=18),
            Column(header="Status", width=10),
            Column(header="Output", overflow="fold"),
            expand=True,
            header_style="bold",
        )
        for row in rows:
            style = (
                UIStyle.GREEN.value
                if row.status == AgentSelectionStatus.SELECTED
                else UIStyle.DIM.value
            )
            table.add_row(
                row.identifier,
                row.name,
                f"[{style}]{row.status.value}[/{style}]",
                escape(", ".join(row.outputs)),
            )
        return table
