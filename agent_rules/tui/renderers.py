from pathlib import Path
from typing import Optional

from rich.console import Console

from agent_rules.init_service import InitResult
from agent_rules.models import AgentStatusRow, ExecutionResult, SyncPlan
from agent_rules.tui.enums import UIStyle
from agent_rules.tui.sections import bullet_note, note, section
from agent_rules.tui.tables import AgentsTable, PlanTable, ResultTable, display_path


class SyncConsoleUI:
    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def render_plan(
        self,
        plan: SyncPlan,
        mode: str,
        agents: list[str],
        project_root: Optional[Path] = None,
    ) -> None:
        self.console.print(
            section(
                "plan overview",
                PlanTable.summary_block(plan, mode=mode, agents=agents),
                style=UIStyle.BLUE.value,
            )
        )

        if plan.actions:
            self.console.print(
                section(
                    "agent files",
                    PlanTable.actions_table(plan.actions, project_root=project_root),
                    style=UIStyle.CYAN.value,
                )
            )
        else:
            self.console.print(
                note("actions", "No actions required.", style=UIStyle.DIM.value)
            )

        if plan.errors:
            self.console.print(bullet_note("errors", plan.errors, style=UIStyle.RED.value))
        if plan.skipped:
            self.console.print(
                bullet_note("skipped", plan.skipped, style=UIStyle.YELLOW.value)
            )

    def render_result(self, title: str, result: ExecutionResult) -> None:
        self.console.print(
            ResultTable.stats_panel(title, applied=result.applied, failed=result.failed)
        )
        if result.failures:
            self.console.print(
                bullet_note("failures", result.failures, style=UIStyle.RED.value)
            )

    def render_dry_run_hint(self, command: str) -> None:
        self.console.print(
            note(
                "dry run",
                f"No files were changed. Run without --dry-run to {command}.",
                style=UIStyle.DIM.value,
            )
        )

    def render_agents(self, rows: list[AgentStatusRow]) -> None:
        self.console.print(
            section("agents", AgentsTable.agents_table(rows), style=UIStyle.BLUE.value)
        )

    def render_init(self, results: list[InitResult], project_root: Path) -> None:
        lines = []
        for item in results:
            verb = "created" if item.created else "exists, kept"
            lines.append(f"{display_path(item.path, project_root)} ({verb})")
        self.console.print(bullet_note("init", lines, style=UIStyle.GREEN.value))
        self.console.print(
            note(
                "next",
                "Edit the rules, then apply them.\n- agent-rules apply",
                style=UIStyle.DIM.value,
            )
        )
