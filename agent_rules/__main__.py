from pathlib import Path
from typing import Callable, Optional

import click
from rich.console import Console

from agent_rules import __version__
from agent_rules.agents.registry import all_agents
from agent_rules.config.loader import load_config, parse_agent_list
from agent_rules.config.models import LoadedConfig
from agent_rules.constants import DEFAULT_BACKUP_SUFFIX
from agent_rules.engine import (
    RunOutcome,
    apply_all_agent_configs,
    revert_all_agent_configs,
)
from agent_rules.errors import AgentRulesError, RulesDirectoryNotFoundError
from agent_rules.init_service import InitService
from agent_rules.log import configure_logging
from agent_rules.models import AgentSelectionStatus, AgentStatusRow
from agent_rules.selection import resolve_selected_agents
from agent_rules.tui import SyncConsoleUI
from agent_rules.tui.tables import display_path


def _project_root_option() -> Callable:
    return click.option(
        "--project-root",
        type=click.Path(file_okay=False, path_type=Path),
        default=Path("."),
        show_default=True,
        help="Project directory that receives the generated files.",
    )


def _agents_option(help_text: str) -> Callable:
    return click.option("--agents", "agents", default=None, help=help_text)


def _config_option() -> Callable:
    return click.option(
        "--config",
        "config_path",
        type=click.Path(dir_okay=False, path_type=Path),
        default=None,
        help="Explicit agent-rules.toml/.yaml to use.",
    )


def _backup_suffix_option() -> Callable:
    return click.option(
        "--backup-suffix",
        default=DEFAULT_BACKUP_SUFFIX,
        show_default=True,
        help="Suffix appended to output paths for backup files.",
    )


def _validate_suffix(suffix: str) -> str:
    if not suffix:
        raise click.BadParameter("must not be empty", param_hint="--backup-suffix")
    return suffix


def _finish(ui: SyncConsoleUI, outcome: RunOutcome, title: str, command: str) -> None:
    if outcome.result is None:
        ui.render_dry_run_hint(command)
        if not outcome.ok:
            raise click.exceptions.Exit(1)
        return

    ui.render_result(title, outcome.result)
    if not outcome.result.ok:
        raise click.exceptions.Exit(1)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(__version__, prog_name="agent-rules")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Sync one set of rule files into every coding agent's config."""
    ctx.obj = {}


@cli.command(help="Write concatenated rules to each selected agent's config file.")
@_project_root_option()
@_agents_option("Comma-separated agent identifiers or name fragments.")
@_config_option()
@click.option(
    "--gitignore/--no-gitignore",
    default=None,
    help="Maintain a managed .gitignore block for generated files.",
)
@_backup_suffix_option()
@click.option("--dry-run", is_flag=True, help="Show the plan without writing.")
@click.option("-v", "--verbose", is_flag=True, help="Print diagnostic logging.")
def apply(
    project_root: Path,
    agents: Optional[str],
    config_path: Optional[Path],
    gitignore: Optional[bool],
    backup_suffix: str,
    dry_run: bool,
    verbose: bool,
) -> None:
    ui = SyncConsoleUI(Console())
    configure_logging(verbose)

    try:
        outcome = apply_all_agent_configs(
            project_root,
            agents=parse_agent_list(agents),
            config_path=config_path,
            gitignore=gitignore,
            backup_suffix=_validate_suffix(backup_suffix),
            dry_run=dry_run,
            verbose=verbose,
        )
    except AgentRulesError as exc:
        raise click.ClickException(str(exc))

    mode = "apply:dry-run" if dry_run else "apply"
    ui.render_plan(
        outcome.plan,
        mode=mode,
        agents=[agent.identifier for agent in outcome.agents],
        project_root=project_root.resolve(),
    )
    _finish(ui, outcome, title="apply", command="apply")


@cli.command(help="Restore agent config files from backups or remove generated ones.")
@_project_root_option()
@_agents_option("Comma-separated agents to revert (default: all agents).")
@_config_option()
@_backup_suffix_option()
@click.option("--keep-backups", is_flag=True, help="Keep backup files after restoring.")
@click.option("--dry-run", is_flag=True, help="Show the plan without changing files.")
@click.option("-v", "--verbose", is_flag=True, help="Print diagnostic logging.")
def revert(
    project_root: Path,
    agents: Optional[str],
    config_path: Optional[Path],
    backup_suffix: str,
    keep_backups: bool,
    dry_run: bool,
    verbose: bool,
) -> None:
    ui = SyncConsoleUI(Console())
    configure_logging(verbose)

    try:
        outcome = revert_all_agent_configs(
            project_root,
            agents=parse_agent_list(agents) or None,
            config_path=config_path,
            backup_suffix=_validate_suffix(backup_suffix),
            keep_backups=keep_backups,
            dry_run=dry_run,
            verbose=verbose,
        )
    except AgentRulesError as exc:
        raise click.ClickException(str(exc))

    mode = "revert:dry-run" if dry_run else "revert"
    ui.render_plan(
        outcome.plan,
        mode=mode,
        agents=[agent.identifier for agent in outcome.agents],
        project_root=project_root.resolve(),
    )
    _finish(ui, outcome, title="revert", command="revert")


@cli.command(help="Create a .agent-rules directory with starter files.")
@_project_root_option()
@click.option("--force", is_flag=True, help="Overwrite existing starter files.")
def init(project_root: Path, force: bool) -> None:
    ui = SyncConsoleUI(Console())
    root = project_root.resolve()
    try:
        results = InitService(root).scaffold(force=force)
    except OSError as exc:
        raise click.ClickException(f"Cannot initialize {root}: {exc}")
    ui.render_init(results, root)


@cli.group(help="Inspect supported agents.")
def agents() -> None:
    pass


@agents.command("list", help="List agents, their selection status and output paths.")
@_project_root_option()
@_agents_option("Preview selection for these agents.")
@_config_option()
def agents_list(
    project_root: Path, agents: Optional[str], config_path: Optional[Path]
) -> None:
    ui = SyncConsoleUI(Console())
    configure_logging(False)
    root = project_root.resolve()
    catalog = all_agents()
    cli_agents = parse_agent_list(agents)

    try:
        try:
            config = load_config(
                root, cli_agents=cli_agents, config_path=config_path, agents=catalog
            )
        except RulesDirectoryNotFoundError:
            config = LoadedConfig(cli_agents=cli_agents, project_root=root)
        selected = {agent.identifier for agent in resolve_selected_agents(config, catalog)}
    except AgentRulesError as exc:
        raise click.ClickException(str(exc))

    rows = [
        AgentStatusRow(
            identifier=agent.identifier,
            name=agent.display_name,
            status=(
                AgentSelectionStatus.SELECTED
                if agent.identifier in selected
                else AgentSelectionStatus.SKIPPED
            ),
            outputs=[
                display_path(path, root)
                for path in agent.output_paths(
                    root, config.agent_config(agent.identifier)
                )
            ],
        )
        for agent in catalog
    ]
    ui.render_agents(rows)


def main() -> int:
    try:
        cli(standalone_mode=False)
    except click.exceptions.Exit as exc:
        code = exc.exit_code
        return code if isinstance(code, int) else 1
    except click.exceptions.Abort:
        return 1
    except click.ClickException as exc:
        exc.show()
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
