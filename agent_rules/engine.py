"""Apply and revert entry points.

Both operations build a plan first and only touch the file system when
``dry_run`` is false. Failures of individual agents are collected in the
returned ``ExecutionResult``; the remaining agents are still processed.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from agent_rules.agents.base import AgentAdapter
from agent_rules.agents.registry import all_agents
from agent_rules.config.loader import load_config
from agent_rules.config.models import LoadedConfig
from agent_rules.constants import DEFAULT_BACKUP_SUFFIX
from agent_rules.errors import RulesDirectoryNotFoundError
from agent_rules.executor import SyncExecutor
from agent_rules.log import configure_logging
from agent_rules.models import ExecutionResult, SyncPlan
from agent_rules.planner import ApplyPlanner, RevertPlanner
from agent_rules.rules.concatenate import concatenate_rules
from agent_rules.rules.repository import load_rule_fragments
from agent_rules.selection import resolve_selected_agents, select_by_filters


logger = logging.getLogger(__name__)


@dataclass
class RunOutcome:
    plan: SyncPlan
    agents: list[AgentAdapter]
    result: Optional[ExecutionResult] = None

    @property
    def dry_run(self) -> bool:
        return self.result is None

    @property
    def ok(self) -> bool:
        if self.result is None:
            return self.plan.is_valid()
        return self.result.ok


def _gitignore_enabled(cli_value: Optional[bool], config: LoadedConfig) -> bool:
    if cli_value is not None:
        return cli_value
    if config.gitignore_enabled is not None:
        return config.gitignore_enabled
    return True


def build_rules_text(config: LoadedConfig) -> str:
    if config.rules_dir is None:
        raise RulesDirectoryNotFoundError(config.project_root or Path.cwd())
    fragments = load_rule_fragments(config.rules_dir)
    if not fragments:
        logger.warning("No rule files found in %s", config.rules_dir)
    return concatenate_rules(fragments, config.rules_dir.parent)


def apply_all_agent_configs(
    project_root: Path,
    agents: Optional[Sequence[str]] = None,
    config_path: Optional[Path] = None,
    gitignore: Optional[bool] = None,
    backup_suffix: str = DEFAULT_BACKUP_SUFFIX,
    dry_run: bool = False,
    verbose: bool = False,
    registry: Optional[Sequence[AgentAdapter]] = None,
) -> RunOutcome:
    if verbose:
        configure_logging(verbose=True)

    catalog = list(registry) if registry is not None else all_agents()
    root = project_root.resolve()
    config = load_config(root, cli_agents=agents, config_path=config_path, agents=catalog)
    selected = resolve_selected_agents(config, catalog)
    rules_text = build_rules_text(config)

    plan = ApplyPlanner(
        project_root=root,
        agents=selected,
        rules_text=rules_text,
        config=config,
        backup_suffix=backup_suffix,
        manage_gitignore=_gitignore_enabled(gitignore, config),
    ).build()

    if dry_run:
        logger.debug("Dry run: %d actions planned", len(plan.actions))
        return RunOutcome(plan=plan, agents=selected)

    result = SyncExecutor(root, backup_suffix=backup_suffix).execute(plan)
    return RunOutcome(
        plan=plan, agents=selected, result=result.merge_plan_failures(plan)
    )


def revert_all_agent_configs(
    project_root: Path,
    agents: Optional[Sequence[str]] = None,
    config_path: Optional[Path] = None,
    backup_suffix: Optional[str] = None,
    keep_backups: bool = False,
    dry_run: bool = False,
    verbose: bool = False,
    registry: Optional[Sequence[AgentAdapter]] = None,
) -> RunOutcome:
    if verbose:
        configure_logging(verbose=True)

    catalog = list(registry) if registry is not None else all_agents()
    root = project_root.resolve()
    try:
        config = load_config(
            root, cli_agents=agents, config_path=config_path, agents=catalog
        )
    except RulesDirectoryNotFoundError:
        logger.debug("No rules directory found, reverting default output paths")
        config = LoadedConfig(cli_agents=list(agents or []), project_root=root)

    targets = select_by_filters(agents, catalog) if agents else catalog
    suffix = backup_suffix or DEFAULT_BACKUP_SUFFIX

    plan = RevertPlanner(
        project_root=root,
        agents=targets,
        config=config,
        backup_suffix=suffix,
        manage_gitignore=_gitignore_enabled(None, config),
    ).build()

    if dry_run:
        return RunOutcome(plan=plan, agents=targets)

    result = SyncExecutor(root, backup_suffix=suffix, keep_backups=keep_backups).execute(
        plan
    )
    return RunOutcome(
        plan=plan, agents=targets, result=result.merge_plan_failures(plan)
    )
