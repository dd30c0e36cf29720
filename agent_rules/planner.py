import logging
from pathlib import Path
from typing import Optional, Sequence

from agent_rules.agents.base import AgentAdapter, OutputFile
from agent_rules.config.models import LoadedConfig
from agent_rules.constants import DEFAULT_BACKUP_SUFFIX
from agent_rules.errors import AgentRulesError
from agent_rules.gitignore_service import GitignoreService
from agent_rules.models import (
    Action,
    ActionKind,
    ActionStatus,
    AgentPlanError,
    SyncPlan,
)
from agent_rules.utils import backup_path_for, read_bytes_safe


logger = logging.getLogger(__name__)


class _PlannerBase:
    def __init__(
        self,
        project_root: Path,
        agents: Sequence[AgentAdapter],
        config: Optional[LoadedConfig] = None,
        backup_suffix: str = DEFAULT_BACKUP_SUFFIX,
        manage_gitignore: bool = True,
    ) -> None:
        self.project_root = project_root
        self.agents = list(agents)
        self.config = config or LoadedConfig(project_root=project_root)
        self.backup_suffix = backup_suffix
        self.manage_gitignore = manage_gitignore
        self.gitignore = GitignoreService(project_root)

        self.actions: list[Action] = []
        self.errors: list[Exception] = []
        self.skipped: list[str] = []

        self._claimed: dict[Path, str] = {}

    def _claim(self, path: Path, agent: str) -> bool:
        key = path.resolve()
        owner = self._claimed.get(key)
        if owner is not None:
            self.skipped.append(
                f"{agent}: {path} is already handled for {owner}, skipped"
            )
            return False
        self._claimed[key] = agent
        return True

    def _result(self) -> SyncPlan:
        return SyncPlan(actions=self.actions, errors=self.errors, skipped=self.skipped)


class ApplyPlanner(_PlannerBase):
    def __init__(
        self,
        project_root: Path,
        agents: Sequence[AgentAdapter],
        rules_text: str,
        config: Optional[LoadedConfig] = None,
        backup_suffix: str = DEFAULT_BACKUP_SUFFIX,
        manage_gitignore: bool = True,
    ) -> None:
        super().__init__(
            project_root=project_root,
            agents=agents,
            config=config,
            backup_suffix=backup_suffix,
            manage_gitignore=manage_gitignore,
        )
        self.rules_text = rules_text

    def build(self) -> SyncPlan:
        written: list[Path] = []
        for agent in self.agents:
            try:
                actions = self._plan_agent(agent)
            except (AgentRulesError, OSError, UnicodeDecodeError) as exc:
                logger.debug("Planning failed for %s: %s", agent.identifier, exc)
                self.errors.append(AgentPlanError(agent.identifier, exc))
                continue
            for action in actions:
                if self._claim(action.path, agent.identifier):
                    self.actions.append(action)
                    written.append(action.path)

        if self.manage_gitignore and written:
            action = self.gitignore.plan_update(
                add=self.gitignore.entries_for(written, self.backup_suffix)
            )
            if action is not None:
                self.actions.append(action)
        return self._result()

    def _plan_agent(self, agent: AgentAdapter) -> list[Action]:
        agent_config = self.config.agent_config(agent.identifier)
        outputs = agent.render_outputs(self.rules_text, self.project_root, agent_config)
        return [self._plan_write(agent.identifier, output) for output in outputs]

    @staticmethod
    def _plan_write(agent: str, output: OutputFile) -> Action:
        existing = read_bytes_safe(output.path)
        if existing == output.content.encode("utf-8"):
            status, detail = ActionStatus.NOOP, "already in sync"
        elif existing is None:
            status, detail = ActionStatus.CREATE, "write generated rules"
        else:
            status, detail = ActionStatus.UPDATE, "back up and overwrite"
        return Action(
            ActionKind.WRITE_TEXT,
            output.path,
            status,
            detail,
            payload=output.content,
            agent=agent,
        )


class RevertPlanner(_PlannerBase):
    def build(self) -> SyncPlan:
        reverted: list[Path] = []
        for agent in self.agents:
            agent_config = self.config.agent_config(agent.identifier)
            for path in agent.output_paths(self.project_root, agent_config):
                if not self._claim(path, agent.identifier):
                    continue
                self.actions.append(self._plan_revert(agent.identifier, path))
                reverted.append(path)

        if self.manage_gitignore and reverted:
            action = self.gitignore.plan_update(
                remove=self.gitignore.entries_for(reverted, self.backup_suffix)
            )
            if action is not None:
                self.actions.append(action)
        return self._result()

    def _plan_revert(self, agent: str, path: Path) -> Action:
        backup = backup_path_for(path, self.backup_suffix)
        if backup.is_file():
            return Action(
                ActionKind.RESTORE_BACKUP,
                path,
                ActionStatus.RESTORE,
                "restore from backup",
                agent=agent,
                source=backup,
            )
        if path.is_file():
            return Action(
                ActionKind.REMOVE_FILE,
                path,
                ActionStatus.REMOVE,
                "remove generated file",
                agent=agent,
            )
        return Action(
            ActionKind.REMOVE_FILE,
            path,
            ActionStatus.NOOP,
            "nothing to revert",
            agent=agent,
        )
