import logging
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol

from agent_rules.constants import DEFAULT_BACKUP_SUFFIX
from agent_rules.models import (
    Action,
    ActionKind,
    ActionStatus,
    AgentFailure,
    ExecutionResult,
    SyncPlan,
)
from agent_rules.utils import backup_file, remove_empty_parents, write_text


logger = logging.getLogger(__name__)


@dataclass
class ExecutionContext:
    project_root: Path
    backup_suffix: str = DEFAULT_BACKUP_SUFFIX
    keep_backups: bool = False


class ActionHandler(Protocol):
    def handle(
        self, action: Action, context: ExecutionContext
    ) -> tuple[bool, Optional[str]]: ...


class WriteTextHandler:
    def handle(
        self, action: Action, context: ExecutionContext
    ) -> tuple[bool, Optional[str]]:
        if action.status == ActionStatus.NOOP:
            return False, None
        if not isinstance(action.payload, str):
            return False, f"Missing text payload for write action: {action.path}"

        if action.backup and action.path.is_file():
            backup = backup_file(action.path, context.backup_suffix)
            logger.debug("Backed up %s to %s", action.path, backup)
        write_text(action.path, action.payload)
        logger.debug("Wrote %s", action.path)
        return True, None


class RestoreBackupHandler:
    def handle(
        self, action: Action, context: ExecutionContext
    ) -> tuple[bool, Optional[str]]:
        if action.status == ActionStatus.NOOP:
            return False, None
        if action.source is None:
            return False, f"Missing backup for restore action: {action.path}"

        action.path.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(action.source, action.path)
        logger.debug("Restored %s from %s", action.path, action.source)
        if not context.keep_backups:
            action.source.unlink()
            logger.debug("Removed backup %s", action.source)
        return True, None


class RemoveFileHandler:
    def handle(
        self, action: Action, context: ExecutionContext
    ) -> tuple[bool, Optional[str]]:
        if action.status == ActionStatus.NOOP:
            return False, None
        action.path.unlink(missing_ok=True)
        logger.debug("Removed %s", action.path)
        for directory in remove_empty_parents(action.path, context.project_root):
            logger.debug("Removed empty directory %s", directory)
        return True, None


class SyncExecutor:
    def __init__(
        self,
        project_root: Path,
        backup_suffix: str = DEFAULT_BACKUP_SUFFIX,
        keep_backups: bool = False,
    ) -> None:
        self.context = ExecutionContext(
            project_root=project_root,
            backup_suffix=backup_suffix,
            keep_backups=keep_backups,
        )
        self.handlers: dict[ActionKind, ActionHandler] = {
            ActionKind.WRITE_TEXT: WriteTextHandler(),
            ActionKind.RESTORE_BACKUP: RestoreBackupHandler(),
            ActionKind.REMOVE_FILE: RemoveFileHandler(),
        }

    def execute(self, plan: SyncPlan) -> ExecutionResult:
        result = ExecutionResult()

        for action in plan.actions:
            try:
                handler = self.handlers.get(action.kind)
                if handler is None:
                    result.failed += 1
                    result.failures.append(
                        AgentFailure(
                            action.agent,
                            action.path,
                            f"Unknown action kind: {action.kind.value}",
                        )
                    )
                    continue

                changed, failure = handler.handle(action, self.context)
                if failure is not None:
                    result.failed += 1
                    result.failures.append(AgentFailure(action.agent, action.path, failure))
                    continue
                if changed:
                    result.applied += 1
            except OSError as exc:
                logger.debug("%s failed for %s: %s", action.kind.value, action.path, exc)
                result.failed += 1
                result.failures.append(
                    AgentFailure(
                        action.agent, action.path, f"{action.kind.value} failed: {exc}"
                    )
                )

        return result
