from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Optional


class ActionKind(str, Enum):
    WRITE_TEXT = "write_text"
    RESTORE_BACKUP = "restore_backup"
    REMOVE_FILE = "remove_file"


class ActionStatus(str, Enum):
    NOOP = "noop"
    CREATE = "create"
    UPDATE = "update"
    RESTORE = "restore"
    REMOVE = "remove"


class AgentSelectionStatus(str, Enum):
    SELECTED = "selected"
    SKIPPED = "skipped"


@dataclass
class Action:
    kind: ActionKind
    path: Path
    status: ActionStatus
    detail: str
    payload: Optional[Any] = None
    agent: Optional[str] = None
    source: Optional[Path] = None
    backup: bool = True


@dataclass(frozen=True)
class AgentFailure:
    agent: Optional[str]
    path: Optional[Path]
    message: str

    def __str__(self) -> str:
        label = self.agent or "general"
        if self.path is not None:
            return f"{label}: {self.message} ({self.path})"
        return f"{label}: {self.message}"


class AgentPlanError(Exception):
    def __init__(self, agent: str, cause: Exception) -> None:
        self.agent = agent
        self.cause = cause
        super().__init__(f"{agent}: {cause}")


@dataclass
class SyncPlan:
    actions: list[Action]
    errors: list[Exception]
    skipped: list[str]

    def is_valid(self) -> bool:
        return not self.errors

    def plan_failures(self) -> list[AgentFailure]:
        failures: list[AgentFailure] = []
        for error in self.errors:
            if isinstance(error, AgentPlanError):
                path = getattr(error.cause, "path", None)
                failures.append(AgentFailure(error.agent, path, str(error.cause)))
            else:
                failures.append(AgentFailure(None, None, str(error)))
        return failures


@dataclass
class ExecutionResult:
    applied: int = 0
    failed: int = 0
    failures: list[AgentFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    def failed_agents(self) -> list[str]:
        seen: list[str] = []
        for failure in self.failures:
            if failure.agent is not None and failure.agent not in seen:
                seen.append(failure.agent)
        return seen

    def merge_plan_failures(self, plan: SyncPlan) -> "ExecutionResult":
        plan_failures = plan.plan_failures()
        return ExecutionResult(
            applied=self.applied,
            failed=self.failed + len(plan_failures),
            failures=plan_failures + self.failures,
        )


@dataclass(frozen=True)
class AgentStatusRow:
    identifier: str
    name: str
    status: AgentSelectionStatus
    outputs: list[str]
