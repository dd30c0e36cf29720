from pathlib import Path

import pytest

from agent_rules.agents.registry import agent_by_identifier
from agent_rules.executor import SyncExecutor
from agent_rules.models import Action, ActionKind, ActionStatus, SyncPlan
from agent_rules.planner import ApplyPlanner, RevertPlanner


def _plan(*actions: Action) -> SyncPlan:
    return SyncPlan(actions=list(actions), errors=[], skipped=[])


def test_apply_plan_statuses(tmp_path: Path) -> None:
    (tmp_path / "CLAUDE.md").write_text("old", encoding="utf-8")
    (tmp_path / "AGENT.md").write_text("rules", encoding="utf-8")
    agents = [agent_by_identifier(name) for name in ("claude", "codex", "amp")]

    plan = ApplyPlanner(tmp_path, agents, "rules", manage_gitignore=False).build()

    statuses = {action.agent: action.status for action in plan.actions}
    assert statuses == {
        "claude": ActionStatus.UPDATE,
        "codex": ActionStatus.CREATE,
        "amp": ActionStatus.NOOP,
    }


def test_apply_plan_appends_gitignore_action_last(tmp_path: Path) -> None:
    plan = ApplyPlanner(tmp_path, [agent_by_identifier("claude")], "rules").build()

    assert plan.actions[-1].path == tmp_path / ".gitignore"
    assert plan.actions[-1].agent is None


def test_write_backs_up_before_overwriting(tmp_path: Path) -> None:
    target = tmp_path / "CLAUDE.md"
    target.write_text("old", encoding="utf-8")
    (tmp_path / "CLAUDE.md.bak").write_text("stale backup", encoding="utf-8")

    result = SyncExecutor(tmp_path).execute(
        _plan(
            Action(
                ActionKind.WRITE_TEXT,
                target,
                ActionStatus.UPDATE,
                "overwrite",
                payload="new",
                agent="claude",
            )
        )
    )

    assert result.applied == 1
    assert target.read_text(encoding="utf-8") == "new"
    assert (tmp_path / "CLAUDE.md.bak").read_text(encoding="utf-8") == "old"


def test_write_is_skipped_when_backup_fails(tmp_path: Path) -> None:
    target = tmp_path / "CLAUDE.md"
    target.write_text("old", encoding="utf-8")
    (tmp_path / "CLAUDE.md.bak").mkdir()

    result = SyncExecutor(tmp_path).execute(
        _plan(
            Action(
                ActionKind.WRITE_TEXT,
                target,
                ActionStatus.UPDATE,
                "overwrite",
                payload="new",
                agent="claude",
            )
        )
    )

    assert result.failed == 1
    assert result.failures[0].agent == "claude"
    assert target.read_text(encoding="utf-8") == "old"


def test_noop_write_touches_nothing(tmp_path: Path) -> None:
    target = tmp_path / "CLAUDE.md"
    target.write_text("same", encoding="utf-8")

    result = SyncExecutor(tmp_path).execute(
        _plan(
            Action(
                ActionKind.WRITE_TEXT,
                target,
                ActionStatus.NOOP,
                "already in sync",
                payload="same",
            )
        )
    )

    assert result.applied == 0
    assert not (tmp_path / "CLAUDE.md.bak").exists()


def test_missing_payload_is_reported(tmp_path: Path) -> None:
    result = SyncExecutor(tmp_path).execute(
        _plan(Action(ActionKind.WRITE_TEXT, tmp_path / "x.md", ActionStatus.CREATE, "write"))
    )

    assert result.failed == 1
    assert "Missing text payload" in result.failures[0].message


def test_failed_restore_keeps_backup(tmp_path: Path) -> None:
    target = tmp_path / "CLAUDE.md"
    target.mkdir()
    backup = tmp_path / "CLAUDE.md.bak"
    backup.write_text("original", encoding="utf-8")

    result = SyncExecutor(tmp_path).execute(
        _plan(
            Action(
                ActionKind.RESTORE_BACKUP,
                target,
                ActionStatus.RESTORE,
                "restore",
                agent="claude",
                source=backup,
            )
        )
    )

    assert result.failed == 1
    assert backup.read_text(encoding="utf-8") == "original"


def test_revert_plan_per_state(tmp_path: Path) -> None:
    (tmp_path / "CLAUDE.md").write_text("generated", encoding="utf-8")
    (tmp_path / "CLAUDE.md.bak").write_text("original", encoding="utf-8")
    (tmp_path / "AGENTS.md").write_text("generated", encoding="utf-8")
    agents = [agent_by_identifier(name) for name in ("claude", "codex", "amp")]

    plan = RevertPlanner(tmp_path, agents).build()

    by_agent = {action.agent: (action.kind, action.status) for action in plan.actions}
    assert by_agent == {
        "claude": (ActionKind.RESTORE_BACKUP, ActionStatus.RESTORE),
        "codex": (ActionKind.REMOVE_FILE, ActionStatus.REMOVE),
        "amp": (ActionKind.REMOVE_FILE, ActionStatus.NOOP),
    }


def test_revert_restores_backup_even_without_generated_file(tmp_path: Path) -> None:
    (tmp_path / "CLAUDE.md.bak").write_text("original", encoding="utf-8")

    plan = RevertPlanner(tmp_path, [agent_by_identifier("claude")]).build()
    result = SyncExecutor(tmp_path).execute(plan)

    assert result.ok
    assert (tmp_path / "CLAUDE.md").read_text(encoding="utf-8") == "original"
    assert not (tmp_path / "CLAUDE.md.bak").exists()


def test_remove_keeps_non_empty_parent_directories(tmp_path: Path) -> None:
    target = tmp_path / ".github" / "copilot-instructions.md"
    target.parent.mkdir()
    target.write_text("generated", encoding="utf-8")
    (tmp_path / ".github" / "workflows.yml").write_text("ci", encoding="utf-8")

    SyncExecutor(tmp_path).execute(
        _plan(Action(ActionKind.REMOVE_FILE, target, ActionStatus.REMOVE, "remove"))
    )

    assert not target.exists()
    assert (tmp_path / ".github").is_dir()


@pytest.mark.parametrize("suffix", [".bak", ".orig"])
def test_revert_planner_uses_suffix(tmp_path: Path, suffix: str) -> None:
    (tmp_path / f"CLAUDE.md{suffix}").write_text("original", encoding="utf-8")

    plan = RevertPlanner(
        tmp_path, [agent_by_identifier("claude")], backup_suffix=suffix
    ).build()

    assert plan.actions[0].source == tmp_path / f"CLAUDE.md{suffix}"
