"""Tests for the agent catalog."""

from pathlib import Path

from agent_rules.agents.registry import (
    agent_by_identifier,
    agent_identifiers,
    all_agents,
)
from agent_rules.config.models import AgentConfig


def test_identifiers_are_unique_and_lowercase() -> None:
    identifiers = agent_identifiers()

    assert len(identifiers) == len(set(identifiers))
    assert all(item == item.lower() for item in identifiers)


def test_default_output_paths_are_disjoint(tmp_path: Path) -> None:
    paths = [
        path for agent in all_agents() for path in agent.output_paths(tmp_path)
    ]

    assert len(paths) == len(set(paths))


def test_agent_by_identifier() -> None:
    agent = agent_by_identifier("amp")

    assert agent is not None
    assert agent.display_name == "Amp"
    assert agent_by_identifier("missing") is None


def test_default_output_path_under_project(tmp_path: Path) -> None:
    agent = agent_by_identifier("copilot")

    assert agent.default_output_path(tmp_path) == (
        tmp_path / ".github" / "copilot-instructions.md"
    )


def test_output_path_override_is_relative_to_project(tmp_path: Path) -> None:
    agent = agent_by_identifier("amp")

    path = agent.output_path(tmp_path, AgentConfig(output_path="CUSTOM.md"))

    assert path == tmp_path / "CUSTOM.md"


def test_output_path_absolute_override(tmp_path: Path) -> None:
    agent = agent_by_identifier("amp")
    target = tmp_path / "elsewhere" / "amp.md"

    assert agent.output_path(tmp_path / "project", AgentConfig(output_path=str(target))) == target


def test_markdown_agent_renders_rules_verbatim(tmp_path: Path) -> None:
    agent = agent_by_identifier("claude")

    outputs = agent.render_outputs("rules", tmp_path)

    assert len(outputs) == 1
    assert outputs[0].path == tmp_path / "CLAUDE.md"
    assert outputs[0].content == "rules"


def test_matches_identifier_or_name_substring() -> None:
    agent = agent_by_identifier("copilot")

    assert agent.matches("copilot")
    assert agent.matches("GitHub")
    assert agent.matches("pilot")
    assert not agent.matches("claude")
