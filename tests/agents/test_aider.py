from pathlib import Path

import pytest
import yaml

from agent_rules.agents.aider import AiderAgent
from agent_rules.config.models import AgentConfig
from agent_rules.errors import ConfigFileError


def test_aider_writes_instructions_and_config(tmp_path: Path) -> None:
    instructions, config = AiderAgent().render_outputs("rules", tmp_path)

    assert instructions.path == tmp_path / "agent_rules_aider_instructions.md"
    assert instructions.content == "rules"
    assert config.path == tmp_path / ".aider.conf.yml"
    assert yaml.safe_load(config.content) == {
        "read": ["agent_rules_aider_instructions.md"]
    }


def test_aider_merges_existing_config(tmp_path: Path) -> None:
    (tmp_path / ".aider.conf.yml").write_text(
        "model: gpt-4o\nread: CONVENTIONS.md\n", encoding="utf-8"
    )

    _, config = AiderAgent().render_outputs("rules", tmp_path)

    assert yaml.safe_load(config.content) == {
        "model": "gpt-4o",
        "read": ["CONVENTIONS.md", "agent_rules_aider_instructions.md"],
    }


def test_aider_does_not_duplicate_read_entry(tmp_path: Path) -> None:
    (tmp_path / ".aider.conf.yml").write_text(
        "read:\n- agent_rules_aider_instructions.md\n", encoding="utf-8"
    )

    _, config = AiderAgent().render_outputs("rules", tmp_path)

    assert yaml.safe_load(config.content)["read"] == [
        "agent_rules_aider_instructions.md"
    ]


def test_aider_honours_both_overrides(tmp_path: Path) -> None:
    agent_config = AgentConfig(
        output_path="docs/aider.md", output_path_config="conf/aider.yml"
    )

    paths = AiderAgent().output_paths(tmp_path, agent_config)
    _, config = AiderAgent().render_outputs("rules", tmp_path, agent_config)

    assert paths == [tmp_path / "docs" / "aider.md", tmp_path / "conf" / "aider.yml"]
    assert yaml.safe_load(config.content)["read"] == ["docs/aider.md"]


def test_aider_invalid_existing_config_raises(tmp_path: Path) -> None:
    (tmp_path / ".aider.conf.yml").write_text("read: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigFileError):
        AiderAgent().render_outputs("rules", tmp_path)
