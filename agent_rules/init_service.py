"""Scaffold a .agent-rules directory in a project."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from agent_rules.agents.registry import agent_identifiers
from agent_rules.constants import (
    CONFIG_FILENAMES,
    DEFAULT_INSTRUCTIONS_FILENAME,
    RULES_DIRNAME,
)
from agent_rules.utils import write_text


DEFAULT_INSTRUCTIONS = """# Project instructions

Add rules for coding agents here. Every Markdown file in this directory
is concatenated and written to each agent's configuration file.
"""


def default_config_text() -> str:
    known = ", ".join(f'"{name}"' for name in agent_identifiers())
    return f"""# agent-rules configuration
#
# Agents processed when --agents is not given. Leave empty to process every
# agent not disabled below.
# Known agents: {known}
default_agents = []

# Per-agent settings. `enabled` overrides default_agents; `output_path`
# overrides where the generated file is written (relative to the project root).
#
# [agents.copilot]
# enabled = true
#
# [agents.claude]
# output_path = "docs/CLAUDE.md"

[gitignore]
enabled = true
"""


@dataclass(frozen=True)
class InitResult:
    path: Path
    created: bool


class InitService:
    def __init__(self, project_root: Path) -> None:
        self._rules_dir = project_root / RULES_DIRNAME

    @property
    def rules_dir(self) -> Path:
        return self._rules_dir

    def scaffold(self, force: bool = False) -> list[InitResult]:
        files = [
            (self._rules_dir / DEFAULT_INSTRUCTIONS_FILENAME, DEFAULT_INSTRUCTIONS),
            (self._rules_dir / CONFIG_FILENAMES[0], default_config_text()),
        ]
        results: list[InitResult] = []
        for path, content in files:
            if path.exists() and not force:
                results.append(InitResult(path=path, created=False))
                continue
            write_text(path, content)
            results.append(InitResult(path=path, created=True))
        return results
