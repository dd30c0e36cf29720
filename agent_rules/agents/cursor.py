"""Cursor project rules (.mdc with YAML front matter)."""

from pathlib import Path
from typing import Optional

import yaml

from agent_rules.agents.base import AgentAdapter, OutputFile
from agent_rules.config.models import AgentConfig


class CursorAgent(AgentAdapter):
    @property
    def identifier(self) -> str:
        return "cursor"

    @property
    def display_name(self) -> str:
        return "Cursor"

    def default_output_path(self, project_root: Path) -> Path:
        return project_root / ".cursor" / "rules" / "agent_rules.mdc"

    def render_outputs(
        self,
        rules_text: str,
        project_root: Path,
        config: Optional[AgentConfig] = None,
    ) -> list[OutputFile]:
        fm = {
            "description": "Project rules generated by agent-rules",
            "alwaysApply": True,
        }
        parts: list[str] = []
        parts.append("---")
        parts.append(yaml.dump(fm, default_flow_style=False, sort_keys=False).rstrip())
        parts.append("---")
        parts.append("")
        parts.append(rules_text)
        return [OutputFile(self.output_path(project_root, config), "\n".join(parts))]
