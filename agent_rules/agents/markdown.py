from pathlib import Path

from agent_rules.agents.base import AgentAdapter


class MarkdownAgent(AgentAdapter):
    """Agent that reads the concatenated rules verbatim from a single file."""

    def __init__(self, identifier: str, display_name: str, default_path: str) -> None:
        self._identifier = identifier
        self._display_name = display_name
        self._default_path = default_path

    @property
    def identifier(self) -> str:
        return self._identifier

    @property
    def display_name(self) -> str:
        return self._display_name

    def default_output_path(self, project_root: Path) -> Path:
        return project_root / self._default_path
