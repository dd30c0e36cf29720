"""Aider: instructions file plus a `read:` entry in .aider.conf.yml."""

from pathlib import Path
from typing import Any, Optional

import yaml

from agent_rules.agents.base import AgentAdapter, OutputFile, resolve_override
from agent_rules.config.models import AgentConfig
from agent_rules.errors import ConfigFileError
from agent_rules.utils import read_text_safe, relative_posix


INSTRUCTIONS_FILENAME = "agent_rules_aider_instructions.md"
CONFIG_FILENAME = ".aider.conf.yml"


class AiderAgent(AgentAdapter):
    @property
    def identifier(self) -> str:
        return "aider"

    @property
    def display_name(self) -> str:
        return "Aider"

    def default_output_path(self, project_root: Path) -> Path:
        return project_root / INSTRUCTIONS_FILENAME

    def config_path(
        self, project_root: Path, config: Optional[AgentConfig] = None
    ) -> Path:
        override = resolve_override(
            project_root, config.output_path_config if config is not None else None
        )
        return override or project_root / CONFIG_FILENAME

    def output_paths(
        self, project_root: Path, config: Optional[AgentConfig] = None
    ) -> list[Path]:
        return [
            self.output_path(project_root, config),
            self.config_path(project_root, config),
        ]

    def render_outputs(
        self,
        rules_text: str,
        project_root: Path,
        config: Optional[AgentConfig] = None,
    ) -> list[OutputFile]:
        instructions_path = self.output_path(project_root, config)
        config_path = self.config_path(project_root, config)

        payload = self._load_config(config_path)
        read_entry = relative_posix(instructions_path, project_root) or str(
            instructions_path
        )
        read = payload.get("read")
        if isinstance(read, str):
            read = [read]
        elif not isinstance(read, list):
            read = []
        if read_entry not in read:
            read.append(read_entry)
        payload["read"] = read

        return [
            OutputFile(instructions_path, rules_text),
            OutputFile(
                config_path,
                yaml.safe_dump(payload, default_flow_style=False, sort_keys=False),
            ),
        ]

    @staticmethod
    def _load_config(path: Path) -> dict[str, Any]:
        text = read_text_safe(path)
        if not text:
            return {}
        try:
            payload = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ConfigFileError(path, f"Invalid YAML ({exc})") from exc
        if payload is None:
            return {}
        if not isinstance(payload, dict):
            raise ConfigFileError(path, "Expected a YAML mapping")
        return payload
