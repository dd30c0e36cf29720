from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class AgentConfig:
    enabled: Optional[bool] = None
    output_path: Optional[str] = None
    output_path_config: Optional[str] = None


@dataclass(frozen=True)
class LoadedConfig:
    cli_agents: list[str] = field(default_factory=list)
    default_agents: list[str] = field(default_factory=list)
    agent_configs: dict[str, AgentConfig] = field(default_factory=dict)
    gitignore_enabled: Optional[bool] = None
    project_root: Optional[Path] = None
    rules_dir: Optional[Path] = None
    config_path: Optional[Path] = None

    def agent_config(self, identifier: str) -> Optional[AgentConfig]:
        return self.agent_configs.get(identifier)
