from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from agent_rules.config.models import AgentConfig


@dataclass(frozen=True)
class OutputFile:
    path: Path
    content: str


def resolve_override(project_root: Path, override: Optional[str]) -> Optional[Path]:
    if not override:
        return None
    return project_root / Path(override).expanduser()


class AgentAdapter(ABC):
    @property
    @abstractmethod
    def identifier(self) -> str:
        raise NotImplementedError

    @property
    @abstractmethod
    def display_name(self) -> str:
        raise NotImplementedError

    @abstractmethod
    def default_output_path(self, project_root: Path) -> Path:
        raise NotImplementedError

    def output_path(
        self, project_root: Path, config: Optional[AgentConfig] = None
    ) -> Path:
        override = resolve_override(
            project_root, config.output_path if config is not None else None
        )
        return override or self.default_output_path(project_root)

    def output_paths(
        self, project_root: Path, config: Optional[AgentConfig] = None
    ) -> list[Path]:
        return [self.output_path(project_root, config)]

    def render_outputs(
        self,
        rules_text: str,
        project_root: Path,
        config: Optional[AgentConfig] = None,
    ) -> list[OutputFile]:
        return [OutputFile(self.output_path(project_root, config), rules_text)]

    def matches(self, name: str) -> bool:
        needle = name.lower()
        return self.identifier == needle or needle in self.display_name.lower()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.identifier}>"
