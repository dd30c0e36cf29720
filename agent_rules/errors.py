from pathlib import Path
from typing import Optional, Sequence

from agent_rules.constants import APP_NAME


ERROR_PREFIX = f"[{APP_NAME}]"


def format_error(message: str, context: Optional[str] = None) -> str:
    if context:
        return f"{ERROR_PREFIX} {message} (Context: {context})"
    return f"{ERROR_PREFIX} {message}"


class AgentRulesError(Exception):
    """Base user-facing application error."""

    def __init__(self, message: str, context: Optional[str] = None) -> None:
        self.message = message
        self.context = context
        super().__init__(format_error(message, context))


class InvalidAgentError(AgentRulesError):
    def __init__(
        self,
        message: str,
        invalid_names: Sequence[str],
        valid_identifiers: Sequence[str],
    ) -> None:
        self.invalid_names = list(invalid_names)
        self.valid_identifiers = list(valid_identifiers)
        super().__init__(
            f"{message}: {', '.join(self.invalid_names)}",
            f"Valid agents are: {', '.join(self.valid_identifiers)}",
        )


class RulesDirectoryNotFoundError(AgentRulesError):
    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(
            f"Rules directory not found from {path}",
            "Run 'agent-rules init' to create one",
        )


class ConfigFileError(AgentRulesError):
    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        super().__init__(f"{message}: {path}")


class InvalidConfigFormatError(ConfigFileError):
    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Invalid config format ({detail})")


class InvalidConfigSchemaError(ConfigFileError):
    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Invalid config schema ({detail})")
