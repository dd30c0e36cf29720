from typing import Final


APP_NAME: Final[str] = "agent-rules"

RULES_DIRNAME: Final[str] = ".agent-rules"
GLOBAL_RULES_DIRNAME: Final[str] = "agent-rules"
DEFAULT_INSTRUCTIONS_FILENAME: Final[str] = "instructions.md"
RULE_FILE_SUFFIX: Final[str] = ".md"

CONFIG_FILENAMES: Final[tuple[str, ...]] = (
    "agent-rules.toml",
    "agent-rules.yaml",
    "agent-rules.yml",
)

DEFAULT_BACKUP_SUFFIX: Final[str] = ".bak"

GITIGNORE_FILENAME: Final[str] = ".gitignore"
GITIGNORE_BLOCK_START: Final[str] = "# START agent-rules generated files"
GITIGNORE_BLOCK_END: Final[str] = "# END agent-rules generated files"
