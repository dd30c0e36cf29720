import logging
import os
from pathlib import Path
from typing import Any, Iterable, Optional, Sequence

try:
    import tomllib
except ModuleNotFoundError:  # pragma: no cover
    import tomli as tomllib  # type: ignore

import yaml
from jsonschema import Draft202012Validator

from agent_rules.agents.base import AgentAdapter
from agent_rules.agents.registry import all_agents
from agent_rules.config.models import AgentConfig, LoadedConfig
from agent_rules.config.schema import CONFIG_SCHEMA, format_schema_error
from agent_rules.constants import CONFIG_FILENAMES, GLOBAL_RULES_DIRNAME, RULES_DIRNAME
from agent_rules.errors import (
    InvalidConfigFormatError,
    InvalidConfigSchemaError,
    RulesDirectoryNotFoundError,
)


logger = logging.getLogger(__name__)


def parse_agent_list(value: Optional[str]) -> list[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def global_rules_dir() -> Path:
    xdg = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg) if xdg else Path.home() / ".config"
    return base / GLOBAL_RULES_DIRNAME


def find_rules_dir(project_root: Path, check_global: bool = True) -> Path:
    start = project_root.resolve()
    for candidate in (start, *start.parents):
        rules_dir = candidate / RULES_DIRNAME
        if rules_dir.is_dir():
            logger.debug("Using rules directory %s", rules_dir)
            return rules_dir

    if check_global:
        fallback = global_rules_dir()
        if fallback.is_dir():
            logger.debug("Using global rules directory %s", fallback)
            return fallback

    raise RulesDirectoryNotFoundError(start)


def find_config_file(rules_dir: Optional[Path]) -> Optional[Path]:
    if rules_dir is None:
        return None
    for name in CONFIG_FILENAMES:
        candidate = rules_dir / name
        if candidate.is_file():
            return candidate
    return None


def read_config_payload(path: Path) -> dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    try:
        if path.suffix == ".toml":
            payload = tomllib.loads(text)
        else:
            payload = yaml.safe_load(text)
    except (tomllib.TOMLDecodeError, yaml.YAMLError) as exc:
        raise InvalidConfigFormatError(path, str(exc)) from exc

    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise InvalidConfigSchemaError(path, "top-level value must be a table")

    errors = sorted(
        Draft202012Validator(CONFIG_SCHEMA).iter_errors(payload),
        key=lambda item: list(item.path),
    )
    if errors:
        raise InvalidConfigSchemaError(path, format_schema_error(errors[0]))
    return payload


def map_raw_agent_configs(
    raw: dict[str, Any], agents: Iterable[AgentAdapter]
) -> dict[str, AgentConfig]:
    agent_list = list(agents)
    mapped: dict[str, AgentConfig] = {}
    for key, value in raw.items():
        settings = value if isinstance(value, dict) else {}
        config = AgentConfig(
            enabled=settings.get("enabled"),
            output_path=settings.get("output_path"),
            output_path_config=settings.get("output_path_config"),
        )
        matched = [agent for agent in agent_list if agent.matches(key)]
        if not matched:
            logger.warning("Config entry [agents.%s] matches no known agent", key)
        for agent in matched:
            mapped[agent.identifier] = config
    return mapped


def load_config(
    project_root: Path,
    cli_agents: Optional[Sequence[str]] = None,
    config_path: Optional[Path] = None,
    agents: Optional[Iterable[AgentAdapter]] = None,
) -> LoadedConfig:
    root = project_root.resolve()
    try:
        rules_dir: Optional[Path] = find_rules_dir(root)
    except RulesDirectoryNotFoundError:
        if config_path is None:
            raise
        rules_dir = None

    path = config_path or find_config_file(rules_dir)
    payload: dict[str, Any] = {}
    if path is not None:
        if not path.is_file():
            raise InvalidConfigFormatError(path, "file does not exist")
        logger.debug("Loading config from %s", path)
        payload = read_config_payload(path)

    gitignore = payload.get("gitignore", {})
    return LoadedConfig(
        cli_agents=list(cli_agents or []),
        default_agents=list(payload.get("default_agents", [])),
        agent_configs=map_raw_agent_configs(
            payload.get("agents", {}), agents if agents is not None else all_agents()
        ),
        gitignore_enabled=gitignore.get("enabled"),
        project_root=root,
        rules_dir=rules_dir,
        config_path=path,
    )
