"""Resolve which agents a run targets.

Precedence, first non-empty tier wins:

1. ``cli_agents``: agents matching any CLI filter.
2. ``default_agents``: per-agent ``enabled`` when explicitly set, otherwise
   membership in the default list.
3. Every agent whose ``enabled`` flag is not explicitly ``False``.

A filter matches an agent when it equals the identifier or is a substring of
the lower-cased display name. Tiers 1 and 2 reject the whole call if any
filter matches no agent.
"""

import logging
from typing import Sequence

from agent_rules.agents.base import AgentAdapter
from agent_rules.config.models import LoadedConfig
from agent_rules.errors import InvalidAgentError


logger = logging.getLogger(__name__)


def _normalize(names: Sequence[str]) -> list[str]:
    return [name.lower() for name in names]


def _matches_any(agent: AgentAdapter, filters: Sequence[str]) -> bool:
    return any(agent.matches(item) for item in filters)


def find_invalid_filters(
    filters: Sequence[str], agents: Sequence[AgentAdapter]
) -> list[str]:
    identifiers = {agent.identifier for agent in agents}
    names = [agent.display_name.lower() for agent in agents]
    return [
        item
        for item in filters
        if item not in identifiers and not any(item in name for name in names)
    ]


def validate_filters(
    filters: Sequence[str], agents: Sequence[AgentAdapter], message: str
) -> None:
    invalid = find_invalid_filters(filters, agents)
    if invalid:
        raise InvalidAgentError(
            message,
            invalid_names=invalid,
            valid_identifiers=[agent.identifier for agent in agents],
        )


def select_by_filters(
    filters: Sequence[str], agents: Sequence[AgentAdapter]
) -> list[AgentAdapter]:
    normalized = _normalize(filters)
    validate_filters(normalized, agents, "Invalid agent specified")
    return [agent for agent in agents if _matches_any(agent, normalized)]


def resolve_selected_agents(
    config: LoadedConfig, agents: Sequence[AgentAdapter]
) -> list[AgentAdapter]:
    if config.cli_agents:
        selected = select_by_filters(config.cli_agents, agents)
        logger.debug(
            "Selected agents from CLI filters: %s",
            ", ".join(agent.identifier for agent in selected),
        )
        return selected

    if config.default_agents:
        defaults = _normalize(config.default_agents)
        validate_filters(
            defaults, agents, "Invalid agent specified in default_agents"
        )
        selected = []
        for agent in agents:
            agent_config = config.agent_config(agent.identifier)
            override = agent_config.enabled if agent_config is not None else None
            if override is not None:
                if override:
                    selected.append(agent)
                continue
            if _matches_any(agent, defaults):
                selected.append(agent)
        logger.debug(
            "Selected agents from default_agents: %s",
            ", ".join(agent.identifier for agent in selected),
        )
        return selected

    selected = []
    for agent in agents:
        agent_config = config.agent_config(agent.identifier)
        if agent_config is not None and agent_config.enabled is False:
            continue
        selected.append(agent)
    return selected
