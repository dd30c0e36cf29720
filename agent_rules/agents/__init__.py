from agent_rules.agents.base import AgentAdapter, OutputFile
from agent_rules.agents.registry import (
    AGENT_CATALOG,
    agent_by_identifier,
    agent_identifiers,
    all_agents,
)

__all__ = [
    "AGENT_CATALOG",
    "AgentAdapter",
    "OutputFile",
    "agent_by_identifier",
    "agent_identifiers",
    "all_agents",
]
