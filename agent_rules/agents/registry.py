from typing import Optional

from agent_rules.agents.aider import AiderAgent
from agent_rules.agents.base import AgentAdapter
from agent_rules.agents.cursor import CursorAgent
from agent_rules.agents.markdown import MarkdownAgent


AGENT_CATALOG: tuple[AgentAdapter, ...] = (
    MarkdownAgent("copilot", "GitHub Copilot", ".github/copilot-instructions.md"),
    MarkdownAgent("claude", "Claude Code", "CLAUDE.md"),
    MarkdownAgent("codex", "OpenAI Codex CLI", "AGENTS.md"),
    CursorAgent(),
    MarkdownAgent("windsurf", "Windsurf", ".windsurf/rules/agent_rules.md"),
    MarkdownAgent("cline", "Cline", ".clinerules"),
    AiderAgent(),
    MarkdownAgent("firebase", "Firebase Studio", ".idx/airules.md"),
    MarkdownAgent("openhands", "Open Hands", ".openhands/microagents/repo.md"),
    MarkdownAgent("gemini-cli", "Gemini CLI", "GEMINI.md"),
    MarkdownAgent("junie", "Junie", ".junie/guidelines.md"),
    MarkdownAgent("augmentcode", "AugmentCode", ".augment/rules/agent_rules.md"),
    MarkdownAgent("kilocode", "Kilo Code", ".kilocode/rules/agent_rules.md"),
    MarkdownAgent("amp", "Amp", "AGENT.md"),
    MarkdownAgent("crush", "Crush", "CRUSH.md"),
    MarkdownAgent("warp", "Warp", "WARP.md"),
    MarkdownAgent("kiro", "Kiro", ".kiro/steering/agent_rules.md"),
    MarkdownAgent("trae", "Trae AI", ".trae/rules/project_rules.md"),
)


def all_agents() -> list[AgentAdapter]:
    return list(AGENT_CATALOG)


def agent_identifiers() -> list[str]:
    return [agent.identifier for agent in AGENT_CATALOG]


def agent_by_identifier(identifier: str) -> Optional[AgentAdapter]:
    for agent in AGENT_CATALOG:
        if agent.identifier == identifier:
            return agent
    return None
