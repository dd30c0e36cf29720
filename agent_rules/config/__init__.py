from agent_rules.config.models import AgentConfig, LoadedConfig

__all__ = ["AgentConfig", "LoadedConfig"]
