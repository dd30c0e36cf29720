from agent_rules.tui.renderers import SyncConsoleUI

__all__ = ["SyncConsoleUI"]
