from typing import Optional, Sequence

from rich.markup import escape
from rich.panel import Panel

from agent_rules.tui.enums import UIStyle
from agent_rules.utils import compact_home_paths_in_text


def section(
    title: str, body, style: str = UIStyle.BLUE.value, subtitle: Optional[str] = None
) -> Panel:
    return Panel(body, title=title, subtitle=subtitle, border_style=style, padding=(0, 1))


def note(title: str, body: str, style: str) -> Panel:
    return Panel(body, title=title, border_style=style, padding=(0, 1))


def bullet_note(title: str, items: Sequence[object], style: str) -> Panel:
    lines = [f"- {escape(compact_home_paths_in_text(str(item)))}" for item in items]
    return note(title, "\n".join(lines), style)
