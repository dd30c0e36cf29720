"""Managed .gitignore block listing generated files.

Only the lines between the block markers are ever rewritten. Removing the
block restores the surrounding text exactly as it was before the block was
appended.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from agent_rules.constants import (
    GITIGNORE_BLOCK_END,
    GITIGNORE_BLOCK_START,
    GITIGNORE_FILENAME,
)
from agent_rules.models import Action, ActionKind, ActionStatus
from agent_rules.utils import backup_path_for, read_bytes_safe, relative_posix


@dataclass(frozen=True)
class ManagedBlock:
    before: str
    lines: list[str]
    after: str


def _read_raw(path: Path) -> Optional[str]:
    raw = read_bytes_safe(path)
    return None if raw is None else raw.decode("utf-8")


def _render_block(entries: list[str]) -> str:
    return "".join(
        f"{line}\n" for line in (GITIGNORE_BLOCK_START, *entries, GITIGNORE_BLOCK_END)
    )


class GitignoreService:
    def __init__(self, project_root: Path) -> None:
        self._project_root = project_root

    @property
    def path(self) -> Path:
        return self._project_root / GITIGNORE_FILENAME

    @staticmethod
    def split_block(text: str) -> Optional[ManagedBlock]:
        lines = text.splitlines(keepends=True)
        markers = [line.rstrip("\r\n") for line in lines]
        try:
            start = markers.index(GITIGNORE_BLOCK_START)
            end = markers.index(GITIGNORE_BLOCK_END, start + 1)
        except ValueError:
            return None
        return ManagedBlock(
            before="".join(lines[:start]),
            lines=markers[start + 1 : end],
            after="".join(lines[end + 1 :]),
        )

    def read_entries(self) -> list[str]:
        block = self.split_block(_read_raw(self.path) or "")
        if block is None:
            return []
        return [
            line.strip()
            for line in block.lines
            if line.strip() and not line.strip().startswith("#")
        ]

    def entries_for(self, paths: Iterable[Path], backup_suffix: str) -> list[str]:
        entries: list[str] = []
        for path in paths:
            for candidate in (path, backup_path_for(path, backup_suffix)):
                relative = relative_posix(candidate, self._project_root)
                if relative is None:
                    continue
                entry = f"/{relative}"
                if entry not in entries:
                    entries.append(entry)
        return entries

    def render(self, text: str, entries: list[str]) -> str:
        block = self.split_block(text)
        if block is None:
            if not entries:
                return text
            # One newline either ends an unterminated last line or adds a
            # blank separator; removal strips exactly that one newline.
            separator = "\n" if text else ""
            return f"{text}{separator}{_render_block(entries)}"

        if entries:
            return f"{block.before}{_render_block(entries)}{block.after}"

        if not block.after:
            return block.before[:-1] if block.before.endswith("\n") else block.before
        if block.before.endswith("\n\n") and block.after.startswith("\n"):
            return f"{block.before}{block.after[1:]}"
        return f"{block.before}{block.after}"

    def plan_update(
        self, add: Iterable[str] = (), remove: Iterable[str] = ()
    ) -> Optional[Action]:
        current = _read_raw(self.path)
        removed = set(remove)
        entries = [entry for entry in self.read_entries() if entry not in removed]
        for entry in add:
            if entry not in entries:
                entries.append(entry)
        entries.sort()

        text = current or ""
        if not entries and self.split_block(text) is None:
            return None
        rendered = self.render(text, entries)
        if rendered == current:
            return None
        if not rendered:
            return Action(
                ActionKind.REMOVE_FILE,
                self.path,
                ActionStatus.REMOVE,
                "remove empty .gitignore",
            )
        return Action(
            ActionKind.WRITE_TEXT,
            self.path,
            ActionStatus.CREATE if current is None else ActionStatus.UPDATE,
            "update managed .gitignore block",
            payload=rendered,
            backup=False,
        )
