"""Discover rule fragments in the rules directory."""

from __future__ import annotations

import logging
from pathlib import Path

from agent_rules.constants import RULE_FILE_SUFFIX
from agent_rules.rules.models import RuleFragment


logger = logging.getLogger(__name__)


def _is_hidden(path: Path, root: Path) -> bool:
    return any(part.startswith(".") for part in path.relative_to(root).parts)


def list_rule_files(rules_dir: Path) -> list[Path]:
    if not rules_dir.is_dir():
        return []
    files = [
        path
        for path in rules_dir.rglob(f"*{RULE_FILE_SUFFIX}")
        if path.is_file() and not _is_hidden(path, rules_dir)
    ]
    return sorted(files, key=lambda item: item.relative_to(rules_dir).as_posix())


def load_rule_fragments(rules_dir: Path) -> list[RuleFragment]:
    fragments: list[RuleFragment] = []
    for path in list_rule_files(rules_dir):
        logger.debug("Reading rule fragment %s", path)
        fragments.append(RuleFragment(path=path, content=path.read_text(encoding="utf-8")))
    return fragments
