"""Merge rule fragments into the single document agents read."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

from agent_rules.rules.models import RuleFragment
from agent_rules.utils import relpath


SEPARATOR = "---"


def render_fragment(fragment: RuleFragment, base_dir: Path) -> str:
    return "\n".join(
        [
            SEPARATOR,
            f"Source: {relpath(Path(fragment.path), base_dir)}",
            SEPARATOR,
            fragment.content.strip(),
            "",
        ]
    )


def concatenate_rules(
    fragments: Sequence[RuleFragment], base_dir: Optional[Path] = None
) -> str:
    """Join fragments in order, each labelled with its path relative to base_dir.

    base_dir defaults to the current working directory. The output depends
    only on the inputs, so identical fragments always produce identical text.
    """
    base = Path(base_dir) if base_dir is not None else Path.cwd()
    return "\n".join(render_fragment(fragment, base) for fragment in fragments)
