"""Skill name utilities for mastery_trace.

Skill labels are matched by a normalized key so that "Linear  Algebra"
and "linear algebra" resolve to the same skill. The library itself works
with skill IDs only; these helpers are public for skill resolvers that
look skills up by label, for example:

    class LabelSkillResolver:
        async def skills_for_item(self, item_id: str) -> list[str]:
            labels = await load_labels(item_id)
            return [skill_ids[normalize_skill_name(label)] for label in labels]
"""

import re

__all__ = [
    "MAX_SKILL_NAME_LENGTH",
    "display_skill_name",
    "normalize_skill_name",
]

MAX_SKILL_NAME_LENGTH = 40

_WHITESPACE = re.compile(r"\s+")


def display_skill_name(name: str) -> str:
    """Clean a raw label for display.

    Trims, collapses internal whitespace and cuts to the maximum length.

    Args:
        name: Raw skill label

    Returns:
        Display name
    """
    return _WHITESPACE.sub(" ", name).strip()[:MAX_SKILL_NAME_LENGTH]


def normalize_skill_name(name: str) -> str:
    """Matching key for a skill label: lowercase, single-spaced, trimmed."""
    return _WHITESPACE.sub(" ", name.lower()).strip()
