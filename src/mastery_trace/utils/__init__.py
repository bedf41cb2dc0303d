"""Helpers for applications integrating mastery_trace.

Skill name helpers are meant for SkillResolverInterface implementations
that map free-text skill labels to skill IDs.
"""

from mastery_trace.utils.skills import (
    MAX_SKILL_NAME_LENGTH,
    display_skill_name,
    normalize_skill_name,
)

__all__ = [
    "MAX_SKILL_NAME_LENGTH",
    "display_skill_name",
    "normalize_skill_name",
]
