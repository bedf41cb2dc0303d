"""Skill resolver interface for mastery_trace.

This module defines the Protocol for looking up which skills an item
maps to.
"""

from typing import Protocol, runtime_checkable

__all__ = [
    "SkillResolverInterface",
]


@runtime_checkable
class SkillResolverInterface(Protocol):
    """Contract for item-to-skill resolution.

    Explicit item skills take precedence; otherwise an item inheriting
    its collection's default skill maps to that skill; otherwise it
    maps to nothing.
    """

    async def skills_for_item(self, item_id: str) -> list[str]:
        """Resolve the skills an item maps to.

        Args:
            item_id: Item ID

        Returns:
            Skill IDs, primary skill first; empty if the item has none
        """
        ...
