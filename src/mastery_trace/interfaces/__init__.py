"""Interface contracts for mastery_trace.

This module exports the Protocol-based interfaces of the external
collaborators the library depends on.
"""

from mastery_trace.interfaces.skills import SkillResolverInterface
from mastery_trace.interfaces.storage import MasteryStorageInterface

__all__ = [
    "MasteryStorageInterface",
    "SkillResolverInterface",
]
