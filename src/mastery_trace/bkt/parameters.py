"""Parameter model for mastery_trace.

Clamps tuned parameters into their valid region and substitutes an
explicit default set when a skill has no tuned parameters.
"""

from collections.abc import Mapping
from typing import Any

from mastery_trace.models.parameters import ParameterSet, clamp_parameter_values

__all__ = [
    "DEFAULT_PARAMETERS",
    "ParameterModel",
    "clamp_parameters",
]

DEFAULT_PARAMETERS = ParameterSet(
    p_init=0.20,
    p_transit=0.10,
    slip=0.10,
    guess=0.18,
    forget=0.01,
)


def clamp_parameters(params: ParameterSet | Mapping[str, Any]) -> ParameterSet:
    """Clamp parameters into bounds.

    Pure, total and idempotent: clamp_parameters(clamp_parameters(p))
    equals clamp_parameters(p).

    Args:
        params: ParameterSet or mapping of raw field values

    Returns:
        ParameterSet within bounds
    """
    if isinstance(params, ParameterSet):
        values = params.model_dump()
    else:
        values = dict(params)
    return ParameterSet.model_validate(clamp_parameter_values(values))


class ParameterModel:
    """Resolves the effective parameters for a skill.

    The default set is injected rather than read from shared state, so
    callers and tests can swap defaults without touching globals.

    Example:
        model = ParameterModel(config.bkt.to_parameters())
        params = model.resolve(await storage.get_parameters(skill_id))
    """

    def __init__(self, defaults: ParameterSet | None = None) -> None:
        self._defaults = clamp_parameters(defaults or DEFAULT_PARAMETERS)

    @property
    def defaults(self) -> ParameterSet:
        return self._defaults

    def resolve(
        self,
        params: ParameterSet | Mapping[str, Any] | None,
    ) -> ParameterSet:
        """Return clamped tuned parameters, or the defaults when absent."""
        if params is None:
            return self._defaults
        return clamp_parameters(params)
