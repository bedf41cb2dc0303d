"""Parameter models for mastery_trace.

A ParameterSet holds the five tunable probabilities of the
forgetting-aware knowledge tracing model for one skill.
"""

import math
from typing import Any

from pydantic import BaseModel, Field, model_validator

__all__ = [
    "FORGET_BOUNDS",
    "GUESS_BOUNDS",
    "GUESS_SLIP_MARGIN",
    "P_INIT_BOUNDS",
    "P_TRANSIT_BOUNDS",
    "SLIP_BOUNDS",
    "ParameterSet",
    "clamp_parameter_values",
]

P_INIT_BOUNDS: tuple[float, float] = (0.0, 0.50)
P_TRANSIT_BOUNDS: tuple[float, float] = (0.0, 0.20)
SLIP_BOUNDS: tuple[float, float] = (0.0, 0.30)
GUESS_BOUNDS: tuple[float, float] = (0.0, 0.40)
FORGET_BOUNDS: tuple[float, float] = (0.0, 0.05)

# Minimum gap kept between guess and 1 - slip
GUESS_SLIP_MARGIN = 0.05


def _clamp(value: Any, bounds: tuple[float, float]) -> Any:
    """Clamp a numeric value; anything else is left for field validation."""
    low, high = bounds
    try:
        number = float(value)
    except (TypeError, ValueError):
        return value
    if not math.isfinite(number):
        return low
    return min(high, max(low, number))


def clamp_parameter_values(values: dict[str, Any]) -> dict[str, Any]:
    """Clamp raw parameter values into their identifiable region.

    Order matters:
        1. each of p_init, p_transit, slip, guess to its own range
        2. guess lowered below 1 - slip - margin when violated
        3. forget to its range, None passed through

    Args:
        values: Raw field values (missing fields are left to model defaults)

    Returns:
        New dict with clamped values
    """
    out = dict(values)
    for name, bounds in (
        ("p_init", P_INIT_BOUNDS),
        ("p_transit", P_TRANSIT_BOUNDS),
        ("slip", SLIP_BOUNDS),
        ("guess", GUESS_BOUNDS),
    ):
        if out.get(name) is not None:
            out[name] = _clamp(out[name], bounds)

    slip = out.get("slip", ParameterSet.model_fields["slip"].default)
    guess = out.get("guess", ParameterSet.model_fields["guess"].default)
    # Only compare once both are numbers; other values fail type validation
    if isinstance(slip, float) and isinstance(guess, float):
        ceiling = 1.0 - slip - GUESS_SLIP_MARGIN
        if guess >= ceiling:
            out["guess"] = max(0.0, ceiling)

    if out.get("forget") is not None:
        out["forget"] = _clamp(out["forget"], FORGET_BOUNDS)
    return out


class ParameterSet(BaseModel, frozen=True):
    """Tunable knowledge tracing parameters for one skill.

    Out-of-range values are clamped on construction, never rejected,
    so every instance lies within the documented bounds.

    Attributes:
        p_init: Prior probability the skill is already known (0.0 - 0.50)
        p_transit: Learning transition per practice attempt (0.0 - 0.20)
        slip: Probability of answering wrong while knowing (0.0 - 0.30)
        guess: Probability of answering right while not knowing (0.0 - 0.40)
        forget: Per-day loss from the known state (0.0 - 0.05), None disables decay
        schema_version: Schema version for forward compatibility
    """

    p_init: float = Field(default=0.20, description="Prior mastery")
    p_transit: float = Field(default=0.10, description="Learning transition rate")
    slip: float = Field(default=0.10, description="Slip probability")
    guess: float = Field(default=0.18, description="Guess probability")
    forget: float | None = Field(default=0.01, description="Daily forgetting rate")
    schema_version: int = Field(default=1)

    @model_validator(mode="before")
    @classmethod
    def _clamp_fields(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return clamp_parameter_values(data)
        return data

    @property
    def decays(self) -> bool:
        """True when a positive forgetting rate is configured."""
        return self.forget is not None and self.forget > 0
