"""Knowledge tracing math for mastery_trace.

Pure, synchronous functions with no I/O:
- Parameter clamping and default substitution
- Geometric per-day forgetting projection
- Bayesian evidence step plus learning transition
- Closed-form next-review solve with a fallback ladder
"""

from mastery_trace.bkt.forgetting import elapsed_days, project_forgetting
from mastery_trace.bkt.parameters import DEFAULT_PARAMETERS, ParameterModel, clamp_parameters
from mastery_trace.bkt.posterior import (
    apply_learning_transition,
    posterior_given_obs,
    predict_correct,
    update_mastery,
)
from mastery_trace.bkt.schedule import ladder_days, minimum_interval_days, next_review

__all__ = [
    "DEFAULT_PARAMETERS",
    "ParameterModel",
    "apply_learning_transition",
    "clamp_parameters",
    "elapsed_days",
    "ladder_days",
    "minimum_interval_days",
    "next_review",
    "posterior_given_obs",
    "predict_correct",
    "project_forgetting",
    "update_mastery",
]
