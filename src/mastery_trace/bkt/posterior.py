"""Posterior updater for mastery_trace.

Implements the two-step knowledge tracing update:

1. Evidence step (Bayes rule over the binary outcome)
       P(L | correct) = L(1-S) / (L(1-S) + (1-L)G)
       P(L | wrong)   = LS / (LS + (1-L)(1-G))
2. Learning transition, applied whatever the outcome
       P(L_next) = P(L | obs) + (1 - P(L | obs)) * T
"""

from mastery_trace.bkt.forgetting import clamp_probability
from mastery_trace.models.parameters import ParameterSet

__all__ = [
    "STABILITY_EPSILON",
    "apply_learning_transition",
    "posterior_given_obs",
    "predict_correct",
    "update_mastery",
]

# Denominators at or below this are treated as degenerate
STABILITY_EPSILON = 1e-12


def predict_correct(p_know: float, params: ParameterSet) -> float:
    """Probability of a correct answer given the current mastery.

    Formula:
        P(correct) = L(1 - S) + (1 - L)G
    """
    p_l = clamp_probability(p_know)
    return clamp_probability(p_l * (1.0 - params.slip) + (1.0 - p_l) * params.guess)


def posterior_given_obs(p_know: float, correct: bool, params: ParameterSet) -> float:
    """Bayesian evidence step for one observation.

    When the denominator is numerically negligible the prior is returned
    unchanged.

    Args:
        p_know: Prior mastery probability
        correct: Whether the answer was correct
        params: Parameters supplying slip and guess

    Returns:
        Posterior mastery probability given the observation
    """
    p_l = clamp_probability(p_know)
    p_s = clamp_probability(params.slip)
    p_g = clamp_probability(params.guess)

    if correct:
        numerator = p_l * (1.0 - p_s)
        denominator = numerator + (1.0 - p_l) * p_g
    else:
        numerator = p_l * p_s
        denominator = numerator + (1.0 - p_l) * (1.0 - p_g)

    if denominator <= STABILITY_EPSILON:
        return p_l
    return clamp_probability(numerator / denominator)


def apply_learning_transition(posterior: float, p_transit: float) -> float:
    """Chance of newly acquiring the skill on any practice attempt."""
    posterior = clamp_probability(posterior)
    return clamp_probability(posterior + (1.0 - posterior) * clamp_probability(p_transit))


def update_mastery(p_know: float, correct: bool, params: ParameterSet) -> float:
    """Complete update: evidence step followed by learning transition."""
    posterior = posterior_given_obs(p_know, correct, params)
    return apply_learning_transition(posterior, params.p_transit)
