"""Starting points for the simplex search.

The seed only has to be close enough that Nelder-Mead neither collapses nor
wanders off; it does not have to satisfy the constraints.
"""

import numpy as np

from loan_redistribution.engine.policy import ObjectiveKind, is_joint
from loan_redistribution.models.parameters import RedistributionParameters

INTEREST_DECAY = 0.3  # Interest-only seed: steep front-loading
JOINT_DECAY = 0.1     # Joint seed: flatter, principal already absorbs the shape


def principal_guess(params: RedistributionParameters) -> np.ndarray:
    """Outstanding principal split evenly."""
    share = float(params.outstanding_principal) / params.installment_count
    return np.full(params.installment_count, share)


def interest_guess(
    params: RedistributionParameters,
    principal: np.ndarray,
    decay: float = INTEREST_DECAY,
) -> np.ndarray:
    """Outstanding interest spread with weights exp(-decay * i).

    Each value is capped at installment - principal[i] (never below zero).
    """
    weights = np.exp(-decay * np.arange(params.installment_count))
    interest = float(params.outstanding_interest) * weights / weights.sum()
    room = np.maximum(float(params.installment_amount) - principal, 0.0)
    return np.minimum(interest, room)


def initial_guess(params: RedistributionParameters, kind: ObjectiveKind) -> np.ndarray:
    principal = principal_guess(params)
    if not is_joint(kind):
        return principal
    return np.concatenate((principal, interest_guess(params, principal, JOINT_DECAY)))
