"""Penalty objectives for the redistribution optimizer.

Each objective maps a float candidate vector to a non-negative penalty that is
zero only when the column sums, non-negativity and the system's shape
preferences all hold. Hard constraints carry a weight large enough to dominate
every shape term.
"""

import numpy as np

from loan_redistribution.engine.policy import ObjectiveKind
from loan_redistribution.engine.schedule import declining_balance_interest, implied_rate
from loan_redistribution.models.parameters import RedistributionParameters

HARD_WEIGHT = 1e12         # Column sums, non-negativity
PIN_WEIGHT = 1e10          # SAC principal held at P/n
SHAPE_WEIGHT = 1e8         # Monotonicity, row identity, amortization profile
WEAK_ORDER_WEIGHT = 1e6    # Variable principal: mild non-decreasing preference
CLUSTER_WEIGHT = 1e4       # Variable principal: stay near the mean


def _negative_penalty(values: np.ndarray) -> float:
    neg = np.minimum(values, 0.0)
    return HARD_WEIGHT * float(np.dot(neg, neg))


def _decrease_penalty(values: np.ndarray, weight: float) -> float:
    """Penalize every step where values go down."""
    drops = np.minimum(np.diff(values), 0.0)
    return weight * float(np.dot(drops, drops))


def _increase_penalty(values: np.ndarray, weight: float) -> float:
    """Penalize every step where values go up."""
    rises = np.maximum(np.diff(values), 0.0)
    return weight * float(np.dot(rises, rises))


class RedistributionObjective:
    """Shared float view of the parameters."""

    kind: ObjectiveKind

    def __init__(self, params: RedistributionParameters):
        self.count = params.installment_count
        self.outstanding_principal = float(params.outstanding_principal)
        self.outstanding_interest = float(params.outstanding_interest)
        self.installment = float(params.installment_amount)
        self.rate = float(params.monthly_rate)

    @property
    def blocks(self) -> list[int]:
        """Sizes of the consecutive variable groups that each carry a sum constraint."""
        return [self.count]

    def _sum_penalty(self, principal: np.ndarray, interest: np.ndarray) -> float:
        p_gap = float(principal.sum()) - self.outstanding_principal
        i_gap = float(interest.sum()) - self.outstanding_interest
        return HARD_WEIGHT * (p_gap * p_gap + i_gap * i_gap)


class ConstantPaymentObjective(RedistributionObjective):
    """PRICE-style: interest falls and principal rises, every row equals the installment.

    Principal is the only free vector; interest is installment - principal.
    Besides the ordering constraints, the candidate is pulled toward the
    principal profile of a level-payment schedule with the same principal,
    installment and count, so the optimum is strictly amortizing rather than
    any flat split that happens to satisfy the sums.
    """

    kind = ObjectiveKind.CONSTANT_PAYMENT

    def __init__(self, params: RedistributionParameters):
        super().__init__(params)
        self.target = self._level_payment_profile(params)

    def _level_payment_profile(self, params: RedistributionParameters) -> np.ndarray:
        rate = implied_rate(params.outstanding_principal, params.installment_amount, self.count)
        if rate is None:
            rate = params.monthly_rate
        r = float(rate)

        profile = np.empty(self.count)
        balance = self.outstanding_principal
        for idx in range(self.count):
            paid = self.installment - balance * r
            profile[idx] = paid
            balance -= paid
        # Shift onto the principal-sum plane
        profile += (self.outstanding_principal - profile.sum()) / self.count
        return profile

    def __call__(self, x: np.ndarray) -> float:
        principal = np.asarray(x, dtype=float)
        interest = self.installment - principal

        penalty = self._sum_penalty(principal, interest)
        penalty += _negative_penalty(principal)
        penalty += _negative_penalty(interest)

        penalty += _increase_penalty(interest, SHAPE_WEIGHT)
        penalty += _decrease_penalty(principal, SHAPE_WEIGHT)

        drift = principal - self.target
        penalty += SHAPE_WEIGHT * float(np.dot(drift, drift))
        return penalty


class VariablePrincipalObjective(RedistributionObjective):
    """Principal and interest both free: x = [p_0..p_{n-1}, i_0..i_{n-1}]."""

    kind = ObjectiveKind.VARIABLE_PRINCIPAL

    @property
    def blocks(self) -> list[int]:
        return [self.count, self.count]

    def __call__(self, x: np.ndarray) -> float:
        x = np.asarray(x, dtype=float)
        principal = x[:self.count]
        interest = x[self.count:]

        penalty = self._sum_penalty(principal, interest)
        penalty += _negative_penalty(principal)
        penalty += _negative_penalty(interest)

        # Last row is left free to absorb any gap between the balances and the installments
        row_gap = (principal + interest - self.installment)[:-1]
        penalty += SHAPE_WEIGHT * float(np.dot(row_gap, row_gap))

        spread = principal - principal.mean()
        penalty += CLUSTER_WEIGHT * float(np.dot(spread, spread))
        penalty += _decrease_penalty(principal, WEAK_ORDER_WEIGHT)
        return penalty


class ConstantAmortizationObjective(RedistributionObjective):
    """SAC: equal principal shares, interest on the declining balance."""

    kind = ObjectiveKind.CONSTANT_AMORTIZATION

    def __init__(self, params: RedistributionParameters):
        super().__init__(params)
        self.share = self.outstanding_principal / self.count
        self.expected_interest = np.array([
            float(i) for i in declining_balance_interest(
                params.outstanding_principal, params.monthly_rate, self.count
            )
        ])
        self.payments = self.share + self.expected_interest

    def __call__(self, x: np.ndarray) -> float:
        principal = np.asarray(x, dtype=float)

        pinned = principal - self.share
        penalty = PIN_WEIGHT * float(np.dot(pinned, pinned))
        penalty += _negative_penalty(principal)

        # Row totals with interest charged on the candidate's own running balance
        paid_before = np.concatenate(([0.0], np.cumsum(principal)[:-1]))
        interest = (self.outstanding_principal - paid_before) * self.rate
        row_gap = principal + interest - self.payments
        penalty += SHAPE_WEIGHT * float(np.dot(row_gap, row_gap))

        p_gap = float(principal.sum()) - self.outstanding_principal
        penalty += HARD_WEIGHT * p_gap * p_gap
        return penalty


_OBJECTIVES = {
    ObjectiveKind.CONSTANT_PAYMENT: ConstantPaymentObjective,
    ObjectiveKind.VARIABLE_PRINCIPAL: VariablePrincipalObjective,
    ObjectiveKind.CONSTANT_AMORTIZATION: ConstantAmortizationObjective,
}


def build_objective(kind: ObjectiveKind, params: RedistributionParameters) -> RedistributionObjective:
    return _OBJECTIVES[kind](params)
