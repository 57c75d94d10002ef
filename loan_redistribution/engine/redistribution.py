"""Redistribute outstanding principal and interest across the remaining installments.

Usage:
    params = RedistributionParameters(
        outstanding_installments_total=Decimal("3600"),
        outstanding_principal=Decimal("3000"),
        outstanding_interest=Decimal("600"),
        installment_amount=Decimal("1200"),
        installment_count=3,
        monthly_rate=Decimal("0.02"),
        amortization_system=AmortizationSystem.PRICE,
    )
    result = RedistributionEngine(params).redistribute()
"""

import logging
from decimal import Decimal

import numpy as np

from loan_redistribution.config import Settings, settings as default_settings
from loan_redistribution.engine.initial_guess import (
    INTEREST_DECAY,
    initial_guess,
    principal_guess,
)
from loan_redistribution.engine.objectives import build_objective
from loan_redistribution.engine.optimizer import Minimizer, NelderMeadMinimizer
from loan_redistribution.engine.policy import (
    ObjectiveKind,
    derives_interest_from_installment,
    dimension,
    select_objective_kind,
)
from loan_redistribution.engine.reconciliation import (
    reconcile_last_installment,
    round_currency,
    to_currency,
)
from loan_redistribution.engine.schedule import declining_balance_interest
from loan_redistribution.models.errors import RedistributionConfigError
from loan_redistribution.models.parameters import RedistributionParameters
from loan_redistribution.models.result import RedistributionResult, RedistributionResultBuilder

logger = logging.getLogger(__name__)


class RedistributionEngine:
    """One engine per parameter set. Holds no state between redistribute() calls."""

    def __init__(
        self,
        params: RedistributionParameters,
        minimizer: Minimizer | None = None,
        config: Settings | None = None,
    ):
        if not params.is_balanced:
            raise RedistributionConfigError(
                f"Outstanding installments total ({params.outstanding_installments_total}) must equal "
                f"principal + interest ({params.balances_total})"
            )
        self.params = params
        self.config = config or default_settings
        self.minimizer = minimizer or NelderMeadMinimizer(self.config)
        self.kind = select_objective_kind(params.amortization_system, params.principal_is_constant)

    def redistribute(self) -> RedistributionResult:
        params = self.params
        n = params.installment_count
        logger.debug(
            "Redistributing principal=%s interest=%s over %d installments (%s, %s, %d variables)",
            params.outstanding_principal, params.outstanding_interest, n,
            params.amortization_system.value, self.kind.value, dimension(self.kind, n),
        )

        if self.kind is ObjectiveKind.CONSTANT_AMORTIZATION and self.config.closed_form_sac:
            solution = principal_guess(params)
        else:
            solution = self._optimize()

        principal = to_currency(solution[:n])
        if derives_interest_from_installment(self.kind):
            interest = [round_currency(params.installment_amount - p) for p in principal]
            installments = [params.installment_amount] * n
        elif self.kind is ObjectiveKind.VARIABLE_PRINCIPAL:
            interest = to_currency(solution[n:])
            installments = [params.installment_amount] * n
        else:
            interest = self._declining_interest()
            share = round_currency(params.principal_share)
            installments = [share + i for i in interest]

        principal, interest = reconcile_last_installment(
            principal,
            interest,
            params.outstanding_principal,
            params.outstanding_interest,
            installments[-1],
        )

        return (
            RedistributionResultBuilder(
                tolerance=self.config.result_tolerance,
                include_last_row=self.config.validate_last_row,
            )
            .principal(principal)
            .interest(interest)
            .installments(installments)
            .outstanding_principal(params.outstanding_principal)
            .outstanding_interest(params.outstanding_interest)
            .build()
        )

    def _optimize(self) -> np.ndarray:
        # Fresh objective and seed per call; nothing is shared between runs
        objective = build_objective(self.kind, self.params)
        x0 = initial_guess(self.params, self.kind)
        outcome = self.minimizer.minimize(objective, x0, objective.blocks)
        logger.debug(
            "Optimizer finished: penalty=%.6g evaluations=%d restarts=%d converged=%s",
            outcome.value, outcome.evaluations, outcome.restarts, outcome.converged,
        )
        return outcome.x

    def _declining_interest(self) -> list[Decimal]:
        """SAC interest in cents: the balance recurrence scaled to the outstanding interest.

        The recurrence only fixes the shape, so the column always sums to the
        interest balance and stays non-negative and decreasing. A zero rate
        leaves the recurrence empty; exponential decay gives the shape instead.
        """
        params = self.params
        n = params.installment_count
        weights = np.array([
            float(i)
            for i in declining_balance_interest(params.outstanding_principal, params.monthly_rate, n)
        ])
        if not weights.any():
            weights = np.exp(-INTEREST_DECAY * np.arange(n))
        return to_currency(float(params.outstanding_interest) * weights / weights.sum())


def redistribute(
    params: RedistributionParameters,
    minimizer: Minimizer | None = None,
    config: Settings | None = None,
) -> RedistributionResult:
    return RedistributionEngine(params, minimizer=minimizer, config=config).redistribute()
