"""Partial payment of the first installment and the redistribution it calls for."""

from dataclasses import dataclass
from decimal import Decimal

from loan_redistribution.engine.schedule import Schedule
from loan_redistribution.models.errors import RedistributionConfigError
from loan_redistribution.models.parameters import AmortizationSystem, RedistributionParameters


@dataclass(frozen=True)
class PartialPayment:
    paid: Decimal
    interest_paid: Decimal
    principal_paid: Decimal
    unpaid_installment: Decimal  # Part of the first installment still owed
    parameters: RedistributionParameters


def apply_partial_payment(
    schedule: Schedule,
    paid: Decimal,
    monthly_rate: Decimal,
    system: AmortizationSystem = AmortizationSystem.PRICE,
    principal_is_constant: bool = True,
) -> PartialPayment:
    """Settle part of installment 1 and build parameters for the rest.

    The payment covers installment 1's interest first; anything beyond that
    reduces principal. The remaining installments keep the schedule's payment,
    and whatever is left of installment 1 is carried in the outstanding
    balances, so the last redistributed row picks it up.
    """
    if len(schedule.rows) < 2:
        raise RedistributionConfigError("A partial payment needs at least two installments")
    first = schedule.rows[0]
    if paid < 0 or paid > first.payment:
        raise RedistributionConfigError(
            f"Partial payment ({paid}) must be between 0 and the installment ({first.payment})"
        )

    interest_paid = min(paid, first.interest)
    principal_paid = paid - interest_paid
    outstanding_principal = schedule.total_principal - principal_paid
    outstanding_interest = schedule.total_interest - interest_paid

    remaining = schedule.rows[1:]
    unpaid = first.payment - paid
    total = sum((r.payment for r in remaining), Decimal("0")) + unpaid

    params = RedistributionParameters(
        outstanding_installments_total=total,
        outstanding_principal=outstanding_principal,
        outstanding_interest=outstanding_interest,
        installment_amount=schedule.payment,
        installment_count=len(remaining),
        monthly_rate=monthly_rate,
        amortization_system=system,
        principal_is_constant=principal_is_constant,
    )
    return PartialPayment(
        paid=paid,
        interest_paid=interest_paid,
        principal_paid=principal_paid,
        unpaid_installment=unpaid,
        parameters=params,
    )
