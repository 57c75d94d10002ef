"""Float-to-currency conversion and last-installment reconciliation."""

from decimal import Decimal, ROUND_HALF_EVEN
from typing import Iterable, Sequence

TWO_PLACES = Decimal("0.01")


def round_currency(amount: Decimal) -> Decimal:
    """Two places, banker's rounding."""
    return amount.quantize(TWO_PLACES, ROUND_HALF_EVEN)


def to_currency(values: Iterable[float]) -> list[Decimal]:
    """Optimizer floats to cents. repr() keeps the shortest round-tripping digits."""
    return [round_currency(Decimal(repr(float(v)))) for v in values]


def reconcile_last_installment(
    principal: Sequence[Decimal],
    interest: Sequence[Decimal],
    outstanding_principal: Decimal,
    outstanding_interest: Decimal,
    last_installment: Decimal,
) -> tuple[list[Decimal], list[Decimal]]:
    """Make both columns sum exactly to their balances by adjusting the last row.

    Principal goes first, with the last interest provisionally set to
    last_installment - last principal. Interest is then recomputed from its own
    balance and has the final word, so the last row may end up a cent away
    from last_installment.
    """
    principal = list(principal)
    interest = list(interest)

    others = sum(principal[:-1], Decimal("0"))
    principal[-1] = round_currency(outstanding_principal - others)
    interest[-1] = round_currency(last_installment - principal[-1])

    others = sum(interest[:-1], Decimal("0"))
    interest[-1] = round_currency(outstanding_interest - others)
    return principal, interest
