"""CLI for redistributing a loan after a partial first payment.

Usage:
    python -m loan_redistribution.cli --financed 1500 --rate 0.08 --installments 12 --paid 150
    python -m loan_redistribution.cli --financed 1500 --rate 0.08 --installments 12 --paid 150 --system sac
    python -m loan_redistribution.cli ... --variable-principal
"""

import argparse
import logging
import sys
from decimal import Decimal, InvalidOperation
from typing import Sequence

from loan_redistribution.config import settings
from loan_redistribution.engine.partial_payment import apply_partial_payment
from loan_redistribution.engine.redistribution import redistribute
from loan_redistribution.engine.schedule import price_schedule
from loan_redistribution.models.errors import RedistributionError
from loan_redistribution.models.parameters import AmortizationSystem


def _money(v: Decimal) -> str:
    return f"{v:>12,.2f}"


def _header(title: str) -> None:
    print(f"\n{'=' * 64}")
    print(f"  {title}")
    print(f"{'=' * 64}")


def print_table(
    principal: Sequence[Decimal],
    interest: Sequence[Decimal],
    payments: Sequence[Decimal],
) -> None:
    """Period / principal / interest / payment / running principal balance."""
    print(f"  {'#':>3} | {'Principal':>12} | {'Interest':>12} | {'Payment':>12} | {'Balance':>12}")
    print(f"  {'-' * 3}-+-{'-' * 12}-+-{'-' * 12}-+-{'-' * 12}-+-{'-' * 12}")

    balance = sum(principal, Decimal("0"))
    for period, (p, i, pmt) in enumerate(zip(principal, interest, payments), start=1):
        balance -= p
        print(f"  {period:>3} | {_money(p)} | {_money(i)} | {_money(pmt)} | {_money(max(balance, Decimal('0')))}")

    print(
        f"  {'TOT':>3} | {_money(sum(principal, Decimal('0')))} | {_money(sum(interest, Decimal('0')))}"
        f" | {_money(sum(payments, Decimal('0')))} |"
    )


def _decimal(value: str) -> Decimal:
    try:
        return Decimal(value)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"not a decimal amount: {value!r}")


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Redistribute installments after a partial payment")
    parser.add_argument("--financed", type=_decimal, default=Decimal("1500"), help="Financed amount (default: 1500)")
    parser.add_argument("--rate", type=_decimal, default=Decimal("0.08"), help="Monthly rate (default: 0.08)")
    parser.add_argument("--installments", type=int, default=12, help="Installment count (default: 12)")
    parser.add_argument("--paid", type=_decimal, default=Decimal("150"), help="Paid on installment 1 (default: 150)")
    parser.add_argument(
        "--system", choices=[s.value for s in AmortizationSystem], default=AmortizationSystem.PRICE.value,
        help="Amortization system for the redistribution",
    )
    parser.add_argument(
        "--variable-principal", action="store_true",
        help="Optimize interest as a free variable instead of deriving it from the installment",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")

    schedule = price_schedule(args.financed, args.rate, args.installments)
    _header(f"Financed {args.financed:,.2f} in {args.installments} x {schedule.payment:,.2f} at {args.rate:%} a month")
    print_table(schedule.principal, schedule.interest, [r.payment for r in schedule.rows])

    try:
        partial = apply_partial_payment(
            schedule,
            args.paid,
            args.rate,
            system=AmortizationSystem(args.system),
            principal_is_constant=not args.variable_principal,
        )
        result = redistribute(partial.parameters)
    except RedistributionError as e:
        print(f"\n  Error: {e}", file=sys.stderr)
        return 1

    params = partial.parameters
    _header(f"Partial payment of {partial.paid:,.2f} on installment 1")
    print(f"  Interest paid:      {partial.interest_paid:,.2f}")
    print(f"  Principal paid:     {partial.principal_paid:,.2f}")
    print(f"  Still owed on #1:   {partial.unpaid_installment:,.2f}")
    print(f"  Principal balance:  {params.outstanding_principal:,.2f}")
    print(f"  Interest balance:   {params.outstanding_interest:,.2f}")

    _header(f"Redistributed ({params.amortization_system.value.upper()}, {params.installment_count} installments)")
    print_table(result.principal, result.interest, result.row_totals)
    print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
