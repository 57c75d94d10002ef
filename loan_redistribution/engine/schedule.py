"""Level-payment amortization math: the schedule a redistribution starts from.

Pure functions: Decimal in, dataclass out. No I/O.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

from scipy.optimize import brentq

TWO_PLACES = Decimal("0.01")

# Implied-rate search bracket (per period): 0% to 1000%
MAX_PERIODIC_RATE = 10.0


@dataclass(frozen=True)
class ScheduleRow:
    period: int
    payment: Decimal
    principal: Decimal
    interest: Decimal
    balance: Decimal


@dataclass(frozen=True)
class Schedule:
    rows: list[ScheduleRow]
    payment: Decimal
    total_principal: Decimal
    total_interest: Decimal

    @property
    def total_paid(self) -> Decimal:
        return self.total_principal + self.total_interest

    @property
    def principal(self) -> list[Decimal]:
        return [r.principal for r in self.rows]

    @property
    def interest(self) -> list[Decimal]:
        return [r.interest for r in self.rows]


def level_payment(financed: Decimal, rate: Decimal, count: int) -> Decimal:
    """Fixed payment that amortizes `financed` over `count` periods at `rate` per period."""
    if financed <= 0:
        return Decimal("0")
    if rate <= 0:
        return (financed / count).quantize(TWO_PLACES, ROUND_HALF_UP)

    # PMT = PV * [r(1+r)^n] / [(1+r)^n - 1]
    factor = (1 + rate) ** count
    payment = financed * (rate * factor) / (factor - 1)
    return payment.quantize(TWO_PLACES, ROUND_HALF_UP)


def price_schedule(financed: Decimal, rate: Decimal, count: int) -> Schedule:
    """Constant-payment (PRICE) decomposition into principal and interest.

    Interest is charged on the running balance and rounded to cents; principal
    is the rest of the payment. The last row takes whatever principal is left
    so the principal column sums exactly to the financed amount.
    """
    pmt = level_payment(financed, rate, count)

    principals: list[Decimal] = []
    interests: list[Decimal] = []
    balance = financed
    for _ in range(count):
        interest = (balance * rate).quantize(TWO_PLACES, ROUND_HALF_UP)
        principal_paid = pmt - interest
        principals.append(principal_paid)
        interests.append(interest)
        balance -= principal_paid

    # Final-row rounding correction
    residual = financed - sum(principals, Decimal("0"))
    if residual != 0:
        principals[-1] = (principals[-1] + residual).quantize(TWO_PLACES, ROUND_HALF_UP)
        interests[-1] = pmt - principals[-1]

    rows: list[ScheduleRow] = []
    balance = financed
    for period, (p, i) in enumerate(zip(principals, interests), start=1):
        balance -= p
        rows.append(ScheduleRow(
            period=period,
            payment=p + i,
            principal=p,
            interest=i,
            balance=balance,
        ))

    return Schedule(
        rows=rows,
        payment=pmt,
        total_principal=sum(principals, Decimal("0")),
        total_interest=sum(interests, Decimal("0")),
    )


def declining_balance_interest(principal: Decimal, rate: Decimal, count: int) -> list[Decimal]:
    """Interest of a constant-amortization (SAC) schedule, unrounded.

    Each period charges `rate` on the balance before that period's constant
    principal share is repaid.
    """
    share = principal / count
    balance = principal
    interest: list[Decimal] = []
    for _ in range(count):
        interest.append(balance * rate)
        balance -= share
    return interest


def _annuity_payment(principal: float, rate: float, count: int) -> float:
    if rate == 0:
        return principal / count
    return principal * rate / (1 - (1 + rate) ** -count)


def implied_rate(principal: Decimal, payment: Decimal, count: int) -> Decimal | None:
    """Periodic rate at which `payment` amortizes `principal` in `count` periods.

    Uses Brent's method. Returns 0 when the payment does not exceed the even
    principal share, and None when no rate in [0, 1000%] fits.
    """
    if count < 1 or principal <= 0:
        return Decimal("0")

    # Convert to float for scipy
    pv = float(principal)
    pmt = float(payment)
    if pmt <= pv / count:
        return Decimal("0")

    def gap(rate: float) -> float:
        return _annuity_payment(pv, rate, count) - pmt

    try:
        rate = brentq(gap, 0.0, MAX_PERIODIC_RATE, xtol=1e-14, maxiter=1000)
    except ValueError:
        # Payment too large for any rate in the bracket
        return None
    return Decimal(repr(rate))
