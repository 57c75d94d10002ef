"""Redistributed installment schedule and its invariants."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Sequence

from loan_redistribution.models.errors import RedistributionResultError

DEFAULT_TOLERANCE = Decimal("0.01")


@dataclass(frozen=True)
class InstallmentRow:
    period: int
    principal: Decimal
    interest: Decimal
    payment: Decimal
    balance: Decimal


@dataclass(frozen=True)
class RedistributionResult:
    principal: tuple[Decimal, ...]
    interest: tuple[Decimal, ...]
    installments: tuple[Decimal, ...]  # Expected principal + interest per row
    outstanding_principal: Decimal
    outstanding_interest: Decimal

    @property
    def installment_count(self) -> int:
        return len(self.principal)

    @property
    def total_principal(self) -> Decimal:
        return sum(self.principal, Decimal("0"))

    @property
    def total_interest(self) -> Decimal:
        return sum(self.interest, Decimal("0"))

    @property
    def row_totals(self) -> tuple[Decimal, ...]:
        return tuple(p + i for p, i in zip(self.principal, self.interest))

    def rows(self) -> list[InstallmentRow]:
        """Rows with the principal balance left after each installment."""
        balance = self.total_principal
        rows: list[InstallmentRow] = []
        for period, (p, i) in enumerate(zip(self.principal, self.interest), start=1):
            balance -= p
            rows.append(InstallmentRow(
                period=period,
                principal=p,
                interest=i,
                payment=p + i,
                balance=max(balance, Decimal("0")),
            ))
        return rows

    def validate(
        self,
        tolerance: Decimal = DEFAULT_TOLERANCE,
        include_last_row: bool = False,
    ) -> None:
        """Check column sums and row totals against their targets.

        The last row carries the reconciliation residual, so it is only
        checked when include_last_row is set.
        """
        principal_gap = abs(self.total_principal - self.outstanding_principal)
        if principal_gap > tolerance:
            raise RedistributionResultError(
                f"Principal column sums to {self.total_principal}, "
                f"expected {self.outstanding_principal} (off by {principal_gap})"
            )
        interest_gap = abs(self.total_interest - self.outstanding_interest)
        if interest_gap > tolerance:
            raise RedistributionResultError(
                f"Interest column sums to {self.total_interest}, "
                f"expected {self.outstanding_interest} (off by {interest_gap})"
            )

        last_checked = self.installment_count if include_last_row else self.installment_count - 1
        for idx in range(last_checked):
            row_total = self.principal[idx] + self.interest[idx]
            if abs(row_total - self.installments[idx]) > tolerance:
                raise RedistributionResultError(
                    f"Installment {idx + 1}: principal + interest = {row_total}, "
                    f"expected {self.installments[idx]}"
                )


class RedistributionResultBuilder:
    """Collects the pieces of a result and validates them before building."""

    def __init__(self, tolerance: Decimal = DEFAULT_TOLERANCE, include_last_row: bool = False):
        self._tolerance = tolerance
        self._include_last_row = include_last_row
        self._principal: Sequence[Decimal] | None = None
        self._interest: Sequence[Decimal] | None = None
        self._installments: Sequence[Decimal] | None = None
        self._outstanding_principal: Decimal | None = None
        self._outstanding_interest: Decimal | None = None

    def principal(self, values: Sequence[Decimal]) -> "RedistributionResultBuilder":
        self._principal = values
        return self

    def interest(self, values: Sequence[Decimal]) -> "RedistributionResultBuilder":
        self._interest = values
        return self

    def installment(self, amount: Decimal) -> "RedistributionResultBuilder":
        """Same expected total for every row; requires principal to be set first."""
        if self._principal is None:
            raise RedistributionResultError("Set principal before a flat installment amount")
        self._installments = [amount] * len(self._principal)
        return self

    def installments(self, amounts: Sequence[Decimal]) -> "RedistributionResultBuilder":
        self._installments = amounts
        return self

    def outstanding_principal(self, amount: Decimal) -> "RedistributionResultBuilder":
        self._outstanding_principal = amount
        return self

    def outstanding_interest(self, amount: Decimal) -> "RedistributionResultBuilder":
        self._outstanding_interest = amount
        return self

    def build(self) -> RedistributionResult:
        if self._principal is None or self._interest is None:
            raise RedistributionResultError("Principal and interest must not be None")
        if self._installments is None:
            raise RedistributionResultError("Installment amounts must not be None")
        if self._outstanding_principal is None or self._outstanding_interest is None:
            raise RedistributionResultError("Outstanding principal and interest must not be None")
        if len(self._principal) == 0:
            raise RedistributionResultError("Principal and interest must not be empty")
        if len(self._principal) != len(self._interest):
            raise RedistributionResultError(
                f"Principal ({len(self._principal)}) and interest ({len(self._interest)}) "
                f"must have the same length"
            )
        if len(self._installments) != len(self._principal):
            raise RedistributionResultError(
                f"Expected {len(self._principal)} installment amounts, got {len(self._installments)}"
            )

        result = RedistributionResult(
            principal=tuple(self._principal),
            interest=tuple(self._interest),
            installments=tuple(self._installments),
            outstanding_principal=self._outstanding_principal,
            outstanding_interest=self._outstanding_interest,
        )
        result.validate(self._tolerance, self._include_last_row)
        return result
