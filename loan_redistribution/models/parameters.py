from dataclasses import dataclass, replace
from decimal import Decimal
from enum import Enum

from loan_redistribution.models.errors import RedistributionConfigError


class AmortizationSystem(Enum):
    PRICE = "price"  # Constant payment (French / Tabela Price)
    SAC = "sac"      # Constant amortization
    SFF = "sff"      # French-system financing, redistributed like PRICE


@dataclass(frozen=True)
class RedistributionParameters:
    """Balances still owed on a loan and the installments they must be spread over.

    The accounting identity total == principal + interest is checked by the
    engine, not here, so a mismatched bundle can still be built and inspected.
    """
    outstanding_installments_total: Decimal
    outstanding_principal: Decimal
    outstanding_interest: Decimal
    installment_amount: Decimal  # Fixed payment per remaining installment
    installment_count: int
    monthly_rate: Decimal = Decimal("0")  # e.g. Decimal("0.02") for 2% a month
    amortization_system: AmortizationSystem = AmortizationSystem.PRICE
    # True: principal is optimized against the fixed installment and interest is
    # derived from it. False: interest is a free variable too.
    principal_is_constant: bool = True

    def __post_init__(self):
        if self.installment_count < 1:
            raise RedistributionConfigError(
                f"Installment count must be positive, got {self.installment_count}"
            )
        if self.outstanding_principal < 0 or self.outstanding_interest < 0:
            raise RedistributionConfigError(
                f"Outstanding balances must be non-negative "
                f"(principal={self.outstanding_principal}, interest={self.outstanding_interest})"
            )
        if self.installment_amount <= 0:
            raise RedistributionConfigError(
                f"Installment amount must be positive, got {self.installment_amount}"
            )
        if self.monthly_rate < 0:
            raise RedistributionConfigError(f"Monthly rate must be non-negative, got {self.monthly_rate}")
        if self.principal_is_constant and self.principal_share > self.installment_amount:
            raise RedistributionConfigError(
                f"Constant principal share ({self.principal_share:.2f}) exceeds "
                f"the installment amount ({self.installment_amount})"
            )

    @property
    def principal_share(self) -> Decimal:
        """Even split of the outstanding principal across the installments."""
        return self.outstanding_principal / self.installment_count

    @property
    def balances_total(self) -> Decimal:
        return self.outstanding_principal + self.outstanding_interest

    @property
    def is_balanced(self) -> bool:
        """Exact Decimal check of total == principal + interest."""
        return self.outstanding_installments_total == self.balances_total

    def with_changes(self, **changes) -> "RedistributionParameters":
        return replace(self, **changes)
