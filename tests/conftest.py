"""Shared redistribution fixtures for the engine and model tests.

Fixture: 3,000 principal and 600 interest still owed over 3 installments of
1,200 (a balanced constant-payment split).
"""

import pytest
from decimal import Decimal

from loan_redistribution.models.parameters import AmortizationSystem, RedistributionParameters


@pytest.fixture
def price_params() -> RedistributionParameters:
    """3 x 1,200 covering 3,000 principal + 600 interest."""
    return RedistributionParameters(
        outstanding_installments_total=Decimal("3600"),
        outstanding_principal=Decimal("3000"),
        outstanding_interest=Decimal("600"),
        installment_amount=Decimal("1200"),
        installment_count=3,
        monthly_rate=Decimal("0.02"),
        amortization_system=AmortizationSystem.PRICE,
    )


@pytest.fixture
def sac_params() -> RedistributionParameters:
    """Same balances under SAC at 10% a month: interest 300 / 200 / 100."""
    return RedistributionParameters(
        outstanding_installments_total=Decimal("3600"),
        outstanding_principal=Decimal("3000"),
        outstanding_interest=Decimal("600"),
        installment_amount=Decimal("1200"),
        installment_count=3,
        monthly_rate=Decimal("0.10"),
        amortization_system=AmortizationSystem.SAC,
    )


@pytest.fixture
def variable_params(price_params) -> RedistributionParameters:
    """PRICE balances with interest optimized as a free variable."""
    return price_params.with_changes(principal_is_constant=False)
