import numpy as np
import pytest
from decimal import Decimal

from loan_redistribution.engine.initial_guess import (
    INTEREST_DECAY,
    JOINT_DECAY,
    initial_guess,
    interest_guess,
    principal_guess,
)
from loan_redistribution.engine.policy import ObjectiveKind


class TestPrincipalGuess:
    def test_even_split(self, price_params):
        assert principal_guess(price_params) == pytest.approx([1000.0, 1000.0, 1000.0])


class TestInterestGuess:
    def test_sums_to_outstanding_interest(self, price_params):
        """Room per row is 200, so a flat-ish decay stays uncapped."""
        params = price_params.with_changes(installment_amount=Decimal("1500"))
        guess = interest_guess(params, principal_guess(params), JOINT_DECAY)
        assert guess.sum() == pytest.approx(600.0)

    def test_front_loaded(self, price_params):
        params = price_params.with_changes(installment_amount=Decimal("1500"))
        guess = interest_guess(params, principal_guess(params), INTEREST_DECAY)
        assert np.all(np.diff(guess) < 0)

    def test_steeper_decay_for_interest_only_seed(self, price_params):
        params = price_params.with_changes(installment_amount=Decimal("1500"))
        principal = principal_guess(params)
        steep = interest_guess(params, principal, INTEREST_DECAY)
        flat = interest_guess(params, principal, JOINT_DECAY)
        assert steep[0] > flat[0]

    def test_capped_at_installment_room(self, price_params):
        params = price_params.with_changes(installment_amount=Decimal("1010"))
        guess = interest_guess(params, principal_guess(params))
        assert np.all(guess <= 10.0 + 1e-9)


class TestInitialGuess:
    def test_principal_only(self, price_params):
        assert len(initial_guess(price_params, ObjectiveKind.CONSTANT_PAYMENT)) == 3
        assert len(initial_guess(price_params, ObjectiveKind.CONSTANT_AMORTIZATION)) == 3

    def test_joint(self, price_params):
        x0 = initial_guess(price_params, ObjectiveKind.VARIABLE_PRINCIPAL)
        assert len(x0) == 6
        assert x0[:3] == pytest.approx([1000.0, 1000.0, 1000.0])
        # First row is capped at 1200 - 1000
        assert x0[3] == pytest.approx(200.0)
