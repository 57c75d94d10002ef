from decimal import Decimal

from loan_redistribution.engine.schedule import (
    declining_balance_interest,
    implied_rate,
    level_payment,
    price_schedule,
)


class TestLevelPayment:
    def test_standard_mortgage(self):
        """$400K loan at 7%/12 for 360 months."""
        pmt = level_payment(Decimal("400000"), Decimal("0.07") / 12, 360)
        # Expected: ~$2,661.21
        assert pmt == Decimal("2661.21")

    def test_short_loan(self):
        """1,500 at 8% a month over 12 months."""
        assert level_payment(Decimal("1500"), Decimal("0.08"), 12) == Decimal("199.04")

    def test_zero_rate(self):
        pmt = level_payment(Decimal("360000"), Decimal("0"), 360)
        assert pmt == Decimal("1000.00")

    def test_zero_principal(self):
        pmt = level_payment(Decimal("0"), Decimal("0.02"), 12)
        assert pmt == Decimal("0")


class TestPriceSchedule:
    def test_payment_count(self):
        schedule = price_schedule(Decimal("1500"), Decimal("0.08"), 12)
        assert len(schedule.rows) == 12

    def test_first_payment_split(self):
        schedule = price_schedule(Decimal("1500"), Decimal("0.08"), 12)
        first = schedule.rows[0]
        # 1500 * 0.08 = 120.00 interest
        assert first.interest == Decimal("120.00")
        assert first.principal == Decimal("79.04")

    def test_every_row_equals_payment(self):
        schedule = price_schedule(Decimal("1500"), Decimal("0.08"), 12)
        for row in schedule.rows:
            assert row.payment == schedule.payment

    def test_principal_sums_to_financed(self):
        schedule = price_schedule(Decimal("1500"), Decimal("0.02"), 3)
        assert schedule.total_principal == Decimal("1500")
        assert schedule.rows[-1].balance == Decimal("0")

    def test_final_row_correction(self):
        """Cent residual from rounding lands in the last row."""
        schedule = price_schedule(Decimal("1500"), Decimal("0.02"), 3)
        assert schedule.payment == Decimal("520.13")
        assert schedule.principal == [Decimal("490.13"), Decimal("499.93"), Decimal("509.94")]
        assert schedule.interest == [Decimal("30.00"), Decimal("20.20"), Decimal("10.19")]
        assert schedule.total_paid == Decimal("1560.39")

    def test_interest_decreases(self):
        schedule = price_schedule(Decimal("1500"), Decimal("0.08"), 12)
        for i in range(1, len(schedule.rows)):
            assert schedule.rows[i].interest < schedule.rows[i - 1].interest


class TestDecliningBalanceInterest:
    def test_sac_interest(self):
        interest = declining_balance_interest(Decimal("3000"), Decimal("0.10"), 3)
        assert interest == [Decimal("300"), Decimal("200"), Decimal("100")]

    def test_zero_rate(self):
        interest = declining_balance_interest(Decimal("9000"), Decimal("0"), 9)
        assert all(i == 0 for i in interest)


class TestImpliedRate:
    def test_level_payment_rate(self):
        """3 x 1,200 repaying 3,000 implies roughly 9.70% a period."""
        rate = implied_rate(Decimal("3000"), Decimal("1200"), 3)
        assert Decimal("0.0970") < rate < Decimal("0.0971")

    def test_round_trip_with_level_payment(self):
        rate = implied_rate(Decimal("1500"), Decimal("199.04"), 12)
        assert abs(rate - Decimal("0.08")) < Decimal("0.0001")

    def test_no_interest(self):
        assert implied_rate(Decimal("12000"), Decimal("1000"), 12) == Decimal("0")

    def test_payment_out_of_range(self):
        assert implied_rate(Decimal("100"), Decimal("10000"), 2) is None
