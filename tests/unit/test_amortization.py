"""Unit tests for the EMI calculator"""

import math
import pytest
from fluxd_gateway.domain.models import LoanScenario
from fluxd_gateway.domain.amortization import (
    compute_installment,
    evaluate_scenario,
    generate_amortization_schedule,
    principal_interest_split,
)
from fluxd_gateway.domain.exceptions import InvalidInputError


def test_compute_installment_reference_loan():
    """500000 at 12% over 60 months"""
    result = compute_installment(500000, 12, 60)

    assert result.monthly_payment == pytest.approx(11122.22, abs=0.01)
    assert round(result.total_payment) == 667333
    assert round(result.total_interest) == 167333


@pytest.mark.parametrize(
    "principal,rate,term",
    [(1000, 0.5, 1), (250000, 8.75, 240), (50000, 24, 6), (5000000, 6, 360), (1, 99.9, 12)],
)
def test_compute_installment_totals_consistent(principal, rate, term):
    """Total payment is EMI times term; interest is total minus principal"""
    result = compute_installment(principal, rate, term)

    assert result.monthly_payment > 0
    assert math.isclose(result.monthly_payment * term, result.total_payment, rel_tol=1e-6)
    assert math.isclose(result.total_interest, result.total_payment - principal, rel_tol=1e-9, abs_tol=1e-9)
    assert result.total_interest > 0


def test_compute_installment_zero_rate_is_straight_line():
    """Zero interest divides principal evenly with no interest"""
    result = compute_installment(100000, 0, 3)

    assert result.monthly_payment == 100000 / 3
    assert result.total_interest == 0
    assert result.total_payment == 100000


def test_compute_installment_very_long_term_does_not_overflow():
    """EMI tends to principal * r as the term grows"""
    result = compute_installment(500000, 12, 100000)

    assert math.isfinite(result.monthly_payment)
    assert result.monthly_payment == pytest.approx(5000)
    assert result.total_payment == pytest.approx(5000 * 100000)


def test_compute_installment_tiny_rate_tends_to_straight_line():
    """A rate too small to register in 1 + r still divides cleanly"""
    result = compute_installment(500000, 1e-15, 60)

    assert result.monthly_payment == pytest.approx(500000 / 60)
    assert result.total_payment == pytest.approx(500000)
    assert abs(result.total_interest) < 1e-3


@pytest.mark.parametrize(
    "principal,rate,term",
    [
        (0, 12, 60),
        (-500, 12, 60),
        (500000, -1, 60),
        (500000, 12, 0),
        (500000, 12, -12),
        (500000, 12, 12.5),
        (float("nan"), 12, 60),
        (float("inf"), 12, 60),
        (500000, float("inf"), 60),
        (500000, 12, True),
    ],
)
def test_compute_installment_rejects_invalid_inputs(principal, rate, term):
    """Non-positive or non-finite inputs fail fast"""
    with pytest.raises(InvalidInputError):
        compute_installment(principal, rate, term)


def test_evaluate_scenario_matches_direct_call():
    scenario = LoanScenario(principal=750000, annual_rate_percent=10.5, term_months=84)
    assert evaluate_scenario(scenario) == compute_installment(750000, 10.5, 84)


def test_principal_interest_split():
    principal_pct, interest_pct = principal_interest_split(75000, 25000)

    assert principal_pct == pytest.approx(75.0)
    assert interest_pct == pytest.approx(25.0)


def test_schedule_closes_at_zero():
    """Last installment absorbs rounding so the loan is fully repaid"""
    schedule = generate_amortization_schedule(500000, 12, 60)

    assert len(schedule) == 60
    assert schedule[-1].balance == 0
    assert sum(row.principal for row in schedule) == pytest.approx(500000, abs=0.01)
    assert schedule[0].interest == 5000.0  # 1% of the opening balance
    assert schedule[0].payment == pytest.approx(11122.22, abs=0.01)
    assert abs(schedule[-1].payment - schedule[0].payment) < 1.0


def test_schedule_interest_declines_over_time():
    schedule = generate_amortization_schedule(100000, 9, 24)
    interests = [row.interest for row in schedule]

    assert interests == sorted(interests, reverse=True)


def test_schedule_zero_rate():
    schedule = generate_amortization_schedule(1000, 0, 3)

    assert [row.interest for row in schedule] == [0, 0, 0]
    assert schedule[-1].balance == 0
    assert sum(row.payment for row in schedule) == pytest.approx(1000, abs=0.01)
