"""EMI calculator - amortization math for fixed-rate monthly loans"""

import math
from numbers import Integral, Real
from typing import List, Tuple
from fluxd_gateway.domain.models import InstallmentBreakdown, LoanScenario, ScheduleRow
from fluxd_gateway.domain.exceptions import InvalidInputError

MAX_TERM_MONTHS = 360  # 30 years


def _validate(principal: float, annual_rate_percent: float, term_months: int) -> None:
    if isinstance(principal, bool) or not isinstance(principal, Real) or not math.isfinite(principal):
        raise InvalidInputError(f"Principal must be a finite number, got {principal!r}")
    if principal <= 0:
        raise InvalidInputError(f"Principal must be positive, got {principal!r}")
    if (
        isinstance(annual_rate_percent, bool)
        or not isinstance(annual_rate_percent, Real)
        or not math.isfinite(annual_rate_percent)
    ):
        raise InvalidInputError(f"Interest rate must be a finite number, got {annual_rate_percent!r}")
    if annual_rate_percent < 0:
        raise InvalidInputError(f"Interest rate cannot be negative, got {annual_rate_percent!r}")
    if isinstance(term_months, bool) or not isinstance(term_months, Integral) or term_months <= 0:
        raise InvalidInputError(f"Term must be a positive whole number of months, got {term_months!r}")


def compute_installment(
    principal: float,
    annual_rate_percent: float,
    term_months: int,
) -> InstallmentBreakdown:
    """
    Compute the equated monthly installment for a fixed-rate loan.

    Formula:
    - r = annual_rate_percent / 12 / 100 (monthly periodic rate)
    - r == 0: principal / term_months (straight-line, no interest)
    - otherwise: principal * r * (1+r)^n / ((1+r)^n - 1), evaluated as
      principal * r / (1 - (1+r)^-n) through log1p/expm1 so long terms
      cannot overflow and tiny rates cannot cancel to zero

    Raises:
        InvalidInputError: principal <= 0, negative rate, non-positive term,
            or any non-finite input

    Example:
        500000 at 12% over 60 months → EMI ≈ 11122.22,
        total ≈ 667333.35, interest ≈ 167333.35
    """
    _validate(principal, annual_rate_percent, term_months)

    r = annual_rate_percent / 12 / 100
    if r == 0:
        return InstallmentBreakdown(
            monthly_payment=principal / term_months,
            total_payment=float(principal),
            total_interest=0.0,
        )

    monthly_payment = principal * r / -math.expm1(-term_months * math.log1p(r))
    total_payment = monthly_payment * term_months

    return InstallmentBreakdown(
        monthly_payment=monthly_payment,
        total_payment=total_payment,
        total_interest=total_payment - principal,
    )


def evaluate_scenario(scenario: LoanScenario) -> InstallmentBreakdown:
    """Recompute the derived figures of a scenario"""
    return compute_installment(scenario.principal, scenario.annual_rate_percent, scenario.term_months)


def principal_interest_split(principal: float, total_interest: float) -> Tuple[float, float]:
    """Share of principal vs interest in the total repaid, as percentages"""
    total = max(principal + total_interest, 1)
    principal_pct = principal / total * 100
    return principal_pct, 100 - principal_pct


def generate_amortization_schedule(
    principal: float,
    annual_rate_percent: float,
    term_months: int,
) -> List[ScheduleRow]:
    """
    Build the month-by-month repayment schedule.

    Amounts are rounded to 2 decimals. The last row pays off whatever
    balance is left, so the schedule always closes at exactly zero.
    """
    breakdown = compute_installment(principal, annual_rate_percent, term_months)
    r = annual_rate_percent / 12 / 100
    emi = round(breakdown.monthly_payment, 2)

    balance = round(float(principal), 2)
    rows = []
    for month in range(1, term_months + 1):
        interest = round(balance * r, 2)

        # Last month clears the remainder
        if month == term_months:
            principal_part = balance
        else:
            principal_part = min(round(emi - interest, 2), balance)

        balance = round(balance - principal_part, 2)
        rows.append(
            ScheduleRow(
                month=month,
                payment=round(principal_part + interest, 2),
                principal=principal_part,
                interest=interest,
                balance=balance,
            )
        )

    return rows
