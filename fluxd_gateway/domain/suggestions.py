"""Suggestion ranker - alternative rate/tenure combinations for a loan"""

from typing import List
from fluxd_gateway.domain.models import LoanScenario, SuggestionCandidate
from fluxd_gateway.domain.amortization import MAX_TERM_MONTHS, evaluate_scenario

MIN_SUGGESTED_RATE_PERCENT = 6.0

LOWER_RATE = "Lower Rate"
LONGER_TENURE = "Longer Tenure"
BALANCED = "Balanced"


def _candidate_scenarios(base: LoanScenario) -> List[tuple[str, LoanScenario]]:
    rate = base.annual_rate_percent
    term = base.term_months
    return [
        (
            LOWER_RATE,
            LoanScenario(base.principal, max(MIN_SUGGESTED_RATE_PERCENT, rate - 1.5), term),
        ),
        (
            LONGER_TENURE,
            LoanScenario(base.principal, rate, min(MAX_TERM_MONTHS, term + 24)),
        ),
        (
            BALANCED,
            LoanScenario(
                base.principal,
                max(MIN_SUGGESTED_RATE_PERCENT, rate - 0.75),
                min(MAX_TERM_MONTHS, term + 12),
            ),
        ),
    ]


def suggest(base: LoanScenario) -> List[SuggestionCandidate]:
    """
    Generate three alternatives to the base scenario, cheapest EMI first.

    Transforms (fixed, not a search):
    - Lower Rate:    rate - 1.5 (floor 6%), same term
    - Longer Tenure: same rate, term + 24 months (cap 360)
    - Balanced:      rate - 0.75 (floor 6%), term + 12 months (cap 360)

    The floor applies even when the base rate is already below 6%, so a
    "Lower Rate" candidate can carry a higher rate than the base.

    Raises:
        InvalidInputError: base scenario inputs are invalid
    """
    evaluate_scenario(base)

    candidates = [
        SuggestionCandidate(label=label, scenario=scenario, breakdown=evaluate_scenario(scenario))
        for label, scenario in _candidate_scenarios(base)
    ]

    # sorted() is stable: ties keep generation order
    return sorted(candidates, key=lambda c: c.breakdown.monthly_payment)
