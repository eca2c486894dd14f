"""POST /v1/emi - Loan calculator with ranked suggestions"""

import logging
from fastapi import APIRouter, HTTPException, Request

from fluxd_gateway.api.v1.schemas import EmiRequest, EmiResponse, ScheduleRowSchema, SuggestionSchema
from fluxd_gateway.api.dependencies import get_request_id
from fluxd_gateway.domain.models import LoanScenario
from fluxd_gateway.domain.amortization import (
    compute_installment,
    generate_amortization_schedule,
    principal_interest_split,
)
from fluxd_gateway.domain.suggestions import suggest
from fluxd_gateway.domain.exceptions import InvalidInputError
from fluxd_gateway.infrastructure.observability.metrics import emi_calculation_counter
from fluxd_gateway.infrastructure.observability.logging import log_calculation

router = APIRouter()


@router.post("/emi", response_model=EmiResponse)
def calculate_emi(request_body: EmiRequest, request: Request):
    """
    Compute EMI, totals and three cheaper-EMI alternatives.

    Suggestions are ordered by ascending monthly payment.
    """
    request_id = get_request_id(request)

    try:
        breakdown = compute_installment(
            request_body.principal,
            request_body.annual_rate_percent,
            request_body.term_months,
        )
        candidates = suggest(
            LoanScenario(
                principal=request_body.principal,
                annual_rate_percent=request_body.annual_rate_percent,
                term_months=request_body.term_months,
            )
        )
        schedule = None
        if request_body.include_schedule:
            schedule = [
                ScheduleRowSchema(
                    month=row.month,
                    payment=row.payment,
                    principal=row.principal,
                    interest=row.interest,
                    balance=row.balance,
                )
                for row in generate_amortization_schedule(
                    request_body.principal,
                    request_body.annual_rate_percent,
                    request_body.term_months,
                )
            ]

    except InvalidInputError as e:
        logging.warning(f"Invalid calculator input: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    emi_calculation_counter.labels(endpoint="emi").inc()
    log_calculation(
        request_id,
        request_body.principal,
        request_body.annual_rate_percent,
        request_body.term_months,
        breakdown.monthly_payment,
    )

    principal_pct, interest_pct = principal_interest_split(request_body.principal, breakdown.total_interest)

    return EmiResponse(
        principal=request_body.principal,
        annual_rate_percent=request_body.annual_rate_percent,
        term_months=request_body.term_months,
        monthly_payment=breakdown.monthly_payment,
        total_payment=breakdown.total_payment,
        total_interest=breakdown.total_interest,
        principal_share_percent=principal_pct,
        interest_share_percent=interest_pct,
        suggestions=[
            SuggestionSchema(
                label=c.label,
                annual_rate_percent=c.scenario.annual_rate_percent,
                term_months=c.scenario.term_months,
                monthly_payment=c.breakdown.monthly_payment,
                total_payment=c.breakdown.total_payment,
                total_interest=c.breakdown.total_interest,
            )
            for c in candidates
        ],
        schedule=schedule,
    )
