"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import Any, Dict, List, Optional
from fluxd_gateway.domain.amortization import MAX_TERM_MONTHS


class EmiRequest(BaseModel):
    """Request body for POST /v1/emi"""

    principal: float = Field(..., gt=0, description="Loan amount")
    annual_rate_percent: float = Field(..., ge=0, le=100, description="Annual interest rate in percent")
    term_months: int = Field(..., gt=0, le=MAX_TERM_MONTHS, description="Loan term in months")
    include_schedule: bool = Field(False, description="Return the month-by-month schedule")


class SuggestionSchema(BaseModel):
    """Alternative rate/tenure combination"""

    label: str
    annual_rate_percent: float
    term_months: int
    monthly_payment: float
    total_payment: float
    total_interest: float


class ScheduleRowSchema(BaseModel):
    """Single month of the amortization schedule"""

    month: int
    payment: float
    principal: float
    interest: float
    balance: float


class EmiResponse(BaseModel):
    """Response for POST /v1/emi"""

    principal: float
    annual_rate_percent: float
    term_months: int
    monthly_payment: float
    total_payment: float
    total_interest: float
    principal_share_percent: float
    interest_share_percent: float
    suggestions: List[SuggestionSchema]
    schedule: Optional[List[ScheduleRowSchema]] = None


class OfferCompareRequest(BaseModel):
    """Request body for POST /v1/offers/compare"""

    principal: float = Field(..., gt=0, description="Requested loan amount")
    fallback_term_months: int = Field(..., gt=0, le=MAX_TERM_MONTHS, description="Term used when an offer has no readable tenure")
    offers: Optional[List[Dict[str, Any]]] = Field(
        None, description="Offers to compare; fetched from the provider feed when omitted"
    )
    eligibility: Dict[str, Any] = Field(default_factory=dict, description="Profile forwarded to the provider feed")
    loan_type: Optional[str] = None
    confidence: Optional[str] = None


class OfferComparisonSchema(BaseModel):
    """Offer with recomputed EMI figures"""

    offer: Dict[str, Any]
    rate_percent: float
    term_months: int
    rate_parsed: bool
    term_parsed: bool
    monthly_payment: float
    total_interest: float


class OfferCompareResponse(BaseModel):
    """Response for POST /v1/offers/compare"""

    source: str  # request | feed | catalog
    comparisons: List[OfferComparisonSchema]


class StageSchema(BaseModel):
    """One pipeline stage of an application"""

    stage: str
    label: str
    position: int
    completed: bool
    current: bool
    next_step: Optional[str] = None


class TrackerEntrySchema(BaseModel):
    """Tracked application with its stage breakdown"""

    application_id: str
    loan_type: str
    amount: float
    status: str
    status_label: str
    current_stage: str
    progress: int
    expected_progress: int
    next_step: Optional[str] = None
    updated_at: datetime
    updated_ago: str
    stages: List[StageSchema]


class TrackerListResponse(BaseModel):
    """Response for GET /v1/tracker"""

    user_id: str
    entries: List[TrackerEntrySchema]
