"""Domain models - pure Python dataclasses representing business entities"""

import enum
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class LoanScenario:
    """Principal, annual rate and term of a loan; figures are derived on demand"""

    principal: float
    annual_rate_percent: float
    term_months: int


@dataclass(frozen=True)
class InstallmentBreakdown:
    """Output of the amortization calculator"""

    monthly_payment: float
    total_payment: float
    total_interest: float


@dataclass(frozen=True)
class ScheduleRow:
    """Single month in an amortization schedule"""

    month: int
    payment: float
    principal: float
    interest: float
    balance: float


@dataclass(frozen=True)
class SuggestionCandidate:
    """Alternative financing scenario offered next to the user's own"""

    label: str  # "Lower Rate" | "Longer Tenure" | "Balanced"
    scenario: LoanScenario
    breakdown: InstallmentBreakdown


@dataclass(frozen=True)
class ExternalOffer:
    """
    Provider offer from the discovery feed.

    Only the two free-text fields the comparator reads are modelled;
    everything else rides along in ``extra`` untouched.
    """

    interest_rate: Optional[str]
    tenure: Optional[str]
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "ExternalOffer":
        extra = {k: v for k, v in payload.items() if k not in ("interestRate", "tenure")}
        rate = payload.get("interestRate")
        tenure = payload.get("tenure")
        return cls(
            interest_rate=rate if isinstance(rate, str) else None,
            tenure=tenure if isinstance(tenure, str) else None,
            extra=extra,
        )

    def to_payload(self) -> Dict[str, Any]:
        payload = dict(self.extra)
        payload["interestRate"] = self.interest_rate
        payload["tenure"] = self.tenure
        return payload


@dataclass(frozen=True)
class OfferComparison:
    """Offer recomputed against the user's requested principal"""

    offer: ExternalOffer
    rate_percent: float
    term_months: int
    rate_parsed: bool  # False when the default rate was used
    term_parsed: bool  # False when the caller's fallback term was used
    monthly_payment: float
    total_interest: float


class Stage(str, enum.Enum):
    """Pipeline position of a loan application, in order"""

    SUBMITTED = "submitted"
    VERIFICATION = "verification"
    REVIEW = "review"
    APPROVAL = "approval"
    DISBURSEMENT = "disbursement"
    COMPLETED = "completed"


class ApplicationStatus(str, enum.Enum):
    """Classification tag for display; independent of stage"""

    PENDING = "pending"
    IN_REVIEW = "in_review"
    APPROVED = "approved"
    REJECTED = "rejected"
    DISBURSED = "disbursed"
    COMPLETED = "completed"


@dataclass
class TrackerEntry:
    """Snapshot of one tracked loan application"""

    application_id: str
    loan_type: str
    amount: float
    status: str
    current_stage: str
    progress: int
    next_step: Optional[str]
    updated_at: datetime


@dataclass(frozen=True)
class StageView:
    """One row of an application's stage breakdown"""

    stage: Stage
    label: str
    position: int
    completed: bool
    current: bool
    next_step: Optional[str] = None
