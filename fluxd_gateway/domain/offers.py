"""Offer comparator - normalizes free-text provider offers into comparable EMIs"""

import re
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Union
from fluxd_gateway.domain.models import ExternalOffer, OfferComparison
from fluxd_gateway.domain.amortization import MAX_TERM_MONTHS, compute_installment

DEFAULT_OFFER_RATE_PERCENT = 12.0
MAX_OFFER_RATE_PERCENT = 100.0

_RATE_RANGE = re.compile(r"(\d+(?:\.\d+)?)\s*%\s*[-–]\s*(\d+(?:\.\d+)?)\s*%")
_RATE_SINGLE = re.compile(r"(\d+(?:\.\d+)?)\s*%")
# First number of an optional range, then the unit: "12-60 months", "5 years"
_TERM = re.compile(r"(\d+)(?:\s*[-–]\s*\d+)?\s*(months?|years?)\b", re.IGNORECASE)


@dataclass(frozen=True)
class Parsed:
    """Value read from the offer text"""

    value: Any


@dataclass(frozen=True)
class Fallback:
    """Default substituted because the offer text had no usable value"""

    value: Any


ParseResult = Union[Parsed, Fallback]


def parse_rate(text: Optional[str], default: float = DEFAULT_OFFER_RATE_PERCENT) -> ParseResult:
    """
    Read an annual rate from text like "10.5% - 16%" or "4%".

    A range yields its midpoint; anything without a percentage, or above
    MAX_OFFER_RATE_PERCENT, falls back.
    """
    if not text:
        return Fallback(default)

    match = _RATE_RANGE.search(text)
    if match:
        rate = (float(match.group(1)) + float(match.group(2))) / 2
    else:
        match = _RATE_SINGLE.search(text)
        if not match:
            return Fallback(default)
        rate = float(match.group(1))

    # Long digit strings parse to inf
    if rate > MAX_OFFER_RATE_PERCENT:
        return Fallback(default)
    return Parsed(rate)


def parse_term_months(text: Optional[str], fallback: int) -> ParseResult:
    """
    Read a term in months from text like "12-60 months" or "1-5 years".

    Only the first number of a range is used ("12-60 months" → 12).
    Years are converted to months. Zero, or anything longer than
    MAX_TERM_MONTHS, falls back.
    """
    if not text:
        return Fallback(fallback)

    match = _TERM.search(text)
    # int() refuses digit strings past sys.get_int_max_str_digits()
    if not match or len(match.group(1)) > 6:
        return Fallback(fallback)

    months = int(match.group(1))
    if match.group(2).lower().startswith("year"):
        months *= 12

    if months <= 0 or months > MAX_TERM_MONTHS:
        return Fallback(fallback)
    return Parsed(months)


def midpoint_rate(text: Optional[str], default: float = DEFAULT_OFFER_RATE_PERCENT) -> float:
    return parse_rate(text, default).value


def extract_term_months(text: Optional[str], fallback: int) -> int:
    return parse_term_months(text, fallback).value


def compare_offers(
    offers: Iterable[ExternalOffer],
    principal: float,
    fallback_term_months: int,
    default_rate: float = DEFAULT_OFFER_RATE_PERCENT,
    limit: Optional[int] = None,
) -> List[OfferComparison]:
    """
    Recompute each offer's EMI against the requested principal.

    Offers keep their input order. Malformed rate/tenure text never raises;
    it resolves to ``default_rate`` / ``fallback_term_months``.

    Raises:
        InvalidInputError: principal or fallback term is invalid
    """
    # Validate caller inputs up front, even for an empty offer list
    compute_installment(principal, default_rate, fallback_term_months)

    selected = list(offers)
    if limit is not None:
        selected = selected[:limit]

    comparisons = []
    for offer in selected:
        rate = parse_rate(offer.interest_rate, default_rate)
        term = parse_term_months(offer.tenure, fallback_term_months)
        breakdown = compute_installment(principal, rate.value, term.value)

        comparisons.append(
            OfferComparison(
                offer=offer,
                rate_percent=rate.value,
                term_months=term.value,
                rate_parsed=isinstance(rate, Parsed),
                term_parsed=isinstance(term, Parsed),
                monthly_payment=breakdown.monthly_payment,
                total_interest=breakdown.total_interest,
            )
        )

    return comparisons


def filter_offers(
    offers: Iterable[ExternalOffer],
    loan_type: Optional[str] = None,
    confidence: Optional[str] = None,
) -> List[ExternalOffer]:
    """Offer page filters: loan type substring (case-insensitive), exact confidence"""
    result = []
    for offer in offers:
        if loan_type and loan_type.lower() not in str(offer.extra.get("loanType", "")).lower():
            continue
        if confidence and offer.extra.get("confidence") != confidence:
            continue
        result.append(offer)
    return result


def confidence_level(eligibility_score: float) -> str:
    """Bucket an eligibility score (0-100) for the offers header"""
    if eligibility_score >= 80:
        return "High"
    elif eligibility_score >= 60:
        return "Medium"
    else:
        return "Low"


def _catalog_entry(company: str, rate: str, tenure: str, fee: str, emi: str,
                   confidence: str, badges: List[str], documents: List[str],
                   approval_time: str) -> Dict[str, Any]:
    return {
        "company": company,
        "interestRate": rate,
        "tenure": tenure,
        "processingFee": fee,
        "emi": emi,
        "confidence": confidence,
        "badges": badges,
        "documents": documents,
        "approvalTime": approval_time,
    }


_BASIC_DOCUMENTS = ["Aadhaar Card", "PAN Card", "Salary Slip", "Bank Statement"]

_CATALOG = [
    _catalog_entry("HDFC Bank", "10.5% - 16%", "12-60 months", "₹2,500 - ₹5,000", "₹9,500 - ₹12,000",
                   "high", ["Recommended", "Fast Approval"], _BASIC_DOCUMENTS, "2-5 days"),
    _catalog_entry("ICICI Bank", "11% - 17%", "12-60 months", "₹2,000 - ₹4,500", "₹9,800 - ₹12,500",
                   "high", ["Low EMI", "Fast Approval"], _BASIC_DOCUMENTS + ["Employment Proof"], "3-7 days"),
    _catalog_entry("Axis Bank", "10.75% - 16.5%", "12-60 months", "₹2,500 - ₹5,000", "₹9,600 - ₹12,200",
                   "medium", ["Recommended"], _BASIC_DOCUMENTS, "5-10 days"),
    _catalog_entry("Bajaj Finserv", "12% - 18%", "12-84 months", "₹1,500 - ₹4,000", "₹10,000 - ₹13,000",
                   "medium", ["Low Processing Fee"], _BASIC_DOCUMENTS[:3], "1-3 days"),
    _catalog_entry("Fullerton India", "13% - 20%", "12-60 months", "₹2,000 - ₹5,000", "₹10,500 - ₹14,000",
                   "low", [], _BASIC_DOCUMENTS, "7-14 days"),
]


def default_offers(loan_type: str = "Personal", max_amount: str = "₹5,00,000") -> List[ExternalOffer]:
    """Static provider catalog used when the discovery feed has nothing for us"""
    return [
        ExternalOffer.from_payload(
            {**entry, "loanType": loan_type, "maxAmount": max_amount, "badges": list(entry["badges"]),
             "documents": list(entry["documents"])}
        )
        for entry in _CATALOG
    ]
