"""POST /v1/offers/compare - Recompute provider offers against the user's loan"""

import time
import logging
from fastapi import APIRouter, Depends, HTTPException, Request

from fluxd_gateway.api.v1.schemas import OfferCompareRequest, OfferCompareResponse, OfferComparisonSchema
from fluxd_gateway.api.dependencies import get_provider_client, get_request_id
from fluxd_gateway.config import settings
from fluxd_gateway.domain.models import ExternalOffer
from fluxd_gateway.domain.offers import compare_offers, default_offers, filter_offers
from fluxd_gateway.domain.exceptions import InvalidInputError, ProviderFeedError
from fluxd_gateway.infrastructure.clients.providers import LoanProviderClient
from fluxd_gateway.infrastructure.observability.metrics import (
    provider_feed_failures_counter,
    record_offer_comparisons,
)
from fluxd_gateway.infrastructure.observability.logging import log_offer_comparison

router = APIRouter()


@router.post("/offers/compare", response_model=OfferCompareResponse)
async def compare(
    request_body: OfferCompareRequest,
    request: Request,
    provider_client: LoanProviderClient = Depends(get_provider_client),
):
    """
    Compare loan offers on equal terms.

    Flow:
    1. Use offers from the request, or fetch them from the provider feed
    2. Fall back to the static catalog when the feed fails or is empty
    3. Apply loan type / confidence filters
    4. Recompute EMI for the first N offers, in feed order
    """
    start_time = time.time()
    request_id = get_request_id(request)

    if request_body.offers is not None:
        offers = [ExternalOffer.from_payload(o) for o in request_body.offers]
        source = "request"
    else:
        offers = []
        source = "feed"
        if provider_client.configured:
            try:
                offers = await provider_client.get_offers(request_body.eligibility)
            except ProviderFeedError as e:
                provider_feed_failures_counter.inc()
                logging.warning(f"Provider feed error, using catalog: {e}", extra={"request_id": request_id})

        if not offers:
            eligibility = request_body.eligibility
            offers = default_offers(
                loan_type=eligibility.get("loan_type") or "Personal",
                max_amount=str(eligibility.get("loan_amount") or "₹5,00,000"),
            )
            source = "catalog"

    offers = filter_offers(offers, loan_type=request_body.loan_type, confidence=request_body.confidence)

    try:
        comparisons = compare_offers(
            offers,
            principal=request_body.principal,
            fallback_term_months=request_body.fallback_term_months,
            default_rate=settings.default_offer_rate_percent,
            limit=settings.offer_comparison_limit,
        )
    except InvalidInputError as e:
        logging.warning(f"Invalid comparison input: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    fallbacks = record_offer_comparisons(comparisons)
    duration_ms = (time.time() - start_time) * 1000
    log_offer_comparison(request_id, source, len(comparisons), fallbacks, duration_ms)

    return OfferCompareResponse(
        source=source,
        comparisons=[
            OfferComparisonSchema(
                offer=c.offer.to_payload(),
                rate_percent=c.rate_percent,
                term_months=c.term_months,
                rate_parsed=c.rate_parsed,
                term_parsed=c.term_parsed,
                monthly_payment=c.monthly_payment,
                total_interest=c.total_interest,
            )
            for c in comparisons
        ],
    )
