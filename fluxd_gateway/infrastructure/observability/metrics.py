"""Prometheus metrics for calculator usage, offer parsing quality and feed health"""

from typing import List
from prometheus_client import Counter, Histogram
from fluxd_gateway.domain.models import OfferComparison

# Calculator metrics
emi_calculation_counter = Counter(
    "fluxd_emi_calculations_total",
    "Total EMI computations served",
    ["endpoint"],  # emi | offers
)

# Offer feed quality
offer_parse_fallback_counter = Counter(
    "fluxd_offer_parse_fallbacks_total",
    "Offer fields that could not be parsed and used a default",
    ["field"],  # rate | tenure
)

provider_feed_failures_counter = Counter(
    "provider_feed_failures_total",
    "Failed loan provider feed calls",
)

# Tracker data integrity
unknown_stage_counter = Counter(
    "fluxd_unknown_stage_total",
    "Tracker records with an unrecognized stage",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_offer_comparisons(comparisons: List[OfferComparison]) -> int:
    """Count EMI computations and parse fallbacks; returns the number of fallbacks"""
    fallbacks = 0
    for comparison in comparisons:
        emi_calculation_counter.labels(endpoint="offers").inc()
        if not comparison.rate_parsed:
            offer_parse_fallback_counter.labels(field="rate").inc()
            fallbacks += 1
        if not comparison.term_parsed:
            offer_parse_fallback_counter.labels(field="tenure").inc()
            fallbacks += 1
    return fallbacks
