"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger
from fluxd_gateway.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_calculation(
    request_id: str,
    principal: float,
    annual_rate_percent: float,
    term_months: int,
    monthly_payment: float,
) -> None:
    """Log an EMI calculation with its inputs"""
    logging.info(
        "EMI calculated",
        extra={
            "request_id": request_id,
            "step": "emi_calculated",
            "principal": principal,
            "annual_rate_percent": annual_rate_percent,
            "term_months": term_months,
            "monthly_payment": round(monthly_payment, 2),
        },
    )


def log_offer_comparison(
    request_id: str,
    offer_source: str,
    offer_count: int,
    fallback_count: int,
    duration_ms: float,
) -> None:
    """Log structured offer comparison outcome for feed quality analysis"""
    logging.info(
        "Offer comparison completed",
        extra={
            "request_id": request_id,
            "step": "offer_comparison_complete",
            "offer_source": offer_source,  # request | feed | catalog
            "offer_count": offer_count,
            "parse_fallbacks": fallback_count,
            "duration_ms": duration_ms,
        },
    )
