"""GET /v1/tracker - Application progress for a user"""

import logging
from typing import Literal, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from fluxd_gateway.api.v1.schemas import StageSchema, TrackerEntrySchema, TrackerListResponse
from fluxd_gateway.api.dependencies import get_request_id
from fluxd_gateway.config import settings
from fluxd_gateway.domain.models import TrackerEntry
from fluxd_gateway.domain.tracker import (
    expected_progress,
    filter_entries,
    sort_entries,
    stage_timeline,
    status_label,
)
from fluxd_gateway.domain.exceptions import InvalidInputError, UnknownStageError
from fluxd_gateway.infrastructure.database.session import get_db
from fluxd_gateway.infrastructure.database.repositories import TrackerRepository
from fluxd_gateway.infrastructure.observability.metrics import unknown_stage_counter
from fluxd_gateway.utils.date_utils import humanize_elapsed

router = APIRouter()


def _to_schema(entry: TrackerEntry) -> TrackerEntrySchema:
    return TrackerEntrySchema(
        application_id=entry.application_id,
        loan_type=entry.loan_type,
        amount=entry.amount,
        status=entry.status,
        status_label=status_label(entry.status),
        current_stage=entry.current_stage,
        progress=entry.progress,
        expected_progress=expected_progress(entry.current_stage),
        next_step=entry.next_step,
        updated_at=entry.updated_at,
        updated_ago=humanize_elapsed(entry.updated_at),
        stages=[
            StageSchema(
                stage=view.stage.value,
                label=view.label,
                position=view.position,
                completed=view.completed,
                current=view.current,
                next_step=view.next_step,
            )
            for view in stage_timeline(entry)
        ],
    )


def _unknown_stage(e: UnknownStageError, request_id: str) -> HTTPException:
    unknown_stage_counter.inc()
    logging.error(f"Tracker data integrity error: {e}", extra={"request_id": request_id})
    return HTTPException(status_code=500, detail="Tracker record has an unrecognized stage")


@router.get("/tracker", response_model=TrackerListResponse)
def list_tracker(
    request: Request,
    user_id: str = Query(..., min_length=1, description="User identifier"),
    search: Optional[str] = Query(None, description="Match on application ID or loan type"),
    sort_by: Optional[str] = Query(None, description="application_id | amount | status | updated_at"),
    direction: Literal["asc", "desc"] = Query("desc"),
    db: Session = Depends(get_db),
):
    """
    List a user's tracked applications.

    Returns:
        Filtered, optionally sorted entries with stage breakdowns
    """
    request_id = get_request_id(request)
    entries = TrackerRepository(db).list_for_user(user_id, limit=settings.tracker_list_limit)

    try:
        entries = sort_entries(filter_entries(entries, search), sort_by, descending=direction == "desc")
        items = [_to_schema(e) for e in entries]
    except InvalidInputError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except UnknownStageError as e:
        raise _unknown_stage(e, request_id)

    return TrackerListResponse(user_id=user_id, entries=items)


@router.get("/tracker/{application_id}", response_model=TrackerEntrySchema)
def get_tracker_entry(
    application_id: str,
    request: Request,
    user_id: str = Query(..., min_length=1, description="User identifier"),
    db: Session = Depends(get_db),
):
    """Single application with its stage breakdown"""
    entry = TrackerRepository(db).get_for_user(user_id, application_id)
    if entry is None:
        raise HTTPException(status_code=404, detail="Application not found")

    try:
        return _to_schema(entry)
    except UnknownStageError as e:
        raise _unknown_stage(e, get_request_id(request))
