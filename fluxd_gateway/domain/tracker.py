"""Application progress tracking - read-only projection over tracker snapshots"""

from typing import Callable, Dict, Iterable, List, Optional
from fluxd_gateway.domain.models import ApplicationStatus, Stage, StageView, TrackerEntry
from fluxd_gateway.domain.exceptions import InvalidInputError, UnknownStageError
from fluxd_gateway.utils.date_utils import ensure_utc

STAGE_ORDER: List[Stage] = list(Stage)

STAGE_LABELS: Dict[Stage, str] = {stage: stage.value.capitalize() for stage in Stage}

# Severity order used for sorting; not the pipeline order
STATUS_ORDER: List[ApplicationStatus] = [
    ApplicationStatus.PENDING,
    ApplicationStatus.IN_REVIEW,
    ApplicationStatus.APPROVED,
    ApplicationStatus.REJECTED,
    ApplicationStatus.DISBURSED,
    ApplicationStatus.COMPLETED,
]

STATUS_LABELS: Dict[ApplicationStatus, str] = {
    ApplicationStatus.PENDING: "Pending",
    ApplicationStatus.IN_REVIEW: "In Review",
    ApplicationStatus.APPROVED: "Approved",
    ApplicationStatus.REJECTED: "Rejected",
    ApplicationStatus.DISBURSED: "Disbursed",
    ApplicationStatus.COMPLETED: "Completed",
}

SORTABLE_COLUMNS = ("application_id", "amount", "status", "updated_at")


def stage_index(stage: str) -> int:
    """
    Position of a stage in the pipeline (0 = submitted, 5 = completed).

    Raises:
        UnknownStageError: stage is not one of the six pipeline keys
    """
    try:
        return STAGE_ORDER.index(Stage(stage))
    except ValueError:
        raise UnknownStageError(stage) from None


def is_stage_complete(entry: TrackerEntry, stage: str) -> bool:
    """Stages up to and including the current one render as done"""
    return stage_index(stage) <= stage_index(entry.current_stage)


def is_current_stage(entry: TrackerEntry, stage: str) -> bool:
    return stage_index(stage) == stage_index(entry.current_stage)


def expected_progress(stage: str) -> int:
    """Progress percentage implied by pipeline position"""
    return round(100 * stage_index(stage) / (len(STAGE_ORDER) - 1))


def stage_timeline(entry: TrackerEntry) -> List[StageView]:
    """
    Stage breakdown for the application detail view.

    next_step is attached to the current stage only, and never to the
    terminal stage.
    """
    current = stage_index(entry.current_stage)
    views = []
    for index, stage in enumerate(STAGE_ORDER):
        is_current = index == current
        show_next = is_current and stage is not Stage.COMPLETED and bool(entry.next_step)
        views.append(
            StageView(
                stage=stage,
                label=STAGE_LABELS[stage],
                position=index + 1,
                completed=index <= current,
                current=is_current,
                next_step=entry.next_step if show_next else None,
            )
        )
    return views


def status_rank(status: str) -> int:
    """Severity position of a status; unrecognized tags rank first (-1)"""
    try:
        return STATUS_ORDER.index(ApplicationStatus(status))
    except ValueError:
        return -1


def status_label(status: str) -> str:
    try:
        return STATUS_LABELS[ApplicationStatus(status)]
    except ValueError:
        return str(status)


def filter_entries(entries: Iterable[TrackerEntry], search: Optional[str]) -> List[TrackerEntry]:
    """Case-insensitive substring match on application ID or loan type"""
    needle = (search or "").lower()
    return [
        entry
        for entry in entries
        if needle in entry.application_id.lower() or needle in entry.loan_type.lower()
    ]


_SORT_KEYS: Dict[str, Callable[[TrackerEntry], object]] = {
    "application_id": lambda e: e.application_id,
    "amount": lambda e: e.amount,
    "status": lambda e: status_rank(e.status),
    "updated_at": lambda e: ensure_utc(e.updated_at),
}


def sort_entries(
    entries: Iterable[TrackerEntry],
    sort_by: Optional[str],
    descending: bool = True,
) -> List[TrackerEntry]:
    """
    Sort tracker entries by one column.

    - status sorts by severity (pending → completed), not alphabetically
    - updated_at sorts by instant
    - equal keys keep their incoming order in both directions

    Raises:
        InvalidInputError: sort_by is not a sortable column
    """
    entries = list(entries)
    if sort_by is None:
        return entries

    key = _SORT_KEYS.get(sort_by)
    if key is None:
        raise InvalidInputError(
            f"Cannot sort by {sort_by!r}; expected one of {', '.join(SORTABLE_COLUMNS)}"
        )

    return sorted(entries, key=key, reverse=descending)
