"""Data access layer for tracker entries"""

from typing import List, Optional
from sqlalchemy.orm import Session
from fluxd_gateway.infrastructure.database.models import TrackerRecord
from fluxd_gateway.domain.models import TrackerEntry


def to_domain(record: TrackerRecord) -> TrackerEntry:
    """Map an ORM row to the domain snapshot"""
    return TrackerEntry(
        application_id=record.application_id,
        loan_type=record.loan_type,
        amount=record.amount,
        status=record.status,
        current_stage=record.current_stage,
        progress=record.progress,
        next_step=record.next_step,
        updated_at=record.updated_at,
    )


class TrackerRepository:
    """Read-only repository for tracked applications"""

    def __init__(self, db: Session):
        self.db = db

    def list_for_user(self, user_id: str, limit: int = 100) -> List[TrackerEntry]:
        """Fetch a user's applications, most recently updated first"""
        records = (
            self.db.query(TrackerRecord)
            .filter(TrackerRecord.user_id == user_id)
            .order_by(TrackerRecord.updated_at.desc())
            .limit(limit)
            .all()
        )
        return [to_domain(r) for r in records]

    def get_for_user(self, user_id: str, application_id: str) -> Optional[TrackerEntry]:
        """Fetch one application owned by the user"""
        record = (
            self.db.query(TrackerRecord)
            .filter(
                TrackerRecord.user_id == user_id,
                TrackerRecord.application_id == application_id,
            )
            .first()
        )
        return to_domain(record) if record else None
