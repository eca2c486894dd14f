"""Pytest fixtures for testing"""

import pytest
from datetime import datetime, timedelta, timezone
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from fluxd_gateway.api.main import create_app
from fluxd_gateway.infrastructure.database.models import Base, TrackerRecord
from fluxd_gateway.infrastructure.database.session import get_db
from fluxd_gateway.domain.models import TrackerEntry


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def seeded_tracker(db: Session) -> list[TrackerRecord]:
    """Four applications for user_1 at different stages, one for user_2"""
    now = datetime.now(timezone.utc)
    records = [
        TrackerRecord(
            user_id="user_1",
            application_id="APP-1001",
            loan_type="Personal",
            amount=500000,
            status="in_review",
            current_stage="verification",
            progress=20,
            next_step="Upload last 3 salary slips",
            updated_at=now - timedelta(hours=2),
        ),
        TrackerRecord(
            user_id="user_1",
            application_id="APP-1002",
            loan_type="Home",
            amount=2500000,
            status="approved",
            current_stage="approval",
            progress=60,
            next_step="Sign sanction letter",
            updated_at=now - timedelta(days=3),
        ),
        TrackerRecord(
            user_id="user_1",
            application_id="APP-1003",
            loan_type="Vehicle",
            amount=800000,
            status="completed",
            current_stage="completed",
            progress=100,
            next_step=None,
            updated_at=now - timedelta(days=40),
        ),
        TrackerRecord(
            user_id="user_1",
            application_id="APP-1004",
            loan_type="Business",
            amount=1200000,
            status="pending",
            current_stage="submitted",
            progress=0,
            next_step="Document verification pending",
            updated_at=now - timedelta(minutes=5),
        ),
        TrackerRecord(
            user_id="user_2",
            application_id="APP-2001",
            loan_type="Personal",
            amount=300000,
            status="rejected",
            current_stage="review",
            progress=40,
            next_step=None,
            updated_at=now - timedelta(days=1),
        ),
    ]
    db.add_all(records)
    db.commit()
    return records


@pytest.fixture
def tracker_entries() -> list[TrackerEntry]:
    """In-memory tracker snapshots covering every status"""
    base = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)
    rows = [
        ("APP-003", "Home Loan", 2500000, "approved", "approval", 60),
        ("APP-001", "Personal Loan", 500000, "pending", "submitted", 0),
        ("APP-006", "Vehicle Loan", 800000, "completed", "completed", 100),
        ("APP-002", "Business Loan", 1200000, "in_review", "review", 40),
        ("APP-005", "Education Loan", 900000, "disbursed", "disbursement", 80),
        ("APP-004", "Personal Loan", 300000, "rejected", "verification", 20),
    ]
    return [
        TrackerEntry(
            application_id=app_id,
            loan_type=loan_type,
            amount=amount,
            status=status,
            current_stage=stage,
            progress=progress,
            next_step=None,
            updated_at=base + timedelta(days=i),
        )
        for i, (app_id, loan_type, amount, status, stage, progress) in enumerate(rows)
    ]
