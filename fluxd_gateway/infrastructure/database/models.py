"""SQLAlchemy ORM models for the tracker table"""

import uuid
from sqlalchemy import Column, Float, DateTime, Integer, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class TrackerRecord(Base):
    """Tracked loan application; written by the application pipeline"""

    __tablename__ = "tracker"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Text, nullable=False, index=True)
    application_id = Column(Text, nullable=False, unique=True)
    loan_type = Column(Text, nullable=False)
    amount = Column(Float, nullable=False)
    status = Column(Text, nullable=False, default="pending")
    current_stage = Column(Text, nullable=False, default="submitted")
    progress = Column(Integer, nullable=False, default=0)
    next_step = Column(Text, nullable=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
