# model/event_model.py
from sqlalchemy import Column, Integer, String, DateTime, JSON
from database import Base
from utils.clock import utcnow


class LedgerEvent(Base):
    """Append-only outbox; rows are only ever inserted."""
    __tablename__ = "ledger_events"

    id           = Column(Integer, primary_key=True, index=True)
    name         = Column(String(64), index=True, nullable=False)
    violation_id = Column(Integer, index=True, nullable=True)
    payload      = Column(JSON, nullable=False, default=dict)
    created_at   = Column(DateTime, default=utcnow)
