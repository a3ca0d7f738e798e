# model/fine_schedule_model.py
from sqlalchemy import Column, Integer, BigInteger, DateTime
from database import Base
from utils.clock import utcnow


class FineSchedule(Base):
    __tablename__ = "fine_schedule"

    violation_kind = Column(Integer, primary_key=True, autoincrement=False)
    base_fine      = Column(BigInteger, nullable=False)
    updated_at     = Column(DateTime, default=utcnow, onupdate=utcnow)
