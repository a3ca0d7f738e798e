# model/pauser_model.py
from sqlalchemy import Column, String, DateTime
from database import Base
from utils.clock import utcnow


class Pauser(Base):
    __tablename__ = "pausers"

    address  = Column(String(42), primary_key=True)
    added_at = Column(DateTime, default=utcnow)
