# model/ledger_state_model.py
from sqlalchemy import Column, Integer, String, DateTime, BigInteger, Boolean
from database import Base
from utils.clock import utcnow

LEDGER_STATE_ID = 1


class LedgerState(Base):
    """Single row holding the ledger's administrative state."""
    __tablename__ = "ledger_state"

    id                = Column(Integer, primary_key=True, default=LEDGER_STATE_ID)
    owner_address     = Column(String(42), nullable=False)
    paused            = Column(Boolean, nullable=False, default=False)
    violation_counter = Column(Integer, nullable=False, default=0)
    pauser_count      = Column(Integer, nullable=False, default=0)
    balance           = Column(BigInteger, nullable=False, default=0)
    kind_source       = Column(String(16), nullable=False, default="static")
    created_at        = Column(DateTime, default=utcnow)
