# model/violation_model.py
from sqlalchemy import Column, Integer, String, DateTime, BigInteger, Boolean
from database import Base
from utils.clock import utcnow


class Violation(Base):
    __tablename__ = "violations"

    # allocated from ledger_state.violation_counter, never autoincremented
    id                       = Column(Integer, primary_key=True, autoincrement=False)
    reporter_address         = Column(String(42), index=True, nullable=False)
    license_plate_reference  = Column(String(255), nullable=False)
    violation_kind           = Column(Integer, nullable=False)
    severity                 = Column(Integer, nullable=False)
    is_repeat_offender       = Column(Boolean, nullable=False, default=False)
    location                 = Column(String(255), nullable=False)
    created_at               = Column(DateTime, default=utcnow, nullable=False)
    fine_amount              = Column(BigInteger, nullable=False)

    is_paid                  = Column(Boolean, nullable=False, default=False)
    is_processed             = Column(Boolean, nullable=False, default=False)

    payment_reference        = Column(String(66), nullable=True)
    payment_submitted_amount = Column(BigInteger, nullable=False, default=0)
    payment_submitted_at     = Column(DateTime, nullable=True)
    payment_verified         = Column(Boolean, nullable=False, default=False)
