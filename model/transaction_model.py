# model/transaction_model.py
from sqlalchemy import Column, Integer, String, BigInteger, DateTime, Enum
from database import Base
from utils.clock import utcnow
import enum


class TransferKindEnum(enum.Enum):
    PAYMENT = "PAYMENT"
    DEPOSIT = "DEPOSIT"
    WITHDRAWAL = "WITHDRAWAL"


class LedgerTransfer(Base):
    __tablename__ = "ledger_transfers"

    id              = Column(Integer, primary_key=True, index=True)
    kind            = Column(Enum(TransferKindEnum), nullable=False)
    account_address = Column(String(42), nullable=False)
    amount          = Column(BigInteger, nullable=False)
    violation_id    = Column(Integer, nullable=True)
    reference       = Column(String(66), nullable=True)   # payment reference or tx hash
    created_at      = Column(DateTime, default=utcnow)
