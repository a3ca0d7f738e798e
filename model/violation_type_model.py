# model/violation_type_model.py
from sqlalchemy import Column, Integer, String, BigInteger, Boolean, DateTime
from database import Base
from utils.clock import utcnow

REGISTRY_STATE_ID = 1


class ViolationType(Base):
    __tablename__ = "violation_types"

    type_id      = Column(Integer, primary_key=True, autoincrement=False)
    name         = Column(String(64), nullable=False)
    description  = Column(String(255), nullable=False, default="")
    base_fine    = Column(BigInteger, nullable=False)
    is_active    = Column(Boolean, nullable=False, default=True)
    report_count = Column(Integer, nullable=False, default=0)
    created_at   = Column(DateTime, default=utcnow)


class RegistryState(Base):
    __tablename__ = "registry_state"

    id            = Column(Integer, primary_key=True, default=REGISTRY_STATE_ID)
    owner_address = Column(String(42), nullable=False)
