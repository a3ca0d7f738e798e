from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import Any, Dict, Optional

from model.transaction_model import TransferKindEnum


class FineOut(BaseModel):
    violation_kind: int
    base_fine: int


class FineUpdateIn(BaseModel):
    amount: int = Field(ge=0)


class PauserIn(BaseModel):
    address: str


class PauserOut(BaseModel):
    address: str
    is_pauser: bool
    pauser_count: int


class PauseOut(BaseModel):
    paused: bool


class StatusOut(BaseModel):
    owner: str
    paused: bool
    pauser_count: int
    balance: int
    total_violations: int
    kind_source: str


class DepositIn(BaseModel):
    amount: int = Field(ge=0)


class BalanceOut(BaseModel):
    balance: int


class TransferOut(BaseModel):
    id: int
    kind: TransferKindEnum
    account_address: str
    amount: int
    violation_id: Optional[int] = None
    reference: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class EventOut(BaseModel):
    id: int
    name: str
    violation_id: Optional[int] = None
    payload: Dict[str, Any]
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
