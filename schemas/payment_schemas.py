from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import Optional


class PaymentIn(BaseModel):
    amount: int = Field(ge=0)
    payment_reference: Optional[str] = Field(default=None, max_length=66)


class PaymentStatusOut(BaseModel):
    violation_id: int
    amount: int
    submitted_at: Optional[datetime] = None
    reference: Optional[str] = None
    verified: bool
    is_processed: bool


class ProcessOut(BaseModel):
    id: int
    fine_amount: int
    payment_submitted_amount: int
    is_paid: bool
    is_processed: bool

    model_config = ConfigDict(from_attributes=True)
