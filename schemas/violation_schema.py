from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import List


class ViolationCreate(BaseModel):
    license_plate_reference: str = Field(max_length=255)
    violation_kind: int
    # recommended 0..100; larger values are accepted and priced as given
    severity: int = Field(ge=0, le=255)
    is_repeat_offender: bool = False
    location: str = Field(max_length=255)


class ViolationOut(BaseModel):
    id: int
    reporter_address: str
    license_plate_reference: str
    violation_kind: int
    severity: int
    is_repeat_offender: bool
    location: str
    created_at: datetime
    fine_amount: int
    is_paid: bool
    is_processed: bool

    model_config = ConfigDict(from_attributes=True)


class ReporterViolationsOut(BaseModel):
    reporter: str
    violation_ids: List[int]


class TotalOut(BaseModel):
    total: int
