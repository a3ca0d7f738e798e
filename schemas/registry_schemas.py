from pydantic import BaseModel, ConfigDict, Field
from typing import List


class ViolationTypeCreate(BaseModel):
    type_id: int = Field(ge=1, le=255)
    name: str = Field(min_length=1, max_length=64)
    description: str = Field(default="", max_length=255)
    base_fine: int = Field(ge=0)


class BaseFineIn(BaseModel):
    base_fine: int = Field(ge=0)


class ViolationTypeOut(BaseModel):
    type_id: int
    name: str
    description: str
    base_fine: int
    is_active: bool
    report_count: int

    model_config = ConfigDict(from_attributes=True)


class ActiveTypesOut(BaseModel):
    type_ids: List[int]


class OwnerIn(BaseModel):
    new_owner: str


class OwnerOut(BaseModel):
    owner: str
