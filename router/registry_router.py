# router/registry_router.py

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from database import get_db
from crud.registry_crud import (
    add_violation_type,
    update_base_fine,
    deactivate_type,
    activate_type,
    transfer_ownership,
    get_violation_type,
    get_active_types,
    get_all_types,
    get_registry_owner,
)
from schemas.registry_schemas import (
    ViolationTypeCreate,
    ViolationTypeOut,
    BaseFineIn,
    ActiveTypesOut,
    OwnerIn,
    OwnerOut,
)
from router.deps import get_caller, parse_address, ledger_http_error
from utils.errors import LedgerError

router = APIRouter()


@router.get("/types", response_model=List[ViolationTypeOut])
def list_types(db: Session = Depends(get_db)):
    return get_all_types(db)


@router.get("/types/active", response_model=ActiveTypesOut)
def list_active_types(db: Session = Depends(get_db)):
    return {"type_ids": get_active_types(db)}


@router.post("/types", response_model=ViolationTypeOut)
def create_type(payload: ViolationTypeCreate, caller: str = Depends(get_caller), db: Session = Depends(get_db)):
    try:
        return add_violation_type(db, caller, payload.type_id, payload.name, payload.description, payload.base_fine)
    except LedgerError as e:
        raise ledger_http_error(e)


@router.get("/types/{type_id}", response_model=ViolationTypeOut)
def read_type(type_id: int, db: Session = Depends(get_db)):
    try:
        return get_violation_type(db, type_id)
    except LedgerError as e:
        raise ledger_http_error(e)


@router.put("/types/{type_id}/fine", response_model=ViolationTypeOut)
def set_type_fine(type_id: int, payload: BaseFineIn, caller: str = Depends(get_caller), db: Session = Depends(get_db)):
    try:
        return update_base_fine(db, caller, type_id, payload.base_fine)
    except LedgerError as e:
        raise ledger_http_error(e)


@router.post("/types/{type_id}/deactivate", response_model=ViolationTypeOut)
def disable_type(type_id: int, caller: str = Depends(get_caller), db: Session = Depends(get_db)):
    try:
        return deactivate_type(db, caller, type_id)
    except LedgerError as e:
        raise ledger_http_error(e)


@router.post("/types/{type_id}/activate", response_model=ViolationTypeOut)
def enable_type(type_id: int, caller: str = Depends(get_caller), db: Session = Depends(get_db)):
    try:
        return activate_type(db, caller, type_id)
    except LedgerError as e:
        raise ledger_http_error(e)


@router.get("/owner", response_model=OwnerOut)
def read_owner(db: Session = Depends(get_db)):
    return {"owner": get_registry_owner(db)}


@router.put("/owner", response_model=OwnerOut)
def change_owner(payload: OwnerIn, caller: str = Depends(get_caller), db: Session = Depends(get_db)):
    new_owner = parse_address(payload.new_owner)
    try:
        return {"owner": transfer_ownership(db, caller, new_owner)}
    except LedgerError as e:
        raise ledger_http_error(e)
