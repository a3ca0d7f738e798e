# router/admin_router.py

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional

from database import get_db
from crud.fine_crud import get_base_fine, update_violation_fine
from crud.ledger_crud import (
    add_pauser,
    remove_pauser,
    is_pauser,
    pauser_count,
    toggle_pause,
    get_state,
    deposit,
    withdraw,
    get_balance,
    list_events,
    list_transfers,
)
from schemas.admin_schemas import (
    FineOut,
    FineUpdateIn,
    PauserIn,
    PauserOut,
    PauseOut,
    StatusOut,
    DepositIn,
    BalanceOut,
    TransferOut,
    EventOut,
)
from router.deps import get_caller, parse_address, ledger_http_error
from utils.errors import LedgerError

router = APIRouter()


@router.get("/status", response_model=StatusOut)
def read_status(db: Session = Depends(get_db)):
    state = get_state(db)
    return {
        "owner": state.owner_address,
        "paused": state.paused,
        "pauser_count": state.pauser_count,
        "balance": state.balance,
        "total_violations": state.violation_counter,
        "kind_source": state.kind_source,
    }


@router.get("/fines/{kind}", response_model=FineOut)
def read_base_fine(kind: int, db: Session = Depends(get_db)):
    try:
        return {"violation_kind": kind, "base_fine": get_base_fine(db, kind)}
    except LedgerError as e:
        raise ledger_http_error(e)


@router.put("/fines/{kind}", response_model=FineOut)
def set_base_fine(kind: int, payload: FineUpdateIn, caller: str = Depends(get_caller), db: Session = Depends(get_db)):
    try:
        return {"violation_kind": kind, "base_fine": update_violation_fine(db, caller, kind, payload.amount)}
    except LedgerError as e:
        raise ledger_http_error(e)


@router.post("/pausers", response_model=PauserOut)
def create_pauser(payload: PauserIn, caller: str = Depends(get_caller), db: Session = Depends(get_db)):
    address = parse_address(payload.address)
    try:
        add_pauser(db, caller, address)
    except LedgerError as e:
        raise ledger_http_error(e)
    return {"address": address, "is_pauser": True, "pauser_count": pauser_count(db)}


@router.delete("/pausers/{address}", response_model=PauserOut)
def delete_pauser(address: str, caller: str = Depends(get_caller), db: Session = Depends(get_db)):
    address = parse_address(address)
    try:
        remove_pauser(db, caller, address)
    except LedgerError as e:
        raise ledger_http_error(e)
    return {"address": address, "is_pauser": False, "pauser_count": pauser_count(db)}


@router.get("/pausers/{address}", response_model=PauserOut)
def read_pauser(address: str, db: Session = Depends(get_db)):
    address = parse_address(address)
    return {"address": address, "is_pauser": is_pauser(db, address), "pauser_count": pauser_count(db)}


@router.post("/pause", response_model=PauseOut)
def flip_pause(caller: str = Depends(get_caller), db: Session = Depends(get_db)):
    try:
        return {"paused": toggle_pause(db, caller)}
    except LedgerError as e:
        raise ledger_http_error(e)


@router.get("/balance", response_model=BalanceOut)
def read_balance(db: Session = Depends(get_db)):
    return {"balance": get_balance(db)}


@router.post("/deposit", response_model=BalanceOut)
def deposit_funds(payload: DepositIn, caller: str = Depends(get_caller), db: Session = Depends(get_db)):
    try:
        return {"balance": deposit(db, caller, payload.amount)}
    except LedgerError as e:
        raise ledger_http_error(e)


@router.post("/withdraw", response_model=TransferOut)
def withdraw_funds(caller: str = Depends(get_caller), db: Session = Depends(get_db)):
    try:
        return withdraw(db, caller)
    except LedgerError as e:
        raise ledger_http_error(e)


@router.get("/transfers", response_model=List[TransferOut])
def read_transfers(skip: int = 0, limit: int = 100, db: Session = Depends(get_db)):
    return list_transfers(db, skip, limit)


@router.get("/events", response_model=List[EventOut])
def read_events(
    name: Optional[str] = None,
    violation_id: Optional[int] = None,
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
):
    return list_events(db, name, violation_id, skip, limit)
