# router/payment_router.py

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database import get_db
from crud.violation_crud import submit_payment, process_payment, get_payment_status
from schemas.payment_schemas import PaymentIn, PaymentStatusOut, ProcessOut
from router.deps import get_caller, ledger_http_error
from utils.errors import LedgerError

router = APIRouter()


@router.post("/{violation_id}", response_model=PaymentStatusOut)
def pay_violation(
    violation_id: int,
    payload: PaymentIn,
    caller: str = Depends(get_caller),
    db: Session = Depends(get_db),
):
    try:
        submit_payment(db, caller, violation_id, payload.amount, payload.payment_reference)
        return get_payment_status(db, violation_id)
    except LedgerError as e:
        raise ledger_http_error(e)


@router.get("/{violation_id}", response_model=PaymentStatusOut)
def read_payment_status(violation_id: int, db: Session = Depends(get_db)):
    try:
        return get_payment_status(db, violation_id)
    except LedgerError as e:
        raise ledger_http_error(e)


@router.post("/{violation_id}/process", response_model=ProcessOut)
def process_violation_payment(
    violation_id: int,
    caller: str = Depends(get_caller),
    db: Session = Depends(get_db),
):
    try:
        return process_payment(db, caller, violation_id)
    except LedgerError as e:
        raise ledger_http_error(e)
