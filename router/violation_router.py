from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from schemas.violation_schema import ViolationCreate, ViolationOut, ReporterViolationsOut, TotalOut
from crud.violation_crud import (
    report_violation,
    get_violation_info,
    get_all_violations,
    get_reporter_violations,
    get_total_violations,
)
from database import get_db
from router.deps import get_caller, parse_address, ledger_http_error
from utils.errors import LedgerError
from typing import List

router = APIRouter()


@router.post("/", response_model=ViolationOut)
def add_violation(violation: ViolationCreate, caller: str = Depends(get_caller), db: Session = Depends(get_db)):
    try:
        return report_violation(
            db,
            caller,
            violation.license_plate_reference,
            violation.violation_kind,
            violation.severity,
            violation.is_repeat_offender,
            violation.location,
        )
    except LedgerError as e:
        raise ledger_http_error(e)


@router.get("/total", response_model=TotalOut)
def read_total(db: Session = Depends(get_db)):
    return {"total": get_total_violations(db)}


@router.get("/reporter/{address}", response_model=ReporterViolationsOut)
def read_reporter_violations(address: str, db: Session = Depends(get_db)):
    reporter = parse_address(address)
    return {"reporter": reporter, "violation_ids": get_reporter_violations(db, reporter)}


@router.get("/{violation_id}", response_model=ViolationOut)
def read_violation(violation_id: int, db: Session = Depends(get_db)):
    try:
        return get_violation_info(db, violation_id)
    except LedgerError as e:
        raise ledger_http_error(e)


@router.get("/", response_model=List[ViolationOut])
def read_violations(skip: int = 0, limit: int = 100, db: Session = Depends(get_db)):
    return get_all_violations(db, skip, limit)
