# crud/violation_crud.py
"""
Report, pay, process.

A violation's fine is computed once when it is reported. Anyone may then
submit a payment; the latest submission is what counts. Processing is the
administrator's one-shot decision: the violation is marked paid when the
latest tendered amount covers the fine, and is processed either way.
"""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from crud.fine_crud import base_fine_for, calculate_fine, is_valid_kind
from crud.ledger_crud import emit_event, get_state, ledger_write, require_not_paused, require_owner
from model.ledger_state_model import LedgerState
from model.transaction_model import LedgerTransfer, TransferKindEnum
from model.violation_model import Violation
from utils.clock import utcnow
from utils.errors import (
    AlreadyPaid,
    AlreadyProcessed,
    InvalidViolationId,
    InvalidViolationType,
    LocationRequired,
)
from utils.identity import normalize_address

logger = logging.getLogger(__name__)


def _get_violation(db: Session, state: LedgerState, violation_id: int) -> Violation:
    if violation_id < 1 or violation_id > state.violation_counter:
        raise InvalidViolationId()
    return db.get(Violation, violation_id)


def report_violation(
    db: Session,
    reporter: str,
    license_plate_reference: str,
    violation_kind: int,
    severity: int,
    is_repeat_offender: bool,
    location: str,
) -> Violation:
    if severity < 0:
        raise ValueError("severity cannot be negative")
    reporter = normalize_address(reporter)
    with ledger_write(db) as state:
        require_not_paused(state)
        if not location:
            raise LocationRequired()
        if not is_valid_kind(db, state, violation_kind):
            raise InvalidViolationType()

        fine_amount = calculate_fine(base_fine_for(db, state, violation_kind), severity, is_repeat_offender)
        violation_id = state.violation_counter + 1
        violation = Violation(
            id=violation_id,
            reporter_address=reporter,
            license_plate_reference=license_plate_reference,
            violation_kind=violation_kind,
            severity=severity,
            is_repeat_offender=is_repeat_offender,
            location=location,
            created_at=utcnow(),
            fine_amount=fine_amount,
            is_paid=False,
            is_processed=False,
            payment_submitted_amount=0,
            payment_verified=False,
        )
        db.add(violation)
        state.violation_counter = violation_id

        if state.kind_source == "registry":
            from crud.registry_crud import record_report
            record_report(db, violation_kind)

        emit_event(db, "ViolationReported", violation_id, reporter=reporter, location=location)

    db.refresh(violation)
    return violation


def submit_payment(
    db: Session,
    payer: str,
    violation_id: int,
    amount_tendered: int,
    payment_reference: Optional[str] = None,
) -> Violation:
    """
    Record a payment attempt. Nothing is judged here: under- and overpayment
    are both stored, and a later submission replaces an earlier one.
    """
    if amount_tendered < 0:
        raise ValueError("amount_tendered cannot be negative")
    payer = normalize_address(payer)

    with ledger_write(db) as state:
        require_not_paused(state)
        violation = _get_violation(db, state, violation_id)
        # is_paid is only set by processing, so a settled violation reports AlreadyProcessed
        if violation.is_processed:
            raise AlreadyProcessed()
        if violation.is_paid:
            raise AlreadyPaid()

        now = utcnow()
        violation.payment_reference = payment_reference
        violation.payment_submitted_amount = amount_tendered
        violation.payment_submitted_at = now
        state.balance += amount_tendered
        db.add(LedgerTransfer(
            kind=TransferKindEnum.PAYMENT,
            account_address=payer,
            amount=amount_tendered,
            violation_id=violation_id,
            reference=payment_reference,
            created_at=now,
        ))
        emit_event(db, "PaymentSubmitted", violation_id, timestamp=now.isoformat(), payer=payer, amount=amount_tendered)

    db.refresh(violation)
    return violation


def process_payment(db: Session, caller: str, violation_id: int) -> Violation:
    with ledger_write(db) as state:
        require_owner(state, caller)
        require_not_paused(state)
        violation = _get_violation(db, state, violation_id)
        if violation.is_processed:
            raise AlreadyProcessed()

        paid = violation.payment_submitted_amount >= violation.fine_amount
        violation.is_paid = paid
        violation.payment_verified = paid
        violation.is_processed = True
        emit_event(db, "ViolationProcessed", violation_id, payment_confirmed=paid)

    db.refresh(violation)
    if not paid:
        logger.info(
            "[LEDGER] Violation %d processed unpaid (%d tendered, %d due)",
            violation_id, violation.payment_submitted_amount, violation.fine_amount,
        )
    return violation


# ─── Queries ─────────────────────────────────────────────────────────────────────

def get_violation_info(db: Session, violation_id: int) -> Violation:
    return _get_violation(db, get_state(db), violation_id)


def get_payment_status(db: Session, violation_id: int) -> dict:
    violation = _get_violation(db, get_state(db), violation_id)
    return {
        "violation_id": violation.id,
        "amount": violation.payment_submitted_amount,
        "submitted_at": violation.payment_submitted_at,
        "reference": violation.payment_reference,
        "verified": violation.payment_verified,
        "is_processed": violation.is_processed,
    }


def get_reporter_violations(db: Session, reporter: str) -> List[int]:
    reporter = normalize_address(reporter)
    rows = (
        db.query(Violation.id)
        .filter(Violation.reporter_address == reporter)
        .order_by(Violation.id)
        .all()
    )
    return [row.id for row in rows]


def get_total_violations(db: Session) -> int:
    return get_state(db).violation_counter


def get_all_violations(db: Session, skip: int = 0, limit: int = 100) -> List[Violation]:
    return db.query(Violation).order_by(Violation.id).offset(skip).limit(limit).all()
