# crud/fine_crud.py

from sqlalchemy.orm import Session

from crud.ledger_crud import emit_event, get_state, ledger_write, require_not_paused, require_owner
from model.fine_schedule_model import FineSchedule
from model.ledger_state_model import LedgerState
from utils.errors import AmountMustBePositive, InvalidViolationType

# kind -> (name, description, base fine in ledger units)
DEFAULT_VIOLATION_TYPES = {
    1: ("Speeding", "Exceeding the posted speed limit", 150),
    2: ("Parking", "Illegal or obstructive parking", 50),
    3: ("Red light", "Running a red light", 200),
    4: ("No seatbelt", "Driving without a fastened seatbelt", 100),
    5: ("Mobile phone use", "Handheld phone use while driving", 120),
}
STATIC_KINDS = range(1, 6)


def calculate_fine(base_fine: int, severity: int, is_repeat_offender: bool) -> int:
    """base * (100 + severity) / 100 with truncating division, doubled for repeat offenders."""
    fine = (base_fine * (100 + severity)) // 100
    if is_repeat_offender:
        fine *= 2
    return fine


def seed_fine_schedule(db: Session) -> None:
    # caller owns the transaction
    for kind, (_, _, base_fine) in DEFAULT_VIOLATION_TYPES.items():
        if db.get(FineSchedule, kind) is None:
            db.add(FineSchedule(violation_kind=kind, base_fine=base_fine))


def _uses_registry(state: LedgerState) -> bool:
    return state.kind_source == "registry"


def is_valid_kind(db: Session, state: LedgerState, kind: int) -> bool:
    if _uses_registry(state):
        from crud.registry_crud import is_valid_type
        return is_valid_type(db, kind)
    return kind in STATIC_KINDS


def base_fine_for(db: Session, state: LedgerState, kind: int) -> int:
    if not is_valid_kind(db, state, kind):
        raise InvalidViolationType()
    if _uses_registry(state):
        from crud.registry_crud import get_violation_type
        return get_violation_type(db, kind).base_fine
    return db.get(FineSchedule, kind).base_fine


def get_base_fine(db: Session, kind: int) -> int:
    try:
        return base_fine_for(db, get_state(db), kind)
    except InvalidViolationType:
        raise InvalidViolationType(status_code=404)


def update_violation_fine(db: Session, caller: str, kind: int, new_amount: int) -> int:
    """Change the base fine for future reports; existing fines stay frozen."""
    with ledger_write(db) as state:
        require_not_paused(state)
        require_owner(state, caller)
        if new_amount <= 0:
            raise AmountMustBePositive()
        if not is_valid_kind(db, state, kind):
            raise InvalidViolationType()

        if _uses_registry(state):
            from crud.registry_crud import get_violation_type
            get_violation_type(db, kind).base_fine = new_amount
            emit_event(db, "ViolationTypeUpdated", type_id=kind, base_fine=new_amount)
        else:
            db.get(FineSchedule, kind).base_fine = new_amount
        emit_event(db, "FineAmountUpdated", violation_kind=kind, new_amount=new_amount)
    return new_amount
