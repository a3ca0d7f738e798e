# crud/registry_crud.py

import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from crud.fine_crud import DEFAULT_VIOLATION_TYPES
from crud.ledger_crud import emit_event
from database import serialized_write
from model.violation_type_model import ViolationType, RegistryState, REGISTRY_STATE_ID
from utils.errors import AmountMustBePositive, InvalidViolationType, TypeAlreadyExists, Unauthorized
from utils.identity import ZERO_ADDRESS, normalize_address, same_address

logger = logging.getLogger(__name__)


def _require_registry_owner(db: Session, caller: str) -> RegistryState:
    stmt = select(RegistryState).where(RegistryState.id == REGISTRY_STATE_ID).with_for_update()
    state = db.execute(stmt).scalar_one()
    if not same_address(state.owner_address, caller):
        raise Unauthorized("Only the registry owner can perform this action")
    return state


def _get_type_for_write(db: Session, type_id: int) -> ViolationType:
    violation_type = db.get(ViolationType, type_id)
    if violation_type is None:
        raise InvalidViolationType()
    return violation_type


def initialize_registry(db: Session, owner_address: str) -> RegistryState:
    owner = normalize_address(owner_address)
    existing = db.get(RegistryState, REGISTRY_STATE_ID)
    if existing is not None:
        return existing

    with serialized_write(db):
        state = RegistryState(id=REGISTRY_STATE_ID, owner_address=owner)
        db.add(state)
        for type_id, (name, description, base_fine) in DEFAULT_VIOLATION_TYPES.items():
            db.add(ViolationType(
                type_id=type_id,
                name=name,
                description=description,
                base_fine=base_fine,
                is_active=True,
                report_count=0,
            ))
    db.refresh(state)
    logger.info("[REGISTRY] Seeded %d default types, owner %s", len(DEFAULT_VIOLATION_TYPES), owner)
    return state


def get_registry_owner(db: Session) -> str:
    return db.get(RegistryState, REGISTRY_STATE_ID).owner_address


def get_violation_type(db: Session, type_id: int) -> ViolationType:
    violation_type = db.get(ViolationType, type_id)
    if violation_type is None:
        raise InvalidViolationType(status_code=404)
    return violation_type


def is_valid_type(db: Session, type_id: int) -> bool:
    violation_type = db.get(ViolationType, type_id)
    return violation_type is not None and violation_type.is_active


def get_active_types(db: Session) -> List[int]:
    rows = (
        db.query(ViolationType.type_id)
        .filter(ViolationType.is_active.is_(True))
        .order_by(ViolationType.type_id)
        .all()
    )
    return [row.type_id for row in rows]


def get_all_types(db: Session) -> List[ViolationType]:
    return db.query(ViolationType).order_by(ViolationType.type_id).all()


def record_report(db: Session, type_id: int) -> None:
    # runs inside the reporting transaction
    db.get(ViolationType, type_id).report_count += 1


def add_violation_type(
    db: Session,
    caller: str,
    type_id: int,
    name: str,
    description: str,
    base_fine: int,
) -> ViolationType:
    with serialized_write(db):
        _require_registry_owner(db, caller)
        if db.get(ViolationType, type_id) is not None:
            raise TypeAlreadyExists()
        if base_fine <= 0:
            raise AmountMustBePositive()
        violation_type = ViolationType(
            type_id=type_id,
            name=name,
            description=description,
            base_fine=base_fine,
            is_active=True,
            report_count=0,
        )
        db.add(violation_type)
        emit_event(db, "ViolationTypeAdded", type_id=type_id, type_name=name, base_fine=base_fine)
    db.refresh(violation_type)
    return violation_type


def update_base_fine(db: Session, caller: str, type_id: int, new_fine: int) -> ViolationType:
    with serialized_write(db):
        _require_registry_owner(db, caller)
        violation_type = _get_type_for_write(db, type_id)
        if new_fine <= 0:
            raise AmountMustBePositive()
        violation_type.base_fine = new_fine
        emit_event(db, "ViolationTypeUpdated", type_id=type_id, base_fine=new_fine)
    db.refresh(violation_type)
    return violation_type


def _set_active(db: Session, caller: str, type_id: int, active: bool) -> ViolationType:
    with serialized_write(db):
        _require_registry_owner(db, caller)
        violation_type = _get_type_for_write(db, type_id)
        violation_type.is_active = active
        emit_event(db, "ViolationTypeActivated" if active else "ViolationTypeDeactivated", type_id=type_id)
    db.refresh(violation_type)
    return violation_type


def deactivate_type(db: Session, caller: str, type_id: int) -> ViolationType:
    return _set_active(db, caller, type_id, False)


def activate_type(db: Session, caller: str, type_id: int) -> ViolationType:
    return _set_active(db, caller, type_id, True)


def transfer_ownership(db: Session, caller: str, new_owner: str) -> str:
    new_owner = normalize_address(new_owner)
    with serialized_write(db):
        state = _require_registry_owner(db, caller)
        if new_owner == ZERO_ADDRESS:
            raise Unauthorized("Ownership cannot be transferred to the zero address")
        previous = state.owner_address
        state.owner_address = new_owner
        emit_event(db, "OwnershipTransferred", previous_owner=previous, new_owner=new_owner)
    return new_owner
