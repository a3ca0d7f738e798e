# crud/ledger_crud.py
"""
Administrative side of the violation ledger.

The ledger state is one row (`ledger_state`) holding the owner, the pause
flag, the violation counter, the pauser count and the balance. Every write
goes through `ledger_write`, which serializes writers, locks that row and
commits or rolls back the whole operation, so a failed precondition never
leaves partial state or a stray event behind.
"""

import logging
from contextlib import contextmanager
from typing import Callable, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from database import serialized_write
from model.ledger_state_model import LedgerState, LEDGER_STATE_ID
from model.pauser_model import Pauser
from model.event_model import LedgerEvent
from model.transaction_model import LedgerTransfer, TransferKindEnum
from utils.errors import (
    AlreadyPauser,
    AmountMustBePositive,
    ContractPaused,
    NotAPauser,
    Unauthorized,
)
from utils.identity import normalize_address, same_address

logger = logging.getLogger(__name__)

KIND_SOURCES = ("static", "registry")


class LedgerNotDeployed(RuntimeError):
    pass


# ─── State & transactions ────────────────────────────────────────────────────────

def _load_state(db: Session, for_update: bool = False) -> LedgerState:
    stmt = select(LedgerState).where(LedgerState.id == LEDGER_STATE_ID)
    if for_update:
        stmt = stmt.with_for_update()
    state = db.execute(stmt).scalar_one_or_none()
    if state is None:
        raise LedgerNotDeployed("Ledger has not been deployed; run deploy_ledger.py first")
    return state


def get_state(db: Session) -> LedgerState:
    return _load_state(db)


@contextmanager
def ledger_write(db: Session):
    """Run one ledger operation atomically; yields the locked state row."""
    with serialized_write(db):
        yield _load_state(db, for_update=True)


def emit_event(db: Session, name: str, violation_id: Optional[int] = None, **payload) -> LedgerEvent:
    event = LedgerEvent(name=name, violation_id=violation_id, payload=payload)
    db.add(event)
    logger.info("[LEDGER] %s %s %s", name, violation_id if violation_id is not None else "-", payload)
    return event


def list_events(
    db: Session,
    name: Optional[str] = None,
    violation_id: Optional[int] = None,
    skip: int = 0,
    limit: int = 100,
) -> List[LedgerEvent]:
    query = db.query(LedgerEvent)
    if name:
        query = query.filter(LedgerEvent.name == name)
    if violation_id is not None:
        query = query.filter(LedgerEvent.violation_id == violation_id)
    return query.order_by(LedgerEvent.id).offset(skip).limit(limit).all()


# ─── Guards ──────────────────────────────────────────────────────────────────────

def require_owner(state: LedgerState, caller: str) -> None:
    if not same_address(state.owner_address, caller):
        raise Unauthorized()


def require_not_paused(state: LedgerState) -> None:
    if state.paused:
        raise ContractPaused()


def require_pauser(db: Session, caller: str) -> None:
    if not is_pauser(db, caller):
        raise NotAPauser()


# ─── Deployment ──────────────────────────────────────────────────────────────────

def initialize_ledger(
    db: Session,
    owner_address: str,
    kind_source: str = "static",
    registry_owner: Optional[str] = None,
) -> LedgerState:
    """
    Create the ledger once: owner, owner as first pauser, default fine
    schedule and the type registry. Calling it again returns the existing
    ledger untouched.
    """
    # imported here, both modules import this one
    from crud.fine_crud import seed_fine_schedule
    from crud.registry_crud import initialize_registry

    if kind_source not in KIND_SOURCES:
        raise ValueError(f"kind_source must be one of {KIND_SOURCES}, got {kind_source!r}")
    owner = normalize_address(owner_address)

    existing = db.get(LedgerState, LEDGER_STATE_ID)
    if existing is not None:
        logger.info("[LEDGER] Already deployed, owner %s", existing.owner_address)
        return existing

    initialize_registry(db, registry_owner or owner)

    with serialized_write(db):
        state = LedgerState(
            id=LEDGER_STATE_ID,
            owner_address=owner,
            paused=False,
            violation_counter=0,
            pauser_count=1,
            balance=0,
            kind_source=kind_source,
        )
        db.add(state)
        db.add(Pauser(address=owner))
        seed_fine_schedule(db)
        emit_event(db, "LedgerDeployed", owner=owner, kind_source=kind_source)

    db.refresh(state)
    logger.info("[LEDGER] Deployed with owner %s (%s kinds)", owner, kind_source)
    return state


# ─── Pausers ─────────────────────────────────────────────────────────────────────

def is_pauser(db: Session, address: str) -> bool:
    try:
        address = normalize_address(address)
    except ValueError:
        return False
    return db.get(Pauser, address) is not None


def pauser_count(db: Session) -> int:
    return get_state(db).pauser_count


def add_pauser(db: Session, caller: str, address: str) -> None:
    address = normalize_address(address)
    with ledger_write(db) as state:
        require_owner(state, caller)
        if db.get(Pauser, address) is not None:
            raise AlreadyPauser()
        db.add(Pauser(address=address))
        state.pauser_count += 1
        emit_event(db, "PauserAdded", pauser=address)


def remove_pauser(db: Session, caller: str, address: str) -> None:
    address = normalize_address(address)
    with ledger_write(db) as state:
        require_owner(state, caller)
        pauser = db.get(Pauser, address)
        if pauser is None:
            raise NotAPauser(status_code=409)
        db.delete(pauser)
        state.pauser_count -= 1
        emit_event(db, "PauserRemoved", pauser=address)


def toggle_pause(db: Session, caller: str) -> bool:
    with ledger_write(db) as state:
        require_pauser(db, caller)
        state.paused = not state.paused
        paused = state.paused
        emit_event(db, "PauseToggled", paused=paused, by=normalize_address(caller))
    return paused


def is_paused(db: Session) -> bool:
    return get_state(db).paused


# ─── Funds ───────────────────────────────────────────────────────────────────────

def get_balance(db: Session) -> int:
    return get_state(db).balance


def deposit(db: Session, sender: str, amount: int) -> int:
    """Plain transfer into the ledger, outside any violation."""
    if amount < 0:
        raise AmountMustBePositive("Deposit amount cannot be negative")
    sender = normalize_address(sender)
    with ledger_write(db) as state:
        state.balance += amount
        balance = state.balance
        db.add(LedgerTransfer(
            kind=TransferKindEnum.DEPOSIT,
            account_address=sender,
            amount=amount,
        ))
        emit_event(db, "FundsDeposited", sender=sender, amount=amount)
    return balance


def withdraw(db: Session, caller: str, payout: Optional[Callable[[str, int], Optional[str]]] = None) -> LedgerTransfer:
    """
    Send the whole balance to the administrator. `payout(to, amount)` moves
    the funds and returns a reference (tx hash) or None; if it raises, the
    balance is left as it was.
    """
    if payout is None:
        from crud.payout_crud import get_payout
        payout = get_payout()

    with ledger_write(db) as state:
        require_owner(state, caller)
        amount = state.balance
        owner = state.owner_address
        reference = payout(owner, amount)
        state.balance = 0
        transfer = LedgerTransfer(
            kind=TransferKindEnum.WITHDRAWAL,
            account_address=owner,
            amount=amount,
            reference=reference,
        )
        db.add(transfer)
        emit_event(db, "FundsWithdrawn", owner=owner, amount=amount, reference=reference)

    db.refresh(transfer)
    return transfer


def list_transfers(db: Session, skip: int = 0, limit: int = 100) -> List[LedgerTransfer]:
    return db.query(LedgerTransfer).order_by(LedgerTransfer.id).offset(skip).limit(limit).all()
