"""Shared fixtures: an in-memory ledger database and a handful of accounts."""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from web3 import Web3

from database import create_tables
from crud.ledger_crud import initialize_ledger


def account(n: int) -> str:
    return Web3.to_checksum_address("0x" + format(n, "040x"))


OWNER = account(0x1001)
ALICE = account(0x2002)
BOB = account(0x3003)
CAROL = account(0x4004)


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_tables(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield factory
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def ledger(db):
    """A freshly deployed ledger with the static 1..5 catalogue."""
    return initialize_ledger(db, OWNER)


@pytest.fixture
def registry_ledger(db):
    """A ledger whose violation kinds come from the type registry."""
    return initialize_ledger(db, OWNER, kind_source="registry")
