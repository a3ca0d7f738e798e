"""
Tests for the violation type registry

Verifies:
- default types and ownership
- add / update / deactivate / activate / transfer, owner only
- a registry-backed ledger validates kinds, prices and counts reports through it
"""

import pytest

from crud.fine_crud import get_base_fine, update_violation_fine
from crud.registry_crud import (
    add_violation_type,
    update_base_fine,
    deactivate_type,
    activate_type,
    transfer_ownership,
    get_violation_type,
    get_active_types,
    get_registry_owner,
    is_valid_type,
)
from crud.ledger_crud import initialize_ledger, list_events
from crud.violation_crud import report_violation
from tests.conftest import OWNER, ALICE, BOB
from utils.errors import AmountMustBePositive, InvalidViolationType, TypeAlreadyExists, Unauthorized
from utils.identity import ZERO_ADDRESS


class TestRegistryDefaults:

    def test_five_active_types(self, db, ledger):
        assert get_active_types(db) == [1, 2, 3, 4, 5]

    def test_default_type_info(self, db, ledger):
        speeding = get_violation_type(db, 1)
        assert speeding.name == "Speeding"
        assert speeding.base_fine == 150
        assert speeding.report_count == 0
        assert speeding.is_active is True

    def test_unknown_type(self, db, ledger):
        with pytest.raises(InvalidViolationType):
            get_violation_type(db, 99)
        assert is_valid_type(db, 99) is False

    def test_owner_defaults_to_ledger_owner(self, db, ledger):
        assert get_registry_owner(db) == OWNER

    def test_independent_owner(self, db):
        initialize_ledger(db, OWNER, registry_owner=ALICE)
        assert get_registry_owner(db) == ALICE
        with pytest.raises(Unauthorized):
            deactivate_type(db, OWNER, 1)


class TestTypeManagement:

    def test_add_type(self, db, ledger):
        added = add_violation_type(db, OWNER, 6, "Test Violation", "Test description", 75)
        assert added.base_fine == 75
        assert is_valid_type(db, 6) is True
        event = list_events(db, name="ViolationTypeAdded")[-1]
        assert event.payload == {"type_id": 6, "type_name": "Test Violation", "base_fine": 75}

    def test_add_existing_type(self, db, ledger):
        with pytest.raises(TypeAlreadyExists):
            add_violation_type(db, OWNER, 1, "Speeding again", "", 75)

    def test_add_type_needs_positive_fine(self, db, ledger):
        with pytest.raises(AmountMustBePositive):
            add_violation_type(db, OWNER, 6, "Free", "", 0)
        assert is_valid_type(db, 6) is False

    def test_non_owner_cannot_add(self, db, ledger):
        with pytest.raises(Unauthorized):
            add_violation_type(db, ALICE, 6, "Test", "Test", 75)

    def test_update_base_fine(self, db, ledger):
        update_base_fine(db, OWNER, 1, 175)
        assert get_violation_type(db, 1).base_fine == 175

    def test_update_unknown_type(self, db, ledger):
        with pytest.raises(InvalidViolationType):
            update_base_fine(db, OWNER, 42, 175)

    def test_deactivate_and_activate(self, db, ledger):
        deactivate_type(db, OWNER, 1)
        assert is_valid_type(db, 1) is False
        assert get_active_types(db) == [2, 3, 4, 5]

        activate_type(db, OWNER, 1)
        assert is_valid_type(db, 1) is True

    def test_transfer_ownership(self, db, ledger):
        transfer_ownership(db, OWNER, BOB)
        assert get_registry_owner(db) == BOB
        with pytest.raises(Unauthorized):
            deactivate_type(db, OWNER, 1)

    def test_transfer_to_zero_address(self, db, ledger):
        with pytest.raises(Unauthorized):
            transfer_ownership(db, OWNER, ZERO_ADDRESS)
        assert get_registry_owner(db) == OWNER


class TestStaticLedgerIgnoresRegistry:

    def test_registry_only_type_not_reportable(self, db, ledger):
        add_violation_type(db, OWNER, 6, "Littering", "", 30)
        with pytest.raises(InvalidViolationType):
            report_violation(db, ALICE, "ABC-1234", 6, 0, False, "Park")

    def test_report_does_not_count_in_registry(self, db, ledger):
        report_violation(db, ALICE, "ABC-1234", 1, 0, False, "Main St")
        assert get_violation_type(db, 1).report_count == 0


class TestRegistryBackedLedger:

    def test_dynamic_kind_reportable(self, db, registry_ledger):
        add_violation_type(db, OWNER, 6, "Littering", "", 30)
        violation = report_violation(db, ALICE, "ABC-1234", 6, 50, False, "Park")
        assert violation.fine_amount == 45
        assert get_violation_type(db, 6).report_count == 1

    def test_deactivated_kind_rejected(self, db, registry_ledger):
        deactivate_type(db, OWNER, 2)
        with pytest.raises(InvalidViolationType):
            report_violation(db, ALICE, "ABC-1234", 2, 0, False, "Lot A")
        with pytest.raises(InvalidViolationType):
            get_base_fine(db, 2)

    def test_base_fine_comes_from_registry(self, db, registry_ledger):
        update_base_fine(db, OWNER, 2, 80)
        assert get_base_fine(db, 2) == 80
        assert report_violation(db, ALICE, "ABC-1234", 2, 0, False, "Lot A").fine_amount == 80

    def test_fine_update_routed_to_registry(self, db, registry_ledger):
        update_violation_fine(db, OWNER, 3, 250)
        assert get_violation_type(db, 3).base_fine == 250
        assert list_events(db, name="ViolationTypeUpdated")[-1].payload == {"type_id": 3, "base_fine": 250}
        assert list_events(db, name="FineAmountUpdated")[-1].payload["new_amount"] == 250

    def test_report_counts_accumulate(self, db, registry_ledger):
        for _ in range(3):
            report_violation(db, ALICE, "ABC-1234", 4, 0, False, "Main St")
        assert get_violation_type(db, 4).report_count == 3
