"""
Tests for the report / pay / process lifecycle

Verifies:
- sequential ids, rejected reports leave the counter alone
- payments are recorded, never judged, at submission; last write wins
- processing is one-shot and decides paid vs unpaid
- pause blocks writes but not reads
"""

import pytest

from crud.ledger_crud import toggle_pause, list_events, get_balance
from crud.fine_crud import update_violation_fine
from crud.violation_crud import (
    report_violation,
    submit_payment,
    process_payment,
    get_violation_info,
    get_payment_status,
    get_reporter_violations,
    get_total_violations,
)
from tests.conftest import OWNER, ALICE, BOB, CAROL
from utils.errors import (
    AlreadyPaid,
    AlreadyProcessed,
    ContractPaused,
    InvalidViolationId,
    InvalidViolationType,
    LocationRequired,
    Unauthorized,
)


def _report(db, reporter=ALICE, kind=1, severity=0, repeat=False, location="Main St"):
    return report_violation(db, reporter, "ABC-1234", kind, severity, repeat, location)


class TestReporting:

    def test_fresh_ledger_has_no_violations(self, db, ledger):
        assert get_total_violations(db) == 0

    def test_ids_are_sequential(self, db, ledger):
        ids = [_report(db, reporter=r).id for r in (ALICE, BOB, ALICE)]
        assert ids == [1, 2, 3]
        assert get_total_violations(db) == 3

    def test_record_fields(self, db, ledger):
        violation = _report(db, kind=2, severity=30, location="Downtown Parking Lot")
        info = get_violation_info(db, violation.id)
        assert info.reporter_address == ALICE
        assert info.location == "Downtown Parking Lot"
        assert info.violation_kind == 2
        assert info.license_plate_reference == "ABC-1234"
        assert info.is_paid is False
        assert info.is_processed is False
        assert info.payment_submitted_amount == 0

    def test_empty_location_rejected_and_counter_unchanged(self, db, ledger):
        _report(db)
        with pytest.raises(LocationRequired):
            _report(db, location="")
        assert get_total_violations(db) == 1
        # the failed report did not burn an id
        assert _report(db).id == 2

    @pytest.mark.parametrize("kind", [0, 6, 99])
    def test_invalid_kind_rejected(self, db, ledger, kind):
        with pytest.raises(InvalidViolationType):
            _report(db, kind=kind)
        assert get_total_violations(db) == 0

    def test_negative_severity_rejected(self, db, ledger):
        with pytest.raises(ValueError):
            _report(db, severity=-150)
        assert get_total_violations(db) == 0

    def test_every_static_kind_accepted(self, db, ledger):
        for kind in range(1, 6):
            _report(db, kind=kind)
        assert get_total_violations(db) == 5

    def test_reporter_violations(self, db, ledger):
        _report(db, reporter=ALICE)
        _report(db, reporter=ALICE)
        _report(db, reporter=BOB)
        assert get_reporter_violations(db, ALICE) == [1, 2]
        assert get_reporter_violations(db, BOB) == [3]

    def test_reporter_with_no_violations_gets_empty_list(self, db, ledger):
        assert get_reporter_violations(db, CAROL) == []

    def test_reported_event(self, db, ledger):
        _report(db, location="Lot A")
        events = list_events(db, name="ViolationReported")
        assert len(events) == 1
        assert events[0].violation_id == 1
        assert events[0].payload == {"reporter": ALICE, "location": "Lot A"}


class TestPayments:

    def test_submit_records_amount_without_marking_paid(self, db, ledger):
        violation = _report(db)
        submit_payment(db, BOB, violation.id, violation.fine_amount, "0xabc")

        status = get_payment_status(db, violation.id)
        assert status["amount"] == violation.fine_amount
        assert status["reference"] == "0xabc"
        assert status["submitted_at"] is not None
        assert status["verified"] is False
        assert get_violation_info(db, violation.id).is_paid is False

    def test_underpayment_is_accepted(self, db, ledger):
        violation = _report(db)
        submit_payment(db, BOB, violation.id, violation.fine_amount // 2)
        assert get_payment_status(db, violation.id)["amount"] == violation.fine_amount // 2

    def test_tendered_funds_go_to_balance(self, db, ledger):
        violation = _report(db)
        submit_payment(db, BOB, violation.id, 40)
        submit_payment(db, BOB, violation.id, 200)
        assert get_balance(db) == 240

    def test_unknown_violation_rejected(self, db, ledger):
        _report(db)
        for violation_id in (0, -1, 2, 999):
            with pytest.raises(InvalidViolationId):
                submit_payment(db, BOB, violation_id, 1000)

    def test_last_submission_wins(self, db, ledger):
        violation = _report(db)
        submit_payment(db, BOB, violation.id, violation.fine_amount * 2)
        submit_payment(db, BOB, violation.id, 1)
        processed = process_payment(db, OWNER, violation.id)
        assert processed.is_paid is False

    def test_payment_after_processing_rejected(self, db, ledger):
        violation = _report(db)
        submit_payment(db, BOB, violation.id, violation.fine_amount)
        process_payment(db, OWNER, violation.id)
        with pytest.raises(AlreadyProcessed):
            submit_payment(db, BOB, violation.id, violation.fine_amount)

    def test_paid_violation_reports_already_processed(self, db, ledger):
        violation = _report(db)
        submit_payment(db, BOB, violation.id, violation.fine_amount)
        assert process_payment(db, OWNER, violation.id).is_paid is True
        with pytest.raises(AlreadyProcessed):
            submit_payment(db, CAROL, violation.id, violation.fine_amount)

    def test_paid_but_unprocessed_rejected(self, db, ledger):
        violation = _report(db)
        violation.is_paid = True
        db.commit()
        with pytest.raises(AlreadyPaid):
            submit_payment(db, BOB, violation.id, violation.fine_amount)

    def test_negative_amount_rejected(self, db, ledger):
        violation = _report(db)
        with pytest.raises(ValueError):
            submit_payment(db, BOB, violation.id, -5)


class TestProcessing:

    def test_full_payment_marks_paid(self, db, ledger):
        violation = _report(db)
        submit_payment(db, BOB, violation.id, violation.fine_amount)
        processed = process_payment(db, OWNER, violation.id)
        assert processed.is_paid is True
        assert processed.is_processed is True
        assert get_payment_status(db, violation.id)["verified"] is True

    def test_overpayment_marks_paid(self, db, ledger):
        violation = _report(db)
        submit_payment(db, BOB, violation.id, violation.fine_amount * 3)
        assert process_payment(db, OWNER, violation.id).is_paid is True

    def test_underpayment_processed_unpaid(self, db, ledger):
        violation = _report(db)
        submit_payment(db, BOB, violation.id, violation.fine_amount // 2)
        processed = process_payment(db, OWNER, violation.id)
        assert processed.is_paid is False
        assert processed.is_processed is True

    def test_processing_without_payment(self, db, ledger):
        violation = _report(db)
        processed = process_payment(db, OWNER, violation.id)
        assert processed.is_paid is False
        assert processed.is_processed is True

    def test_only_owner_processes(self, db, ledger):
        violation = _report(db)
        with pytest.raises(Unauthorized):
            process_payment(db, ALICE, violation.id)
        assert get_violation_info(db, violation.id).is_processed is False

    def test_second_processing_fails_and_changes_nothing(self, db, ledger):
        violation = _report(db)
        submit_payment(db, BOB, violation.id, violation.fine_amount)
        process_payment(db, OWNER, violation.id)
        before = get_payment_status(db, violation.id)
        events_before = len(list_events(db))

        with pytest.raises(AlreadyProcessed):
            process_payment(db, OWNER, violation.id)

        assert get_payment_status(db, violation.id) == before
        assert get_violation_info(db, violation.id).is_paid is True
        assert len(list_events(db)) == events_before

    def test_processed_event(self, db, ledger):
        violation = _report(db)
        submit_payment(db, BOB, violation.id, violation.fine_amount)
        process_payment(db, OWNER, violation.id)
        events = list_events(db, name="ViolationProcessed", violation_id=violation.id)
        assert [e.payload for e in events] == [{"payment_confirmed": True}]

    def test_parking_scenario(self, db, ledger):
        violation = report_violation(db, ALICE, "XYZ-5678", 2, 30, False, "Lot A")
        assert violation.fine_amount == 65
        submit_payment(db, BOB, violation.id, 65)
        processed = process_payment(db, OWNER, violation.id)
        assert processed.is_paid is True
        assert processed.is_processed is True
        with pytest.raises(AlreadyProcessed):
            submit_payment(db, BOB, violation.id, 65)


class TestQueries:

    @pytest.mark.parametrize("violation_id", [0, 999])
    def test_info_for_unknown_id(self, db, ledger, violation_id):
        with pytest.raises(InvalidViolationId):
            get_violation_info(db, violation_id)

    def test_payment_status_for_unknown_id(self, db, ledger):
        with pytest.raises(InvalidViolationId):
            get_payment_status(db, 0)


class TestPause:

    @pytest.fixture
    def paused(self, db, ledger):
        violation = _report(db)
        toggle_pause(db, OWNER)
        return violation

    def test_report_blocked(self, db, paused):
        with pytest.raises(ContractPaused):
            _report(db)

    def test_submit_blocked(self, db, paused):
        with pytest.raises(ContractPaused):
            submit_payment(db, BOB, paused.id, 1000)

    def test_submit_blocked_before_id_check(self, db, paused):
        with pytest.raises(ContractPaused):
            submit_payment(db, BOB, 999, 1000)

    def test_process_blocked(self, db, paused):
        with pytest.raises(ContractPaused):
            process_payment(db, OWNER, paused.id)

    def test_fine_update_blocked(self, db, paused):
        with pytest.raises(ContractPaused):
            update_violation_fine(db, OWNER, 1, 200)

    def test_reads_still_work(self, db, paused):
        assert get_violation_info(db, paused.id).id == paused.id
        assert get_payment_status(db, paused.id)["amount"] == 0
        assert get_total_violations(db) == 1
        assert get_reporter_violations(db, ALICE) == [1]

    def test_writes_resume_after_unpause(self, db, paused):
        toggle_pause(db, OWNER)
        assert _report(db).id == 2
