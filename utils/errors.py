# utils/errors.py
"""
Failure kinds raised by the ledger and the type registry.

Every kind aborts the operation that raised it with no state change. The
routers turn them into HTTP errors carrying the kind name and a message the
frontend can show as-is.
"""


class LedgerError(ValueError):
    code = "LedgerError"
    message = "Ledger operation failed"
    status_code = 400

    def __init__(self, message=None, status_code=None):
        super().__init__(message or self.message)
        self.message = message or self.message
        if status_code is not None:
            self.status_code = status_code

    def to_detail(self) -> dict:
        return {"error": self.code, "message": self.message}


class Unauthorized(LedgerError):
    code = "Unauthorized"
    message = "Only the administrator can perform this action"
    status_code = 403


class NotAPauser(LedgerError):
    code = "NotAPauser"
    message = "This account is not an authorized pauser"
    status_code = 403


class ContractPaused(LedgerError):
    code = "ContractPaused"
    message = "The ledger is paused; write operations are disabled"
    status_code = 423


class InvalidViolationId(LedgerError):
    code = "InvalidViolationId"
    message = "No violation exists with this id"
    status_code = 404


class InvalidViolationType(LedgerError):
    code = "InvalidViolationType"
    message = "Unknown or inactive violation type"
    status_code = 400


class LocationRequired(LedgerError):
    code = "LocationRequired"
    message = "A location is required to report a violation"
    status_code = 400


class AlreadyPaid(LedgerError):
    code = "AlreadyPaid"
    message = "This violation has already been paid"
    status_code = 409


class AlreadyProcessed(LedgerError):
    code = "AlreadyProcessed"
    message = "This violation has already been processed"
    status_code = 409


class AlreadyPauser(LedgerError):
    code = "AlreadyPauser"
    message = "This account is already a pauser"
    status_code = 409


class AmountMustBePositive(LedgerError):
    code = "AmountMustBePositive"
    message = "The fine amount must be greater than zero"
    status_code = 400


class TypeAlreadyExists(LedgerError):
    code = "TypeAlreadyExists"
    message = "A violation type with this id already exists"
    status_code = 409


class TransferFailed(LedgerError):
    code = "TransferFailed"
    message = "Transfer of funds to the administrator failed"
    status_code = 502
