"""
Domain exceptions for the registry and booking engine.

Raised by the services and rendered by the application exception handler
in main.py. Every failure is a permanent rejection of that one request;
nothing here is retried internally.
"""

from fastapi import status


class LedgerError(Exception):
    """Base exception for all ledger errors."""

    code = "ledger_error"
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, detail: str = ""):
        super().__init__(detail or self.__class__.__doc__)
        self.detail = detail or self.__class__.__doc__


class InvalidArgument(LedgerError):
    """Malformed input, e.g. a zero id or age."""

    code = "invalid_argument"


class InvalidEnum(InvalidArgument):
    """Training interest is outside the recognized values."""

    code = "invalid_enum"


class DuplicateId(LedgerError):
    """An entity of this kind already holds the identifier."""

    code = "duplicate_id"
    status_code = status.HTTP_409_CONFLICT


class DuplicateIdentity(LedgerError):
    """The caller identity already registered this role."""

    code = "duplicate_identity"
    status_code = status.HTTP_409_CONFLICT


class NotFound(LedgerError):
    """Referenced admin, trainer or participant does not exist."""

    code = "not_found"
    status_code = status.HTTP_404_NOT_FOUND


class IllegalTransition(LedgerError):
    """Completed training cannot be reverted to incomplete."""

    code = "illegal_transition"
    status_code = status.HTTP_409_CONFLICT


class InsufficientBalance(LedgerError):
    """Participant balance is below the booking fee."""

    code = "insufficient_balance"
    status_code = status.HTTP_402_PAYMENT_REQUIRED


class NoAdminsAvailable(LedgerError):
    """No admin is registered to receive the booking fee."""

    code = "no_admins_available"
    status_code = status.HTTP_409_CONFLICT


class InvalidSlot(LedgerError):
    """Slot index is outside the daily calendar."""

    code = "invalid_slot"


class AlreadyBooked(LedgerError):
    """The slot is already booked."""

    code = "already_booked"
    status_code = status.HTTP_409_CONFLICT


class Unauthorized(LedgerError):
    """Caller identity does not match the required role or record."""

    code = "unauthorized"
    status_code = status.HTTP_403_FORBIDDEN
