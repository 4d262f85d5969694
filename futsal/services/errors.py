"""
Error kinds raised and reported by the roster services.

Every kind is recoverable by re-prompting the user. Validators return a list of
kinds so callers can check before committing a write; operations raise a
:class:`RosterError` carrying the kind when handed invalid input.
"""
from enum import Enum
from typing import Iterable, List


class ErrorKind(Enum):
    """Reasons an operation is rejected."""
    INSUFFICIENT_PLAYERS = "InsufficientPlayers"
    MISSING_SELECTION = "MissingSelection"
    NO_WINNER = "NoWinner"
    INVALID_AMOUNT = "InvalidAmount"
    INSUFFICIENT_BALANCE = "InsufficientBalance"
    EMPTY_DESCRIPTION = "EmptyDescription"
    INVALID_RANK = "InvalidRank"
    ALREADY_PAID = "AlreadyPaid"
    NOT_DELETABLE = "NotDeletable"
    NOT_FOUND = "NotFound"


DEFAULT_MESSAGES = {
    ErrorKind.INSUFFICIENT_PLAYERS: "Select at least 6 players to generate teams",
    ErrorKind.MISSING_SELECTION: "Both teams must have at least one player",
    ErrorKind.NO_WINNER: "Select the winning team",
    ErrorKind.INVALID_AMOUNT: "Enter a valid amount",
    ErrorKind.INSUFFICIENT_BALANCE: "Insufficient balance",
    ErrorKind.EMPTY_DESCRIPTION: "Description is required",
    ErrorKind.INVALID_RANK: "Rank must be between 1 and 10",
    ErrorKind.ALREADY_PAID: "Payment already registered",
    ErrorKind.NOT_DELETABLE: "Only manual transactions can be deleted",
    ErrorKind.NOT_FOUND: "Record not found",
}


class RosterError(Exception):
    """Base exception for rejected roster operations."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, message: str = "", kind: ErrorKind = None):
        if kind is not None:
            self.kind = kind
        super().__init__(message or DEFAULT_MESSAGES[self.kind])


class InsufficientPlayersError(RosterError):
    kind = ErrorKind.INSUFFICIENT_PLAYERS


class SelectionError(RosterError):
    """Raised for MissingSelection and NoWinner."""
    kind = ErrorKind.MISSING_SELECTION


class LedgerError(RosterError):
    """Raised for InvalidAmount, InsufficientBalance and NotDeletable."""
    kind = ErrorKind.INVALID_AMOUNT


class ValidationError(RosterError):
    """Raised for a missing required text field or an out-of-range rank."""
    kind = ErrorKind.EMPTY_DESCRIPTION


class NotFoundError(RosterError):
    kind = ErrorKind.NOT_FOUND


_ERRORS_BY_KIND = {
    ErrorKind.INSUFFICIENT_PLAYERS: InsufficientPlayersError,
    ErrorKind.MISSING_SELECTION: SelectionError,
    ErrorKind.NO_WINNER: SelectionError,
    ErrorKind.INVALID_AMOUNT: LedgerError,
    ErrorKind.INSUFFICIENT_BALANCE: LedgerError,
    ErrorKind.NOT_DELETABLE: LedgerError,
    ErrorKind.ALREADY_PAID: LedgerError,
    ErrorKind.EMPTY_DESCRIPTION: ValidationError,
    ErrorKind.INVALID_RANK: ValidationError,
    ErrorKind.NOT_FOUND: NotFoundError,
}


def raise_for(kinds: Iterable[ErrorKind]) -> None:
    """
    Raise the exception matching the first reported error kind.

    Args:
        kinds: Error kinds returned by a validator

    Raises:
        RosterError: Subclass matching the first kind, if any
    """
    kinds: List[ErrorKind] = list(kinds)
    if kinds:
        first = kinds[0]
        raise _ERRORS_BY_KIND[first](kind=first)
