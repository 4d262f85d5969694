"""
Cofrinho ledger service for the Futsal Roster application.

This module folds transactions into the running balance and validates new
entries before they are appended to the persisted ledger.
"""
import logging
import math
from typing import Any, Iterable, List, Optional

from ..models import CofrinhoTransaction, TransactionCategory, TransactionType
from ..utils import new_id, now_iso
from ..utils.constants import FINE_OPTIONS
from .errors import ErrorKind, LedgerError, NotFoundError, raise_for
from .persistence_service import PersistenceService

logger = logging.getLogger(__name__)


def ledger_balance(transactions: Iterable[CofrinhoTransaction]) -> float:
    """
    Fold transactions into a balance.

    Args:
        transactions: Ledger entries in any order

    Returns:
        Sum of ``add`` amounts minus sum of ``remove`` amounts
    """
    return sum(t.signed_amount for t in transactions)


def parse_amount(raw: Any) -> Optional[float]:
    """
    Parse a user supplied amount.

    Accepts numbers and numeric strings (a decimal comma is allowed).

    Returns:
        The amount as float, or None when it is not a finite number
    """
    if isinstance(raw, bool) or raw is None:
        return None
    if isinstance(raw, str):
        raw = raw.strip().replace(",", ".")
    try:
        amount = float(raw)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(amount):
        return None
    return amount


def validate_transaction(
    transaction_type: TransactionType,
    amount: Optional[float],
    description: str,
    current_balance: float,
    category: TransactionCategory = TransactionCategory.MANUAL,
) -> List[ErrorKind]:
    """
    Check a new ledger entry against the current balance.

    Args:
        transaction_type: ``add`` or ``remove``
        amount: Parsed amount (None if unparsable)
        description: Entry description
        current_balance: Balance before the entry
        category: Manual entries require a description

    Returns:
        List of error kinds (empty if valid)
    """
    errors = []
    if amount is None or amount <= 0:
        errors.append(ErrorKind.INVALID_AMOUNT)
    if category is TransactionCategory.MANUAL and not (description or "").strip():
        errors.append(ErrorKind.EMPTY_DESCRIPTION)
    if (
        amount is not None
        and amount > 0
        and transaction_type is TransactionType.REMOVE
        and amount > round(current_balance, 2)
    ):
        errors.append(ErrorKind.INSUFFICIENT_BALANCE)
    return errors


def fine_transaction(fine_code: str, player_name: str) -> CofrinhoTransaction:
    """
    Build the ledger entry for a fine charged to a game participant.

    Raises:
        LedgerError: If the fine code is unknown
    """
    if fine_code not in FINE_OPTIONS:
        raise LedgerError(f"Unknown fine: {fine_code}", kind=ErrorKind.INVALID_AMOUNT)
    label, amount = FINE_OPTIONS[fine_code]
    return CofrinhoTransaction(
        id=new_id(),
        type=TransactionType.ADD,
        amount=amount,
        description=f"Multa: {label} - {player_name}",
        date=now_iso(),
        category=TransactionCategory.FINE,
    )


class LedgerService:
    """Manage the persisted cofrinho ledger."""

    def __init__(self, persistence_service: PersistenceService):
        self.persistence_service = persistence_service

    def list_transactions(self, newest_first: bool = True) -> List[CofrinhoTransaction]:
        transactions = self.persistence_service.load_transactions()
        if newest_first:
            transactions.reverse()
        return transactions

    def balance(self) -> float:
        return ledger_balance(self.persistence_service.load_transactions())

    def add_transaction(self, transaction_type: str, amount: Any, description: str) -> CofrinhoTransaction:
        """
        Append a manual entry to the ledger.

        The amount is rounded to cents before it is checked and stored.

        Args:
            transaction_type: ``"add"`` or ``"remove"``
            amount: Amount as number or numeric string
            description: Required description

        Returns:
            The stored transaction

        Raises:
            LedgerError: For an invalid amount, an unknown type or insufficient balance
            ValidationError: For an empty description
        """
        try:
            kind = TransactionType(transaction_type)
        except ValueError:
            raise LedgerError(f"Unknown transaction type: {transaction_type}")

        transactions = self.persistence_service.load_transactions()
        parsed = parse_amount(amount)
        if parsed is not None:
            # stored amounts are whole cents
            parsed = round(parsed, 2)
        errors = validate_transaction(kind, parsed, description, ledger_balance(transactions))
        if errors:
            logger.warning("Rejected %s of %r: %s", kind.value, amount, ", ".join(e.value for e in errors))
            raise_for(errors)

        transaction = CofrinhoTransaction(
            id=new_id(),
            type=kind,
            amount=parsed,
            description=description.strip(),
            date=now_iso(),
            category=TransactionCategory.MANUAL,
        )
        transactions.append(transaction)
        self.persistence_service.save_transactions(transactions)
        logger.info("Ledger %s %.2f (%s)", kind.value, parsed, transaction.description)
        return transaction

    def delete_transaction(self, transaction_id: int) -> None:
        """
        Delete a manual ledger entry.

        Raises:
            NotFoundError: If no transaction has this id
            LedgerError: If the entry is a fine
        """
        transactions = self.persistence_service.load_transactions()
        target = next((t for t in transactions if t.id == transaction_id), None)
        if target is None:
            raise NotFoundError(f"Transaction {transaction_id} not found")
        if not target.deletable:
            raise LedgerError(kind=ErrorKind.NOT_DELETABLE)

        self.persistence_service.save_transactions([t for t in transactions if t.id != transaction_id])
        logger.info("Deleted transaction %s", transaction_id)
