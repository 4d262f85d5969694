"""
Cofrinho (shared cash box) transaction model.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class TransactionType(Enum):
    """Direction of a ledger entry."""
    ADD = "add"
    REMOVE = "remove"


class TransactionCategory(Enum):
    """Origin of a ledger entry."""
    MANUAL = "manual"
    FINE = "multa"


@dataclass(frozen=True)
class CofrinhoTransaction:
    """
    One entry of the cofrinho ledger.

    Attributes:
        id: Unique identifier
        type: Whether money went in or out
        amount: Positive amount in euros
        description: Free text shown in the history
        date: ISO timestamp of insertion
        category: Manual entry or fine recorded against a game participant

    Raises:
        ValueError: If amount is not positive
    """
    id: int
    type: TransactionType
    amount: float
    description: str
    date: str
    category: TransactionCategory = TransactionCategory.MANUAL

    def __post_init__(self) -> None:
        if not self.amount > 0:
            raise ValueError("Transaction amount must be positive")

    @property
    def signed_amount(self) -> float:
        """Amount with the sign it contributes to the balance."""
        return self.amount if self.type is TransactionType.ADD else -self.amount

    @property
    def deletable(self) -> bool:
        return self.category is TransactionCategory.MANUAL

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "amount": self.amount,
            "description": self.description,
            "date": self.date,
            "category": self.category.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CofrinhoTransaction':
        return cls(
            id=data["id"],
            type=TransactionType(data["type"]),
            amount=float(data["amount"]),
            description=data.get("description", ""),
            date=data["date"],
            category=TransactionCategory(data.get("category", TransactionCategory.MANUAL.value)),
        )
