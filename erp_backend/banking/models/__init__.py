# banking/models/__init__.py

from banking.models.bank_account import BankAccount
from banking.models.ledger_movement import LedgerMovement

__all__ = [
    "BankAccount",
    "LedgerMovement",
]
