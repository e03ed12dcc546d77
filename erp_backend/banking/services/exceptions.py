# banking/services/exceptions.py

"""
BANKING SERVICE ERRORS
"""


class BankingServiceError(Exception):
    """Base exception for all banking service failures."""


class BankAccountNotFoundError(BankingServiceError):
    """Raised when a movement or recompute targets an unknown bank account."""


class SchemaPrerequisiteError(BankingServiceError):
    """Raised when the movement origin guard is missing from the database."""
