"""
PAYABLE SERVICE ERRORS
"""


class PayableServiceError(Exception):
    """Base exception for all accounts-payable service failures."""


class PayableValidationError(PayableServiceError):
    """
    Raised before any transaction is opened when required request data is
    missing or unresolvable. `errors` maps field name -> message.
    """

    default_message = "Required payable data is missing or invalid"

    def __init__(self, errors: dict[str, str], message: str | None = None):
        super().__init__(message or self.default_message)
        self.errors = dict(errors)


class PayableTransactionError(PayableServiceError):
    """Raised when the creation transaction failed and was rolled back."""
