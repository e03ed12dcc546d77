# payables/models/__init__.py

"""
PAYABLES MODELS PACKAGE EXPORTS

Keep this file imports-only. Models never import services.
"""

from payables.models.allocation import (
    DocumentAccountAllocation,
    DocumentCostCenterAllocation,
    InstallmentAccountAllocation,
    InstallmentCostCenterAllocation,
)
from payables.models.counterparty import Counterparty
from payables.models.document import PayableDocument
from payables.models.installment import Installment

__all__ = [
    "Counterparty",
    "PayableDocument",
    "Installment",
    "DocumentAccountAllocation",
    "InstallmentAccountAllocation",
    "DocumentCostCenterAllocation",
    "InstallmentCostCenterAllocation",
]
