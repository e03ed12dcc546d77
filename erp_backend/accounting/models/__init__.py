# accounting/models/__init__.py

"""
ACCOUNTING MODELS PACKAGE EXPORTS

Note:
- Keep this file *imports-only* (no business logic).
"""

from accounting.models.account import Account
from accounting.models.cost_center import CostCenter

__all__ = [
    "Account",
    "CostCenter",
]
