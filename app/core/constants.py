"""
Enumerations shared by models, schemas and services.

Values are stored as plain strings in the database.
"""

from enum import Enum


class BillStatus(str, Enum):
    """Lifecycle of a bill. OVERDUE is only ever set by an admin override."""
    PENDING = "PENDING"
    PARTIAL = "PARTIAL"
    PAID = "PAID"
    OVERDUE = "OVERDUE"


class PaymentMethod(str, Enum):
    CASH = "CASH"
    BANK_TRANSFER = "BANK_TRANSFER"
    CHEQUE = "CHEQUE"
    ONLINE = "ONLINE"


class RateType(str, Enum):
    CHINE = "CHINE"
    STAR = "STAR"


# Session cookie names
USER_ID_COOKIE = "user_id"
USER_ROLE_COOKIE = "user_role"
