"""
Shared enums and constants used across the application.
"""

from enum import Enum


class UserRole(str, Enum):
    ADMIN = "ADMIN"
    USER = "USER"


class StockOperation(str, Enum):
    """Kinds of stock mutation reported in a StockUpdateResult"""
    ADD = "ADD"
    REMOVE = "REMOVE"
    SET = "SET"


class PaymentMethod(str, Enum):
    CASH = "CASH"
    CARD = "CARD"
    BANK_TRANSFER = "BANK_TRANSFER"
    OTHER = "OTHER"
