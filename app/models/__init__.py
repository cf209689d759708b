"""
Database models
"""
from app.db.base import Base
from app.models.user import User, Role
from app.models.account import Account
from app.models.budget import Budget
from app.models.category import Category, CategoryName
from app.models.payment_method import PaymentMethod, PaymentMethodId, PAYMENT_METHOD_NAMES
from app.models.transaction import Transaction, TransactionType

__all__ = [
    "Base",
    "User",
    "Role",
    "Account",
    "Budget",
    "Category",
    "CategoryName",
    "PaymentMethod",
    "PaymentMethodId",
    "PAYMENT_METHOD_NAMES",
    "Transaction",
    "TransactionType",
]
