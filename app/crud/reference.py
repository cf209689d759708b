"""
Read-only queries for categories, payment methods and budgets
"""
from typing import List

from sqlalchemy.orm import Session

from app.models.budget import Budget
from app.models.category import Category
from app.models.payment_method import PaymentMethod


def get_categories(db: Session) -> List[Category]:
    return db.query(Category).order_by(Category.id).all()


def get_payment_methods(db: Session) -> List[PaymentMethod]:
    return db.query(PaymentMethod).order_by(PaymentMethod.id).all()


def get_budgets_for_user(db: Session, user_id: int) -> List[Budget]:
    return db.query(Budget).filter(Budget.user_id == user_id).order_by(Budget.category).all()
