"""
Schema creation and reference data

Categories and payment methods form fixed domains that transaction
validation relies on, so they are inserted on startup when missing.
"""
import logging

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from app.db.base import Base
from app.models import (
    Category,
    CategoryName,
    PaymentMethod,
    PAYMENT_METHOD_NAMES,
)

logger = logging.getLogger(__name__)


def create_schema(engine: Engine) -> None:
    Base.metadata.create_all(bind=engine)


def seed_reference_data(db: Session) -> None:
    """Insert categories and payment methods that are not there yet"""
    existing_categories = {name for (name,) in db.query(Category.name).all()}
    for index, category in enumerate(CategoryName, start=1):
        if category.value not in existing_categories:
            db.add(Category(name=category.value, slug=f"category_{index}"))

    existing_methods = {method_id for (method_id,) in db.query(PaymentMethod.id).all()}
    for method_id, name in PAYMENT_METHOD_NAMES.items():
        if int(method_id) not in existing_methods:
            db.add(PaymentMethod(id=int(method_id), name=name, slug=f"payment_method_{int(method_id)}"))

    db.commit()


def init_db(engine: Engine, session_factory) -> None:
    """Create tables and seed reference data"""
    create_schema(engine)
    db = session_factory()
    try:
        seed_reference_data(db)
    finally:
        db.close()
    logger.info("Database schema ready")
