"""
Category model for income/expense categorization
"""
from enum import Enum

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class CategoryName(str, Enum):
    """Fixed set of transaction categories"""
    FOOD = "matur"
    HOUSING = "íbúð"
    TRANSPORT = "samgöngur"
    ENTERTAINMENT = "afþreying"
    SALARY = "laun"
    OTHER = "annað"


class Category(Base):
    """
    Category reference row

    Seeded once from CategoryName; transactions store the category name.
    """
    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    slug: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, name={self.name})>"
