from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from dzhehuti.models.base import Base


class PurchaseCategory(Base):
    """ORM model for the ``purchase_category`` table."""

    __tablename__ = "purchase_category"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)


class PurchaseFrequency(Base):
    """ORM model for the ``purchase_frequency`` table; scoped to a category."""

    __tablename__ = "purchase_frequency"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    purchase_category_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("purchase_category.id", ondelete="CASCADE"), nullable=False, index=True
    )
