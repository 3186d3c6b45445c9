from decimal import Decimal
from typing import Optional

from sqlalchemy import ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from dzhehuti.models.base import Base


class Category(Base):
    """ORM model for the ``categories`` table (groups of weighting parameters)."""

    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)


class Param(Base):
    """ORM model for the ``params`` table.

    ``name`` is either an amount bracket label ("от 201 до 400") or a free
    label for time/target weightings that are referenced by id.
    """

    __tablename__ = "params"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    ratio: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 4))
    category_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("categories.id", ondelete="SET NULL"), index=True
    )
