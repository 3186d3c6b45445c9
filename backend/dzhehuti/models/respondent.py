from typing import Optional

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from dzhehuti.models.base import Base


class Respondent(Base):
    """Survey respondent stored in the ``users`` table."""

    __tablename__ = "users"

    user_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    age: Mapped[Optional[int]] = mapped_column(Integer, index=True)
    gender: Mapped[Optional[str]] = mapped_column(String(16), index=True)
    purchase_category_id: Mapped[Optional[int]] = mapped_column(Integer, index=True)
    purchase_frequency_id: Mapped[Optional[int]] = mapped_column(Integer, index=True)
    income: Mapped[Optional[int]] = mapped_column(Integer, index=True)
    financial_situation: Mapped[Optional[str]] = mapped_column(String(64))
    family_situation: Mapped[Optional[str]] = mapped_column(String(64))
