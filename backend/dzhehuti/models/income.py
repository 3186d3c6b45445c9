from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from dzhehuti.models.base import Base


class Income(Base):
    """ORM model for the ``income`` table (textual income brackets)."""

    __tablename__ = "income"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
