from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from dzhehuti.models.base import Base


class FamilySituation(Base):
    """ORM model for the ``family_situation`` table."""

    __tablename__ = "family_situation"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(64), nullable=False)
