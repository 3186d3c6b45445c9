"""Location dimension models and the per-respondent ``place`` row."""

from typing import Optional

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from dzhehuti.models.base import Base


class Country(Base):
    __tablename__ = "country"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)


class Region(Base):
    __tablename__ = "region"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    country_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("country.id", ondelete="CASCADE"), index=True
    )


class District(Base):
    __tablename__ = "district"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    region_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("region.id", ondelete="CASCADE"), index=True
    )


class City(Base):
    __tablename__ = "city"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    region_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("region.id", ondelete="CASCADE"), index=True
    )


class Place(Base):
    """Where a respondent lives. Joined to ``users`` for location filters."""

    __tablename__ = "place"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    country_id: Mapped[Optional[int]] = mapped_column(Integer, index=True)
    region_id: Mapped[Optional[int]] = mapped_column(Integer, index=True)
    district_id: Mapped[Optional[int]] = mapped_column(Integer, index=True)
    city_id: Mapped[Optional[int]] = mapped_column(Integer, index=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True
    )
