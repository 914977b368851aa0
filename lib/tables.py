# =============================================================================
# lib/tables.py - ORM Table Definitions
# =============================================================================
# SQLAlchemy declarative models for master data and tasting entries.
# Column names are snake_case; the API layer serializes them as camelCase.
# =============================================================================

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class MasterRecord:
    """Columns shared by every master-data table."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now, nullable=False)


class OriginMaster(MasterRecord, Base):
    __tablename__ = "origin_masters"

    # The unique index closes the check-then-insert race between requests
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)


class BeanMaster(MasterRecord, Base):
    __tablename__ = "bean_masters"

    origin: Mapped[str | None] = mapped_column(String(255), nullable=True)
    origin_id: Mapped[int | None] = mapped_column(
        ForeignKey("origin_masters.id", ondelete="SET NULL"),
        nullable=True,
    )
    roast_level: Mapped[str | None] = mapped_column(String(32), nullable=True)
    process: Mapped[str | None] = mapped_column(String(32), nullable=True)


class Shop(MasterRecord, Base):
    __tablename__ = "shops"

    address: Mapped[str | None] = mapped_column(String(512), nullable=True)
    url: Mapped[str | None] = mapped_column(String(2048), nullable=True)


class Dripper(MasterRecord, Base):
    __tablename__ = "drippers"

    manufacturer: Mapped[str | None] = mapped_column(String(255), nullable=True)
    size: Mapped[str | None] = mapped_column(String(16), nullable=True)
    url: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    image_path: Mapped[str | None] = mapped_column(String(512), nullable=True)


class Filter(MasterRecord, Base):
    __tablename__ = "filters"

    type: Mapped[str | None] = mapped_column(String(16), nullable=True)
    size: Mapped[str | None] = mapped_column(String(16), nullable=True)
    url: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    image_path: Mapped[str | None] = mapped_column(String(512), nullable=True)


class TastingEntry(Base):
    """
    A brew that used master data.

    Only the references are modelled here; they back the usage counts
    shown for drippers, filters and bean masters.
    """

    __tablename__ = "tasting_entries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    dripper_id: Mapped[int | None] = mapped_column(
        ForeignKey("drippers.id", ondelete="SET NULL"), nullable=True, index=True
    )
    filter_id: Mapped[int | None] = mapped_column(
        ForeignKey("filters.id", ondelete="SET NULL"), nullable=True, index=True
    )
    bean_master_id: Mapped[int | None] = mapped_column(
        ForeignKey("bean_masters.id"), nullable=True, index=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now, nullable=False)
