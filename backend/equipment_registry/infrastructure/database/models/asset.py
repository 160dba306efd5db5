"""SQLAlchemy ORM models for assets and their inspections."""

import datetime as dt

from sqlalchemy import Date, DateTime, Float, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from equipment_registry.infrastructure.database.base import Base


class AssetModel(Base):
    """ORM model: maps to the 'assets' table."""

    __tablename__ = "assets"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    type: Mapped[str] = mapped_column(String(200), nullable=False, default="")
    manufacturer: Mapped[str] = mapped_column(String(200), nullable=False, default="")
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    serial_number: Mapped[str] = mapped_column(String(100), nullable=False)
    revision_number: Mapped[str] = mapped_column(String(100), nullable=False)
    protection_class: Mapped[str] = mapped_column(String(3), nullable=False)
    usage_group: Mapped[str] = mapped_column(String(1), nullable=False)
    category: Mapped[str] = mapped_column(String(20), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    next_inspection_date: Mapped[dt.date | None] = mapped_column(Date, nullable=True)
    location: Mapped[str | None] = mapped_column(String(200), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: dt.datetime.now(dt.timezone.utc),
        nullable=False,
    )

    inspections: Mapped[list["InspectionModel"]] = relationship(
        back_populates="asset",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="InspectionModel.date",
    )

    __table_args__ = (
        Index("ix_assets_revision_number", "revision_number"),
        Index("ix_assets_serial_number", "serial_number"),
        Index("ix_assets_next_inspection_date", "next_inspection_date"),
    )

    def __repr__(self) -> str:
        return f"<AssetModel(id={self.id}, revision='{self.revision_number}')>"


class InspectionModel(Base):
    """ORM model: maps to the 'inspections' table."""

    __tablename__ = "inspections"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    asset_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("assets.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    inspector: Mapped[str] = mapped_column(String(200), nullable=False)
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    visual_check: Mapped[str] = mapped_column(String(10), nullable=False)
    functional_test: Mapped[str] = mapped_column(String(10), nullable=False)
    overall_result: Mapped[str] = mapped_column(String(10), nullable=False)
    protective_conductor_resistance: Mapped[float | None] = mapped_column(Float, nullable=True)
    insulation_resistance: Mapped[float | None] = mapped_column(Float, nullable=True)
    leakage_current: Mapped[float | None] = mapped_column(Float, nullable=True)
    measuring_instrument_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    measuring_instrument_serial: Mapped[str | None] = mapped_column(String(100), nullable=True)
    measuring_instrument_calib_date: Mapped[dt.date | None] = mapped_column(Date, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    asset: Mapped[AssetModel] = relationship(back_populates="inspections")

    def __repr__(self) -> str:
        return f"<InspectionModel(id={self.id}, asset_id={self.asset_id}, date={self.date})>"
