from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tablebook.core.entities.reservation import ReservationStatus
from tablebook.infrastructure.database import Base


class TableModel(Base):
    __tablename__ = "dining_tables"
    __table_args__ = (
        CheckConstraint("capacity > 0", name="ck_dining_tables_capacity_positive"),
    )

    table_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    table_number: Mapped[int] = mapped_column(Integer, nullable=False, unique=True, index=True)
    capacity: Mapped[int] = mapped_column(Integer, nullable=False, default=4)

    reservations = relationship("ReservationModel", back_populates="table")


class ReservationModel(Base):
    """
    Start and end are stored as naive UTC; SQLite keeps no offset.
    """
    __tablename__ = "reservations"
    __table_args__ = (
        Index("ix_reservations_table_window", "table_id", "start_utc", "end_utc"),
        CheckConstraint("end_utc > start_utc", name="ck_reservations_window_order"),
        CheckConstraint("party_size > 0", name="ck_reservations_party_size_positive"),
    )

    reservation_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    table_id: Mapped[int] = mapped_column(ForeignKey("dining_tables.table_id"), nullable=False)
    party_name: Mapped[str] = mapped_column(String, nullable=False)
    party_size: Mapped[int] = mapped_column(Integer, nullable=False)
    start_utc: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    end_utc: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    status: Mapped[ReservationStatus] = mapped_column(
        Enum(ReservationStatus),
        nullable=False,
        default=ReservationStatus.FREE,
        index=True,
    )
    phone: Mapped[str | None] = mapped_column(String, nullable=True)
    notes: Mapped[str | None] = mapped_column(String, nullable=True)

    table = relationship("TableModel", back_populates="reservations")
