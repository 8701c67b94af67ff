from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

# Largest value an SQLite INTEGER column can hold.
MAX_ID = 2**63 - 1
MAX_DURATION_MINUTES = 366 * 24 * 60


class Status(Enum):
    Free = 'Free'
    Booked = 'Booked'
    Canceled = 'Canceled'


class Health(BaseModel):
    initialized: bool


class TableCreate(BaseModel):
    table_number: int = Field(le=MAX_ID)
    capacity: int = Field(le=MAX_ID)


class CapacityUpdate(BaseModel):
    capacity: int = Field(le=MAX_ID)


class Table(BaseModel):
    table_id: int
    table_number: int
    capacity: int


class ReservationCreate(BaseModel):
    table_id: int = Field(ge=1, le=MAX_ID)
    party_name: str
    start: datetime
    duration_minutes: int = Field(gt=0, le=MAX_DURATION_MINUTES)
    party_size: int = Field(default=2, le=MAX_ID)
    phone: Optional[str] = None
    notes: Optional[str] = None


class ReservationUpdate(BaseModel):
    table_id: int = Field(ge=1, le=MAX_ID)
    party_name: str
    party_size: int = Field(le=MAX_ID)
    start: datetime
    end: datetime
    phone: Optional[str] = None
    notes: Optional[str] = None


class Reservation(BaseModel):
    reservation_id: int
    table_id: int
    party_name: str
    party_size: int
    start_utc: datetime
    end_utc: datetime
    status: Status
    phone: Optional[str] = None
    notes: Optional[str] = None


class CancelResult(BaseModel):
    affected: int
