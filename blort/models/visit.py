from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import Column, DateTime
from sqlmodel import SQLModel, Field


class OrderBy(str, Enum):
    """Sort key for listing names"""
    LAST_SEEN = "last-seen"
    VISITS = "visits"

    @property
    def label(self) -> str:
        return "last seen" if self is OrderBy.LAST_SEEN else "visits"


class VisitRecord(SQLModel, table=True):
    """Aggregated visit statistics, one row per distinct name"""
    __tablename__ = "items"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(unique=True, index=True, description="Case-sensitive visitor name")
    count: int = Field(default=1, description="Number of visits so far")
    last_seen: datetime = Field(
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True),
        description="Time of the most recent visit",
    )


@dataclass(frozen=True)
class VisitResult:
    """State of a name as it was right before a visit was recorded"""
    previous_count: int = 0
    previous_last_seen: Optional[datetime] = None

    @property
    def is_first_visit(self) -> bool:
        return self.previous_last_seen is None
