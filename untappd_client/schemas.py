"""Enumerations and response models for the Untappd API."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict


class BadgeSort(str, Enum):
    """Ordering accepted by the ``user_badge`` endpoint."""

    ALL = "all"
    BEER = "beer"
    VENUE = "venue"
    SPECIAL = "special"


class TrendingType(str, Enum):
    """Beer categories accepted by the ``trending`` endpoint."""

    ALL = "all"
    MACRO = "macro"
    MICRO = "micro"
    LOCAL = "local"


class TrendingAge(str, Enum):
    """Checkin windows accepted by the ``trending`` endpoint."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class EnvelopeHeader(BaseModel):
    """Status fields every Untappd response carries."""

    http_code: int
    error: Any = None

    model_config = ConfigDict(extra="allow")

    @property
    def ok(self) -> bool:
        return self.http_code == 200
