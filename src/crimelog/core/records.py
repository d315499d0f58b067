"""Incident value type and the closed tag sets it is classified into."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Tuple


class Category(str, Enum):
    """Incident-nature classification assigned once at ingestion."""

    PROPERTY = "Property"
    VIOLENT = "Violent"
    MISCHIEF = "Mischief"
    TRESPASS = "Trespass"
    OTHER = "Other"


# Order in which the nature breakdown visits categories.
BREAKDOWN_ORDER: Tuple[Category, ...] = (
    Category.VIOLENT,
    Category.MISCHIEF,
    Category.PROPERTY,
    Category.TRESPASS,
    Category.OTHER,
)

# Closed general-location tag set; position breaks top-K ties.
GENERAL_LOCATIONS: Tuple[str, ...] = (
    "ACADEMIC",
    "CAMPUS SERVICES",
    "OTHER",
    "PARKING LOT",
    "RECREATION",
    "RESIDENTIAL",
    "STREET/ROADWAY",
)

FIELD_COUNT = 7


@dataclass(frozen=True, slots=True)
class Incident:
    """One crime/fire log entry. Identity is ``incident_id`` alone."""

    incident_id: str
    nature: str
    report_date: str
    occurrence_date: str
    location: str
    disposition: str
    general_location: str
    category: Category

    def to_dict(self) -> Dict[str, Any]:
        payload = asdict(self)
        payload["category"] = self.category.value
        return payload


__all__ = [
    "BREAKDOWN_ORDER",
    "Category",
    "FIELD_COUNT",
    "GENERAL_LOCATIONS",
    "Incident",
]
