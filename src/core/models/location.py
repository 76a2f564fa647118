import re
from typing import Annotated, Literal

from pydantic import AfterValidator, StringConstraints

from core.models.base import Command, Document, Number
from core.models.trip import Latitude, Longitude

LocationType = Literal["attraction", "restaurant", "accommodation", "shop", "snack"]

LocationName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=200)]
CategoryId = Annotated[str, StringConstraints(min_length=1)]

_ISO_DATE_TIME = re.compile(r"^\d{4}-\d{2}-\d{2}(T\d{2}:\d{2})?$")
_SLASHED_DATE_TIME = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})(T\d{2}:\d{2})?$")


def normalize_date_time(value: str | None) -> str | None:
    """Normalize to ``YYYY-MM-DDTHH:mm``. Empty means unscheduled."""
    if not value:
        return None

    if _ISO_DATE_TIME.match(value):
        return value if "T" in value else f"{value}T00:00"

    # Older clients stored M/D/YYYY
    match = _SLASHED_DATE_TIME.match(value)
    if match:
        month, day, year, time_part = match.groups()
        return f"{year}-{int(month):02d}-{int(day):02d}{time_part or 'T00:00'}"

    raise ValueError(f"Invalid dateTime format: {value}. Expected YYYY-MM-DD or YYYY-MM-DDTHH:mm")


ScheduledAt = Annotated[str | None, AfterValidator(normalize_date_time)]


class Location(Document):
    id: str
    trip_id: str
    name: str
    latitude: Number
    longitude: Number
    date_time: str | None = None
    end_date_time: str | None = None
    location_type: LocationType | None = None
    category_id: str | None = None
    notes: str | None = None
    address: str | None = None
    sort_order: Number
    attachment_id: str | None = None
    attachment_name: str | None = None
    created_by: str
    created_at: int
    updated_at: int

    @property
    def start_date(self) -> str | None:
        return self.date_time[:10] if self.date_time else None

    @property
    def end_date(self) -> str | None:
        return self.end_date_time[:10] if self.end_date_time else None


class LocationCreate(Command):
    name: LocationName
    latitude: Latitude
    longitude: Longitude
    date_time: ScheduledAt = None
    end_date_time: ScheduledAt = None
    category_id: CategoryId | None = None
    notes: str | None = None
    address: str | None = None


class LocationUpdate(Command):
    """Partial update. ``""`` for a date clears it; omitting it leaves it unchanged."""

    name: LocationName | None = None
    latitude: Latitude | None = None
    longitude: Longitude | None = None
    date_time: ScheduledAt = None
    end_date_time: ScheduledAt = None
    category_id: CategoryId | None = None
    notes: str | None = None
    address: str | None = None
    attachment_id: str | None = None
    attachment_name: str | None = None


class LocationOrder(Command):
    id: str
    sort_order: Number


class LocationReorder(Command):
    location_orders: list[LocationOrder]
