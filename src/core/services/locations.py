"""Location lifecycle, date bucketing and drag-drop reordering."""

import logging
import re
from datetime import date, timedelta
from typing import Any

from core.db import BlobStore, Collection, DocumentStore
from core.errors import InvalidArgumentError, NotFoundError
from core.models import Category, Location, LocationCreate, LocationOrder, LocationUpdate, now_ms
from core.services.access import require_auth, require_editor_access, require_trip_access

logger = logging.getLogger(__name__)

# Update fields where an explicit empty value clears the stored attribute.
_CLEARABLE_FIELDS = {"dateTime", "endDateTime"}

_DAY = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _parse_date(value: str) -> date:
    # fromisoformat also takes 20260116 and week dates, which never equal a stored YYYY-MM-DD.
    if not _DAY.fullmatch(value):
        raise InvalidArgumentError(f"Invalid date: {value}. Expected YYYY-MM-DD")
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise InvalidArgumentError(f"Invalid date: {value}. Expected YYYY-MM-DD") from e


def _load_location(store: DocumentStore, location_id: str) -> Location:
    row = store.get(Collection.LOCATIONS, location_id)
    if row is None:
        raise NotFoundError("Location not found")
    return Location.model_validate(row)


def _trip_locations(store: DocumentStore, trip_id: str) -> list[Location]:
    rows = store.query(Collection.LOCATIONS, "tripId", trip_id)
    return sorted((Location.model_validate(row) for row in rows), key=lambda loc: loc.sort_order)


def _validate_category(store: DocumentStore, category_id: str, trip_id: str) -> None:
    row = store.get(Collection.CATEGORIES, category_id)
    if row is None:
        raise NotFoundError("Category not found")
    if Category.model_validate(row).trip_id != trip_id:
        raise InvalidArgumentError("Category does not belong to this trip")


def _touched_dates(location: Location) -> list[str]:
    """Calendar dates a location occupies; a dateTime..endDateTime span covers every day inclusive."""
    if location.start_date is None:
        return []
    if location.end_date is None:
        return [location.start_date]

    current = _parse_date(location.start_date)
    end = _parse_date(location.end_date)
    dates = [location.start_date]
    while current < end:
        current += timedelta(days=1)
        dates.append(current.isoformat())
    return dates


def delete_location_cascade(store: DocumentStore, blobs: BlobStore, location: dict[str, Any]) -> None:
    """Delete a location with its legacy file, its attachments and their blobs."""
    if location.get("attachmentId"):
        blobs.delete(location["attachmentId"])

    for attachment in store.query(Collection.ATTACHMENTS, "locationId", location["id"]):
        blobs.delete(attachment["fileId"])
        store.delete(Collection.ATTACHMENTS, attachment["id"])

    store.delete(Collection.LOCATIONS, location["id"])


# QUERIES


def list_by_trip(store: DocumentStore, user_id: str | None, trip_id: str) -> list[Location]:
    user_id = require_auth(user_id)
    require_trip_access(store, trip_id, user_id)
    return _trip_locations(store, trip_id)


def list_by_trip_and_date(store: DocumentStore, user_id: str | None, trip_id: str, day: str) -> list[Location]:
    """Locations scheduled on ``day`` (YYYY-MM-DD), including multi-day stays spanning it."""
    user_id = require_auth(user_id)
    require_trip_access(store, trip_id, user_id)
    _parse_date(day)

    matches = []
    for location in _trip_locations(store, trip_id):
        if location.start_date is None:
            continue
        if location.end_date is not None:
            if location.start_date <= day <= location.end_date:
                matches.append(location)
        elif location.start_date == day:
            matches.append(location)
    return matches


def get_unique_dates(store: DocumentStore, user_id: str | None, trip_id: str) -> list[str]:
    user_id = require_auth(user_id)
    require_trip_access(store, trip_id, user_id)

    dates: set[str] = set()
    for location in _trip_locations(store, trip_id):
        dates.update(_touched_dates(location))
    return sorted(dates)


def get_location(store: DocumentStore, user_id: str | None, location_id: str) -> Location:
    user_id = require_auth(user_id)
    location = _load_location(store, location_id)
    require_trip_access(store, location.trip_id, user_id)
    return location


# MUTATIONS


def create_location(store: DocumentStore, user_id: str | None, trip_id: str, payload: LocationCreate) -> str:
    user_id = require_auth(user_id)
    require_editor_access(store, trip_id, user_id)

    if payload.category_id:
        _validate_category(store, payload.category_id, trip_id)

    existing = store.query(Collection.LOCATIONS, "tripId", trip_id)
    # Appends after the current maximum; gaps left by deletions are not refilled.
    max_sort_order = max((row["sortOrder"] for row in existing), default=0)
    now = now_ms()

    return store.insert(
        Collection.LOCATIONS,
        {
            **payload.model_dump(by_alias=True, exclude_none=True),
            "tripId": trip_id,
            "sortOrder": max_sort_order + 1,
            "createdBy": user_id,
            "createdAt": now,
            "updatedAt": now,
        },
    )


def update_location(store: DocumentStore, user_id: str | None, location_id: str, payload: LocationUpdate) -> str:
    user_id = require_auth(user_id)
    location = _load_location(store, location_id)
    require_editor_access(store, location.trip_id, user_id)

    if payload.category_id:
        _validate_category(store, payload.category_id, location.trip_id)

    changes = {
        key: value
        for key, value in payload.changes().items()
        if value is not None or key in _CLEARABLE_FIELDS
    }
    store.patch(Collection.LOCATIONS, location_id, {**changes, "updatedAt": now_ms()})
    return location_id


def remove_location(store: DocumentStore, blobs: BlobStore, user_id: str | None, location_id: str) -> str:
    user_id = require_auth(user_id)
    row = store.get(Collection.LOCATIONS, location_id)
    if row is None:
        raise NotFoundError("Location not found")
    require_editor_access(store, row["tripId"], user_id)

    delete_location_cascade(store, blobs, row)
    return location_id


def reorder_locations(
    store: DocumentStore,
    user_id: str | None,
    trip_id: str,
    orders: list[LocationOrder],
) -> bool:
    """Apply drag-drop positions. Entries are patched one by one; a bad entry stops the loop."""
    user_id = require_auth(user_id)
    require_editor_access(store, trip_id, user_id)
    now = now_ms()

    for order in orders:
        row = store.get(Collection.LOCATIONS, order.id)
        if row is None:
            raise NotFoundError(f"Location {order.id} not found")
        if row["tripId"] != trip_id:
            raise InvalidArgumentError(f"Location {order.id} does not belong to this trip")

        store.patch(Collection.LOCATIONS, order.id, {"sortOrder": order.sort_order, "updatedAt": now})

    logger.info("Reordered %d locations in trip %s", len(orders), trip_id)
    return True
