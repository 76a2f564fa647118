"""Trip lifecycle: list, read, create, update and cascading delete."""

import logging
import uuid

from core.db import BlobStore, Collection, DocumentStore
from core.errors import NotFoundError
from core.models import Trip, TripCreate, TripUpdate, TripWithRole, membership_id, now_ms
from core.services.access import require_auth, require_editor_access, require_owner_access, require_trip_access
from core.services.locations import delete_location_cascade

logger = logging.getLogger(__name__)


def _load_trip(store: DocumentStore, trip_id: str) -> Trip:
    row = store.get(Collection.TRIPS, trip_id)
    if row is None:
        raise NotFoundError("Trip not found")
    return Trip.model_validate(row)


def list_trips(store: DocumentStore, user_id: str | None) -> list[TripWithRole]:
    """Every trip the caller is a member of, newest first. Anonymous callers get []."""
    if not user_id:
        return []

    trips: list[TripWithRole] = []
    for membership in store.query(Collection.TRIP_MEMBERS, "userId", user_id):
        row = store.get(Collection.TRIPS, membership["tripId"])
        if row is None:
            continue
        trips.append(TripWithRole.model_validate({**row, "role": membership["role"]}))

    return sorted(trips, key=lambda trip: trip.created_at, reverse=True)


def get_trip(store: DocumentStore, user_id: str | None, trip_id: str) -> TripWithRole:
    user_id = require_auth(user_id)
    trip = _load_trip(store, trip_id)
    membership = require_trip_access(store, trip_id, user_id)
    return TripWithRole(**trip.model_dump(), role=membership.role)


def create_trip(store: DocumentStore, user_id: str | None, payload: TripCreate) -> str:
    """Insert the trip and its owner membership row in one transaction."""
    user_id = require_auth(user_id)
    now = now_ms()
    trip_id = str(uuid.uuid4())

    store.insert_many(
        [
            (
                Collection.TRIPS,
                {
                    **payload.model_dump(by_alias=True, exclude_none=True),
                    "id": trip_id,
                    "ownerId": user_id,
                    "createdAt": now,
                    "updatedAt": now,
                },
            ),
            (
                Collection.TRIP_MEMBERS,
                {
                    "id": membership_id(trip_id, user_id),
                    "tripId": trip_id,
                    "userId": user_id,
                    "role": "owner",
                    "invitedBy": user_id,
                    "invitedAt": now,
                },
            ),
        ]
    )

    logger.info("Created trip %s for user %s", trip_id, user_id)
    return trip_id


def update_trip(store: DocumentStore, user_id: str | None, trip_id: str, payload: TripUpdate) -> str:
    user_id = require_auth(user_id)
    _load_trip(store, trip_id)
    require_editor_access(store, trip_id, user_id)

    changes = {key: value for key, value in payload.changes().items() if value is not None}
    store.patch(Collection.TRIPS, trip_id, {**changes, "updatedAt": now_ms()})
    return trip_id


def remove_trip(store: DocumentStore, blobs: BlobStore, user_id: str | None, trip_id: str) -> str:
    """Owner-only delete. Not transactional: a failure midway leaves earlier deletions in place."""
    user_id = require_auth(user_id)
    _load_trip(store, trip_id)
    require_owner_access(store, trip_id, user_id, "delete this trip")

    members = store.query(Collection.TRIP_MEMBERS, "tripId", trip_id)
    for member in members:
        store.delete(Collection.TRIP_MEMBERS, member["id"])

    invites = store.query(Collection.TRIP_INVITES, "tripId", trip_id)
    for invite in invites:
        store.delete(Collection.TRIP_INVITES, invite["id"])

    locations = store.query(Collection.LOCATIONS, "tripId", trip_id)
    for location in locations:
        delete_location_cascade(store, blobs, location)

    categories = store.query(Collection.CATEGORIES, "tripId", trip_id)
    for category in categories:
        store.delete(Collection.CATEGORIES, category["id"])

    store.delete(Collection.TRIPS, trip_id)

    logger.info(
        "Deleted trip %s: %d members, %d invites, %d locations, %d categories",
        trip_id,
        len(members),
        len(invites),
        len(locations),
        len(categories),
    )
    return trip_id
