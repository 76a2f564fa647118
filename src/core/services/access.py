"""Trip access control. Every query and mutation authorizes through here."""

from core.db import Collection, DocumentStore
from core.errors import AuthenticationError, ForbiddenError
from core.models import TripMember


def require_auth(user_id: str | None) -> str:
    """Return the caller's user id or raise if the request is anonymous."""
    if not user_id:
        raise AuthenticationError("Not authenticated")
    return user_id


def check_trip_access(store: DocumentStore, trip_id: str, user_id: str) -> TripMember | None:
    """Membership row for (trip, user), or None."""
    for row in store.query(Collection.TRIP_MEMBERS, "tripId", trip_id):
        if row["userId"] == user_id:
            return TripMember.model_validate(row)
    return None


def require_trip_access(store: DocumentStore, trip_id: str, user_id: str) -> TripMember:
    membership = check_trip_access(store, trip_id, user_id)
    if membership is None:
        raise ForbiddenError("You don't have access to this trip")
    return membership


def has_editor_access(store: DocumentStore, trip_id: str, user_id: str) -> bool:
    # Every member can edit; there is no read-only role.
    membership = check_trip_access(store, trip_id, user_id)
    return membership is not None and membership.role in ("owner", "member")


def require_editor_access(store: DocumentStore, trip_id: str, user_id: str) -> None:
    if not has_editor_access(store, trip_id, user_id):
        raise ForbiddenError("You need editor or owner role to perform this action")


def is_owner(store: DocumentStore, trip_id: str, user_id: str) -> bool:
    membership = check_trip_access(store, trip_id, user_id)
    return membership is not None and membership.role == "owner"


def require_owner_access(store: DocumentStore, trip_id: str, user_id: str, action: str = "perform this action") -> None:
    if not is_owner(store, trip_id, user_id):
        raise ForbiddenError(f"Only the trip owner can {action}")
