"""
Trip membership and email invites.

Per (trip, email) the lifecycle is NONE -> INVITED -> MEMBER. An invite for an
address with an account becomes a membership immediately; otherwise a pending
invite row waits until that address signs up or logs in
(``process_invites_for_user``) or accepts explicitly.
"""

import logging

from core.db import Collection, DocumentStore
from core.errors import ConflictError, ForbiddenError, InvalidArgumentError, NotFoundError
from core.models import (
    InviteRequest,
    InviteResult,
    InviteWithDetails,
    MemberWithDetails,
    TripInvite,
    TripMember,
    membership_id,
    now_ms,
)
from core.services.access import check_trip_access, require_auth, require_owner_access, require_trip_access
from core.services.users import find_user_by_email, get_user

logger = logging.getLogger(__name__)

INVITE_TTL_MS = 30 * 24 * 60 * 60 * 1000


def _load_invite(store: DocumentStore, invite_id: str) -> TripInvite:
    row = store.get(Collection.TRIP_INVITES, invite_id)
    if row is None:
        raise NotFoundError("Invite not found")
    return TripInvite.model_validate(row)


def _caller_email(store: DocumentStore, user_id: str) -> str | None:
    user = get_user(store, user_id)
    return user.email.lower() if user and user.email else None


def _require_invitee(store: DocumentStore, user_id: str, invite: TripInvite) -> None:
    email = _caller_email(store, user_id)
    if not email or email != invite.email.lower():
        raise ForbiddenError("This invite is not for you")


def _add_member(store: DocumentStore, trip_id: str, user_id: str, invited_by: str) -> str:
    """Raises ConflictError when a concurrent call already added this user to the trip."""
    [member_id] = store.insert_many(
        [
            (
                Collection.TRIP_MEMBERS,
                {
                    "id": membership_id(trip_id, user_id),
                    "tripId": trip_id,
                    "userId": user_id,
                    "role": "member",
                    "invitedBy": invited_by,
                    "invitedAt": now_ms(),
                },
            )
        ]
    )
    return member_id


# QUERIES


def list_members(store: DocumentStore, user_id: str | None, trip_id: str) -> list[MemberWithDetails]:
    user_id = require_auth(user_id)
    require_trip_access(store, trip_id, user_id)

    members = []
    for row in store.query(Collection.TRIP_MEMBERS, "tripId", trip_id):
        user = get_user(store, row["userId"])
        email = (user.email if user else None) or "Unknown"
        name = (user.name if user else None) or email
        members.append(MemberWithDetails.model_validate({**row, "email": email, "name": name}))
    return members


def list_pending_invites(store: DocumentStore, user_id: str | None, trip_id: str) -> list[TripInvite]:
    user_id = require_auth(user_id)
    require_owner_access(store, trip_id, user_id, "view pending invites")
    return [TripInvite.model_validate(row) for row in store.query(Collection.TRIP_INVITES, "tripId", trip_id)]


def get_my_invites(store: DocumentStore, user_id: str | None) -> list[InviteWithDetails]:
    """Unexpired invites addressed to the caller's email. Anonymous callers get []."""
    if not user_id:
        return []
    email = _caller_email(store, user_id)
    if not email:
        return []

    now = now_ms()
    invites = []
    for row in store.query(Collection.TRIP_INVITES, "email", email):
        invite = TripInvite.model_validate(row)
        if invite.expires_at <= now:
            continue
        trip = store.get(Collection.TRIPS, invite.trip_id)
        inviter = get_user(store, invite.invited_by)
        invites.append(
            InviteWithDetails(
                **invite.model_dump(),
                trip_name=trip["name"] if trip else "Unknown Trip",
                inviter_email=(inviter.email if inviter else None) or "Unknown",
            )
        )
    return invites


# MUTATIONS


def invite(store: DocumentStore, user_id: str | None, trip_id: str, payload: InviteRequest) -> InviteResult:
    user_id = require_auth(user_id)
    require_owner_access(store, trip_id, user_id, "invite members")
    email = payload.email

    existing_user = find_user_by_email(store, email)
    if existing_user is not None:
        if check_trip_access(store, trip_id, existing_user.id) is not None:
            raise InvalidArgumentError("This user is already a member of the trip")
        try:
            _add_member(store, trip_id, existing_user.id, user_id)
        except ConflictError as e:
            raise InvalidArgumentError("This user is already a member of the trip") from e
        logger.info("Added user %s to trip %s", existing_user.id, trip_id)
        return InviteResult(status="added", email=email)

    for row in store.query(Collection.TRIP_INVITES, "tripId", trip_id):
        if row["email"] == email:
            raise InvalidArgumentError("This email already has a pending invite")

    expires_at = now_ms() + INVITE_TTL_MS
    store.insert(
        Collection.TRIP_INVITES,
        {
            "tripId": trip_id,
            "email": email,
            "role": "member",
            "invitedBy": user_id,
            "expiresAt": expires_at,
            "ttl": expires_at // 1000,
        },
    )
    logger.info("Created pending invite on trip %s", trip_id)
    return InviteResult(status="invited", email=email)


def accept_invite(store: DocumentStore, user_id: str | None, invite_id: str) -> str:
    """Turn the caller's invite into a membership. Returns the trip id."""
    user_id = require_auth(user_id)
    invite_row = _load_invite(store, invite_id)
    _require_invitee(store, user_id, invite_row)

    if store.get(Collection.TRIPS, invite_row.trip_id) is None:
        store.delete(Collection.TRIP_INVITES, invite_id)
        raise NotFoundError("Trip no longer exists")

    if check_trip_access(store, invite_row.trip_id, user_id) is not None:
        store.delete(Collection.TRIP_INVITES, invite_id)
        raise InvalidArgumentError("You are already a member of this trip")

    if invite_row.expires_at <= now_ms():
        store.delete(Collection.TRIP_INVITES, invite_id)
        raise InvalidArgumentError("This invite has expired")

    try:
        _add_member(store, invite_row.trip_id, user_id, invite_row.invited_by)
    except ConflictError as e:
        store.delete(Collection.TRIP_INVITES, invite_id)
        raise InvalidArgumentError("You are already a member of this trip") from e
    store.delete(Collection.TRIP_INVITES, invite_id)
    return invite_row.trip_id


def decline_invite(store: DocumentStore, user_id: str | None, invite_id: str) -> bool:
    user_id = require_auth(user_id)
    invite_row = _load_invite(store, invite_id)
    _require_invitee(store, user_id, invite_row)

    store.delete(Collection.TRIP_INVITES, invite_id)
    return True


def cancel_invite(store: DocumentStore, user_id: str | None, invite_id: str) -> bool:
    user_id = require_auth(user_id)
    invite_row = _load_invite(store, invite_id)
    require_owner_access(store, invite_row.trip_id, user_id, "cancel invites")

    store.delete(Collection.TRIP_INVITES, invite_id)
    return True


def remove_member(store: DocumentStore, user_id: str | None, member_id: str) -> bool:
    user_id = require_auth(user_id)
    row = store.get(Collection.TRIP_MEMBERS, member_id)
    if row is None:
        raise NotFoundError("Member not found")
    member = TripMember.model_validate(row)

    require_owner_access(store, member.trip_id, user_id, "remove members")
    if member.user_id == user_id:
        raise InvalidArgumentError("You cannot remove yourself from the trip")

    store.delete(Collection.TRIP_MEMBERS, member_id)
    return True


def leave_trip(store: DocumentStore, user_id: str | None, trip_id: str) -> bool:
    user_id = require_auth(user_id)
    membership = check_trip_access(store, trip_id, user_id)
    if membership is None:
        raise ForbiddenError("You are not a member of this trip")
    if membership.role == "owner":
        raise InvalidArgumentError("Owners cannot leave their trip. Delete the trip instead.")

    store.delete(Collection.TRIP_MEMBERS, membership.id)
    return True


def process_invites_for_user(store: DocumentStore, user_id: str, email: str) -> int:
    """Convert every pending invite for ``email`` into a membership. Returns how many were found."""
    invites = store.query(Collection.TRIP_INVITES, "email", email.strip().lower())
    now = now_ms()

    for row in invites:
        if store.get(Collection.TRIPS, row["tripId"]) is None or row["expiresAt"] <= now:
            store.delete(Collection.TRIP_INVITES, row["id"])
            continue

        if check_trip_access(store, row["tripId"], user_id) is not None:
            store.delete(Collection.TRIP_INVITES, row["id"])
            continue

        try:
            _add_member(store, row["tripId"], user_id, row["invitedBy"])
        except ConflictError:
            logger.info("User %s joined trip %s concurrently", user_id, row["tripId"])
        store.delete(Collection.TRIP_INVITES, row["id"])

    if invites:
        logger.info("Processed %d pending invites for user %s", len(invites), user_id)
    return len(invites)
