import re
from typing import Annotated, Literal

from pydantic import AfterValidator

from core.models.base import Command, Document
from core.models.trip import Role

_EMAIL = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def normalize_email(value: str) -> str:
    email = value.strip().lower()
    if not _EMAIL.match(email):
        raise ValueError(f"Invalid email address: {value}")
    return email


Email = Annotated[str, AfterValidator(normalize_email)]


def membership_id(trip_id: str, user_id: str) -> str:
    """Membership rows are keyed by (trip, user) so a second insert for the pair fails."""
    return f"{trip_id}#{user_id}"


class User(Document):
    """Mirror of an identity-provider account, kept for email lookups."""

    id: str
    email: str | None = None
    name: str | None = None


class TripMember(Document):
    id: str
    trip_id: str
    user_id: str
    role: Role
    invited_by: str
    invited_at: int


class MemberWithDetails(TripMember):
    email: str
    name: str


class TripInvite(Document):
    id: str
    trip_id: str
    email: str
    role: Literal["member"] = "member"
    invited_by: str
    expires_at: int


class InviteWithDetails(TripInvite):
    trip_name: str
    inviter_email: str


class InviteRequest(Command):
    email: Email


class InviteResult(Command):
    status: Literal["added", "invited"]
    email: str
