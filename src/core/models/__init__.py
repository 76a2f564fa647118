"""
Pydantic models for Tripper.
"""

from core.models.attachment import Attachment, AttachmentCreate, UploadTarget
from core.models.base import Command, Document, now_ms
from core.models.category import Category, CategoryCreate, CategoryReorder, CategoryUpdate
from core.models.location import (
    Location,
    LocationCreate,
    LocationOrder,
    LocationReorder,
    LocationUpdate,
    normalize_date_time,
)
from core.models.member import (
    InviteRequest,
    InviteResult,
    InviteWithDetails,
    MemberWithDetails,
    TripInvite,
    TripMember,
    User,
    membership_id,
    normalize_email,
)
from core.models.trip import Trip, TripCreate, TripUpdate, TripWithRole

__all__ = [
    "Attachment",
    "AttachmentCreate",
    "Category",
    "CategoryCreate",
    "CategoryReorder",
    "CategoryUpdate",
    "Command",
    "Document",
    "InviteRequest",
    "InviteResult",
    "InviteWithDetails",
    "Location",
    "LocationCreate",
    "LocationOrder",
    "LocationReorder",
    "LocationUpdate",
    "MemberWithDetails",
    "Trip",
    "TripCreate",
    "TripInvite",
    "TripMember",
    "TripUpdate",
    "TripWithRole",
    "UploadTarget",
    "User",
    "membership_id",
    "normalize_date_time",
    "normalize_email",
    "now_ms",
]
