from typing import Annotated, Literal

from pydantic import Field, StringConstraints

from core.models.base import Command, Document, Number

Role = Literal["owner", "member"]

TripName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]
Latitude = Annotated[float, Field(ge=-90, le=90)]
Longitude = Annotated[float, Field(ge=-180, le=180)]
Zoom = Annotated[float, Field(ge=0, le=22)]


class Trip(Document):
    id: str
    name: str
    owner_id: str
    default_lat: Number | None = None
    default_lng: Number | None = None
    default_zoom: Number | None = None
    created_at: int
    updated_at: int


class TripWithRole(Trip):
    role: Role


class TripCreate(Command):
    name: TripName
    default_lat: Latitude | None = None
    default_lng: Longitude | None = None
    default_zoom: Zoom | None = None


class TripUpdate(Command):
    name: TripName | None = None
    default_lat: Latitude | None = None
    default_lng: Longitude | None = None
    default_zoom: Zoom | None = None
