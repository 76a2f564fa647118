from abc import ABC, abstractmethod
from enum import Enum
from typing import Any


class Collection(str, Enum):
    TRIPS = "trips"
    TRIP_MEMBERS = "tripMembers"
    TRIP_INVITES = "tripInvites"
    CATEGORIES = "categories"
    LOCATIONS = "locations"
    ATTACHMENTS = "attachments"
    USERS = "users"


# Foreign-key fields with a secondary index, per collection.
INDEXES: dict[Collection, tuple[str, ...]] = {
    Collection.TRIPS: ("ownerId",),
    Collection.TRIP_MEMBERS: ("tripId", "userId"),
    Collection.TRIP_INVITES: ("tripId", "email"),
    Collection.CATEGORIES: ("tripId",),
    Collection.LOCATIONS: ("tripId",),
    Collection.ATTACHMENTS: ("locationId",),
    Collection.USERS: ("email",),
}


def index_name(field: str) -> str:
    return f"{field}-index"


class DocumentStore(ABC):
    """Document database primitives. Documents are plain dicts keyed by ``id``."""

    @abstractmethod
    def get(self, collection: Collection, doc_id: str) -> dict[str, Any] | None: ...

    @abstractmethod
    def insert(self, collection: Collection, fields: dict[str, Any]) -> str: ...

    @abstractmethod
    def insert_many(self, writes: list[tuple[Collection, dict[str, Any]]]) -> list[str]:
        """Insert several documents all-or-nothing and return their ids.

        A document that carries its own ``id`` keeps it. If any of those ids already
        exists the whole batch is rejected with ``ConflictError`` and nothing is written.
        """

    @abstractmethod
    def put(self, collection: Collection, document: dict[str, Any]) -> None:
        """Write a document under its own ``id``, replacing any existing one."""

    @abstractmethod
    def patch(self, collection: Collection, doc_id: str, fields: dict[str, Any]) -> None:
        """Merge ``fields`` into an existing document. ``None`` values remove the attribute."""

    @abstractmethod
    def delete(self, collection: Collection, doc_id: str) -> None: ...

    @abstractmethod
    def query(self, collection: Collection, field: str, value: Any) -> list[dict[str, Any]]:
        """Equality lookup on an indexed foreign-key field."""

    @abstractmethod
    def scan(self, collection: Collection) -> list[dict[str, Any]]: ...


class BlobStore(ABC):
    @abstractmethod
    def generate_upload_url(self) -> tuple[str, str]:
        """Reserve a new file id and return ``(file_id, upload_url)``."""

    @abstractmethod
    def get_url(self, file_id: str) -> str: ...

    @abstractmethod
    def delete(self, file_id: str) -> None: ...
