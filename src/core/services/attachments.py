"""Files attached to locations. Rows live in the document store, bytes in the blob store."""

from core.db import BlobStore, Collection, DocumentStore
from core.errors import NotFoundError
from core.models import Attachment, AttachmentCreate, Location, UploadTarget, now_ms
from core.services.access import check_trip_access, require_auth, require_editor_access, require_trip_access


def _load_location(store: DocumentStore, location_id: str) -> Location:
    row = store.get(Collection.LOCATIONS, location_id)
    if row is None:
        raise NotFoundError("Location not found")
    return Location.model_validate(row)


def _load_attachment(store: DocumentStore, attachment_id: str) -> tuple[Attachment, Location]:
    row = store.get(Collection.ATTACHMENTS, attachment_id)
    if row is None:
        raise NotFoundError("Attachment not found")
    attachment = Attachment.model_validate(row)
    return attachment, _load_location(store, attachment.location_id)


def generate_upload_url(blobs: BlobStore, user_id: str | None) -> UploadTarget:
    require_auth(user_id)
    file_id, url = blobs.generate_upload_url()
    return UploadTarget(file_id=file_id, upload_url=url)


def save_attachment(store: DocumentStore, user_id: str | None, location_id: str, payload: AttachmentCreate) -> str:
    """Record metadata for a file already uploaded to ``payload.file_id``."""
    user_id = require_auth(user_id)
    location = _load_location(store, location_id)
    require_editor_access(store, location.trip_id, user_id)

    return store.insert(
        Collection.ATTACHMENTS,
        {
            "locationId": location_id,
            "fileName": payload.file_name,
            "fileId": payload.file_id,
            "mimeType": payload.mime_type,
            "uploadedAt": now_ms(),
        },
    )


def list_by_location(store: DocumentStore, user_id: str | None, location_id: str) -> list[Attachment]:
    user_id = require_auth(user_id)
    location = _load_location(store, location_id)
    require_trip_access(store, location.trip_id, user_id)

    rows = store.query(Collection.ATTACHMENTS, "locationId", location_id)
    return sorted((Attachment.model_validate(row) for row in rows), key=lambda a: a.uploaded_at)


def count_by_location(store: DocumentStore, user_id: str | None, location_id: str) -> int:
    """Badge count; 0 rather than an error for anonymous callers, missing locations or no access."""
    if not user_id:
        return 0
    row = store.get(Collection.LOCATIONS, location_id)
    if row is None:
        return 0
    if check_trip_access(store, row["tripId"], user_id) is None:
        return 0
    return len(store.query(Collection.ATTACHMENTS, "locationId", location_id))


def delete_attachment(store: DocumentStore, blobs: BlobStore, user_id: str | None, attachment_id: str) -> str:
    user_id = require_auth(user_id)
    attachment, location = _load_attachment(store, attachment_id)
    require_editor_access(store, location.trip_id, user_id)

    blobs.delete(attachment.file_id)
    store.delete(Collection.ATTACHMENTS, attachment_id)
    return attachment_id


def get_download_url(store: DocumentStore, blobs: BlobStore, user_id: str | None, attachment_id: str) -> str:
    user_id = require_auth(user_id)
    attachment, location = _load_attachment(store, attachment_id)
    require_trip_access(store, location.trip_id, user_id)
    return blobs.get_url(attachment.file_id)
