from typing import Annotated

from pydantic import StringConstraints

from core.models.base import Command, Document


class Attachment(Document):
    id: str
    location_id: str
    file_name: str
    file_id: str
    mime_type: str
    uploaded_at: int


class AttachmentCreate(Command):
    file_name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]
    file_id: Annotated[str, StringConstraints(min_length=1)]
    mime_type: Annotated[str, StringConstraints(min_length=1, max_length=255)]


class UploadTarget(Command):
    file_id: str
    upload_url: str
