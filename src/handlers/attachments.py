"""Attachment endpoints. File bytes go straight to S3 through presigned URLs."""

from typing import Any

from core.api import caller_id, dispatch, parse_body, path_param
from core.clients import get_blob_store, get_document_store
from core.models import AttachmentCreate
from core.services import attachments


def _upload_url(event: dict[str, Any]) -> tuple[int, Any]:
    return 200, attachments.generate_upload_url(get_blob_store(), caller_id(event))


def _save(event: dict[str, Any]) -> tuple[int, Any]:
    attachment_id = attachments.save_attachment(
        get_document_store(),
        caller_id(event),
        path_param(event, "locationId"),
        parse_body(event, AttachmentCreate),
    )
    return 201, {"id": attachment_id}


def _list(event: dict[str, Any]) -> tuple[int, Any]:
    return 200, attachments.list_by_location(get_document_store(), caller_id(event), path_param(event, "locationId"))


def _count(event: dict[str, Any]) -> tuple[int, Any]:
    count = attachments.count_by_location(get_document_store(), caller_id(event), path_param(event, "locationId"))
    return 200, {"count": count}


def _download_url(event: dict[str, Any]) -> tuple[int, Any]:
    url = attachments.get_download_url(
        get_document_store(), get_blob_store(), caller_id(event), path_param(event, "attachmentId")
    )
    return 200, {"url": url}


def _delete(event: dict[str, Any]) -> tuple[int, Any]:
    attachment_id = attachments.delete_attachment(
        get_document_store(), get_blob_store(), caller_id(event), path_param(event, "attachmentId")
    )
    return 200, {"id": attachment_id}


ROUTES = {
    "POST /attachments/upload-url": _upload_url,
    "GET /locations/{locationId}/attachments": _list,
    "POST /locations/{locationId}/attachments": _save,
    "GET /locations/{locationId}/attachments/count": _count,
    "GET /attachments/{attachmentId}/url": _download_url,
    "DELETE /attachments/{attachmentId}": _delete,
}


def handler(event: dict[str, Any], context: object) -> dict[str, Any]:
    return dispatch(event, ROUTES)
