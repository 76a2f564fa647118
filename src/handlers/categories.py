"""Category endpoints."""

from typing import Any

from core.api import caller_id, dispatch, parse_body, path_param
from core.clients import get_document_store
from core.models import CategoryCreate, CategoryReorder, CategoryUpdate
from core.services import categories


def _list(event: dict[str, Any]) -> tuple[int, Any]:
    return 200, categories.list_categories(get_document_store(), caller_id(event), path_param(event, "tripId"))


def _get(event: dict[str, Any]) -> tuple[int, Any]:
    return 200, categories.get_category(get_document_store(), caller_id(event), path_param(event, "categoryId"))


def _create(event: dict[str, Any]) -> tuple[int, Any]:
    category_id = categories.create_category(
        get_document_store(),
        caller_id(event),
        path_param(event, "tripId"),
        parse_body(event, CategoryCreate),
    )
    return 201, {"id": category_id}


def _update(event: dict[str, Any]) -> tuple[int, Any]:
    category_id = categories.update_category(
        get_document_store(),
        caller_id(event),
        path_param(event, "categoryId"),
        parse_body(event, CategoryUpdate),
    )
    return 200, {"id": category_id}


def _remove(event: dict[str, Any]) -> tuple[int, Any]:
    categories.remove_category(get_document_store(), caller_id(event), path_param(event, "categoryId"))
    return 200, {"success": True}


def _reorder(event: dict[str, Any]) -> tuple[int, Any]:
    categories.reorder_categories(
        get_document_store(),
        caller_id(event),
        path_param(event, "tripId"),
        parse_body(event, CategoryReorder),
    )
    return 200, {"success": True}


ROUTES = {
    "GET /trips/{tripId}/categories": _list,
    "POST /trips/{tripId}/categories": _create,
    "PUT /trips/{tripId}/categories/order": _reorder,
    "GET /categories/{categoryId}": _get,
    "PATCH /categories/{categoryId}": _update,
    "DELETE /categories/{categoryId}": _remove,
}


def handler(event: dict[str, Any], context: object) -> dict[str, Any]:
    return dispatch(event, ROUTES)
