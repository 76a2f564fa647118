"""Location endpoints, including the calendar date queries and drag-drop reorder."""

from typing import Any

from core.api import caller_id, dispatch, parse_body, path_param, query_param
from core.clients import get_blob_store, get_document_store
from core.models import LocationCreate, LocationReorder, LocationUpdate
from core.services import locations


def _list(event: dict[str, Any]) -> tuple[int, Any]:
    store = get_document_store()
    trip_id = path_param(event, "tripId")
    day = query_param(event, "date")
    if day:
        return 200, locations.list_by_trip_and_date(store, caller_id(event), trip_id, day)
    return 200, locations.list_by_trip(store, caller_id(event), trip_id)


def _dates(event: dict[str, Any]) -> tuple[int, Any]:
    return 200, locations.get_unique_dates(get_document_store(), caller_id(event), path_param(event, "tripId"))


def _get(event: dict[str, Any]) -> tuple[int, Any]:
    return 200, locations.get_location(get_document_store(), caller_id(event), path_param(event, "locationId"))


def _create(event: dict[str, Any]) -> tuple[int, Any]:
    location_id = locations.create_location(
        get_document_store(),
        caller_id(event),
        path_param(event, "tripId"),
        parse_body(event, LocationCreate),
    )
    return 201, {"id": location_id}


def _update(event: dict[str, Any]) -> tuple[int, Any]:
    location_id = locations.update_location(
        get_document_store(),
        caller_id(event),
        path_param(event, "locationId"),
        parse_body(event, LocationUpdate),
    )
    return 200, {"id": location_id}


def _remove(event: dict[str, Any]) -> tuple[int, Any]:
    location_id = locations.remove_location(
        get_document_store(), get_blob_store(), caller_id(event), path_param(event, "locationId")
    )
    return 200, {"id": location_id}


def _reorder(event: dict[str, Any]) -> tuple[int, Any]:
    payload = parse_body(event, LocationReorder)
    locations.reorder_locations(
        get_document_store(), caller_id(event), path_param(event, "tripId"), payload.location_orders
    )
    return 200, {"success": True}


ROUTES = {
    "GET /trips/{tripId}/locations": _list,
    "POST /trips/{tripId}/locations": _create,
    "GET /trips/{tripId}/dates": _dates,
    "PUT /trips/{tripId}/locations/order": _reorder,
    "GET /locations/{locationId}": _get,
    "PATCH /locations/{locationId}": _update,
    "DELETE /locations/{locationId}": _remove,
}


def handler(event: dict[str, Any], context: object) -> dict[str, Any]:
    return dispatch(event, ROUTES)
