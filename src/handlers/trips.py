"""Trip endpoints."""

from typing import Any

from core.api import caller_id, dispatch, parse_body, path_param
from core.clients import get_blob_store, get_document_store
from core.models import TripCreate, TripUpdate
from core.services import trips


def _list(event: dict[str, Any]) -> tuple[int, Any]:
    return 200, trips.list_trips(get_document_store(), caller_id(event))


def _get(event: dict[str, Any]) -> tuple[int, Any]:
    return 200, trips.get_trip(get_document_store(), caller_id(event), path_param(event, "tripId"))


def _create(event: dict[str, Any]) -> tuple[int, Any]:
    trip_id = trips.create_trip(get_document_store(), caller_id(event), parse_body(event, TripCreate))
    return 201, {"id": trip_id}


def _update(event: dict[str, Any]) -> tuple[int, Any]:
    trip_id = trips.update_trip(
        get_document_store(),
        caller_id(event),
        path_param(event, "tripId"),
        parse_body(event, TripUpdate),
    )
    return 200, {"id": trip_id}


def _remove(event: dict[str, Any]) -> tuple[int, Any]:
    trip_id = trips.remove_trip(get_document_store(), get_blob_store(), caller_id(event), path_param(event, "tripId"))
    return 200, {"id": trip_id}


ROUTES = {
    "GET /trips": _list,
    "POST /trips": _create,
    "GET /trips/{tripId}": _get,
    "PATCH /trips/{tripId}": _update,
    "DELETE /trips/{tripId}": _remove,
}


def handler(event: dict[str, Any], context: object) -> dict[str, Any]:
    return dispatch(event, ROUTES)
