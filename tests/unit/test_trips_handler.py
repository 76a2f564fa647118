"""Unit tests for the trips HTTP handler."""

import json
from unittest.mock import patch

import pytest

from core.db import Collection
from handlers.trips import handler


@pytest.fixture(autouse=True)
def _stores(store, blobs):
    with (
        patch("handlers.trips.get_document_store", return_value=store),
        patch("handlers.trips.get_blob_store", return_value=blobs),
    ):
        yield


def test_create_and_get_trip(api_event, store):
    created = handler(api_event("POST", "/trips", body=json.dumps({"name": "Japan", "defaultZoom": 5})), None)

    assert created["statusCode"] == 201
    trip_id = json.loads(created["body"])["id"]

    fetched = handler(api_event("GET", "/trips/{tripId}", path={"tripId": trip_id}), None)
    body = json.loads(fetched["body"])
    assert fetched["statusCode"] == 200
    assert body["name"] == "Japan"
    assert body["role"] == "owner"
    assert body["ownerId"] == "owner-1"


def test_list_trips_anonymous(api_event, make_trip):
    make_trip()

    response = handler(api_event("GET", "/trips", user_id=None), None)

    assert response["statusCode"] == 200
    assert json.loads(response["body"]) == []


def test_create_trip_anonymous(api_event):
    response = handler(api_event("POST", "/trips", user_id=None, body=json.dumps({"name": "Japan"})), None)

    assert response["statusCode"] == 401


def test_create_trip_invalid_name(api_event):
    response = handler(api_event("POST", "/trips", body=json.dumps({"name": "   "})), None)

    assert response["statusCode"] == 400


def test_update_trip(api_event, make_trip, store):
    trip_id = make_trip()

    response = handler(
        api_event("PATCH", "/trips/{tripId}", path={"tripId": trip_id}, body=json.dumps({"name": "Kyoto"})),
        None,
    )

    assert response["statusCode"] == 200
    assert store.get(Collection.TRIPS, trip_id)["name"] == "Kyoto"


def test_delete_trip_by_member_is_forbidden(api_event, make_trip, add_member):
    trip_id = make_trip()
    add_member(trip_id, "member-1")

    response = handler(api_event("DELETE", "/trips/{tripId}", user_id="member-1", path={"tripId": trip_id}), None)

    assert response["statusCode"] == 403
    assert json.loads(response["body"]) == {"error": "Only the trip owner can delete this trip"}


def test_delete_trip(api_event, make_trip, store):
    trip_id = make_trip()

    response = handler(api_event("DELETE", "/trips/{tripId}", path={"tripId": trip_id}), None)

    assert response["statusCode"] == 200
    assert store.get(Collection.TRIPS, trip_id) is None


def test_get_missing_trip(api_event):
    response = handler(api_event("GET", "/trips/{tripId}", path={"tripId": "missing"}), None)

    assert response["statusCode"] == 404
