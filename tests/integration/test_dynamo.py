"""Integration tests for DynamoDocumentStore against DynamoDB Local.

Requires DynamoDB Local on DYNAMODB_ENDPOINT and the tables from scripts/create_local_tables.py.
"""

import pytest

from core.db import Collection
from core.errors import ConflictError, NotFoundError
from core.models import LocationCreate, LocationUpdate, TripCreate
from core.services import locations, trips


@pytest.mark.integration
def test_insert_get_and_float_round_trip(dynamo_store):
    doc_id = dynamo_store.insert(Collection.TRIPS, {"name": "Japan", "ownerId": "u1", "defaultLat": 35.6762})

    row = dynamo_store.get(Collection.TRIPS, doc_id)

    assert row["id"] == doc_id
    assert row["defaultLat"] == 35.6762


@pytest.mark.integration
def test_query_by_index(dynamo_store):
    dynamo_store.insert(Collection.TRIP_MEMBERS, {"tripId": "t1", "userId": "u1", "role": "owner"})
    dynamo_store.insert(Collection.TRIP_MEMBERS, {"tripId": "t1", "userId": "u2", "role": "member"})
    dynamo_store.insert(Collection.TRIP_MEMBERS, {"tripId": "t2", "userId": "u1", "role": "owner"})

    assert {row["userId"] for row in dynamo_store.query(Collection.TRIP_MEMBERS, "tripId", "t1")} == {"u1", "u2"}
    assert len(dynamo_store.query(Collection.TRIP_MEMBERS, "userId", "u1")) == 2


@pytest.mark.integration
def test_patch_removes_none_fields(dynamo_store):
    doc_id = dynamo_store.insert(Collection.LOCATIONS, {"tripId": "t1", "name": "A", "dateTime": "2024-03-16T09:00"})

    dynamo_store.patch(Collection.LOCATIONS, doc_id, {"dateTime": None, "name": "B"})

    row = dynamo_store.get(Collection.LOCATIONS, doc_id)
    assert row["name"] == "B"
    assert "dateTime" not in row


@pytest.mark.integration
def test_patch_missing_document(dynamo_store):
    with pytest.raises(NotFoundError):
        dynamo_store.patch(Collection.TRIPS, "does-not-exist", {"name": "x"})


@pytest.mark.integration
def test_insert_many_is_all_or_nothing(dynamo_store):
    dynamo_store.put(Collection.TRIP_MEMBERS, {"id": "t1#u1", "tripId": "t1", "userId": "u1", "role": "owner"})

    with pytest.raises(ConflictError):
        dynamo_store.insert_many(
            [
                (Collection.TRIPS, {"id": "t1", "name": "Japan", "ownerId": "u1"}),
                (Collection.TRIP_MEMBERS, {"id": "t1#u1", "tripId": "t1", "userId": "u1", "role": "owner"}),
            ]
        )

    assert dynamo_store.get(Collection.TRIPS, "t1") is None


@pytest.mark.integration
def test_trip_lifecycle(dynamo_store, blobs):
    trip_id = trips.create_trip(dynamo_store, "u1", TripCreate(name="Japan"))
    location_id = locations.create_location(
        dynamo_store, "u1", trip_id, LocationCreate(name="Senso-ji", latitude=35.7148, longitude=139.7967)
    )
    locations.update_location(
        dynamo_store, "u1", location_id, LocationUpdate.model_validate({"dateTime": "2024-03-16"})
    )

    assert locations.get_unique_dates(dynamo_store, "u1", trip_id) == ["2024-03-16"]

    trips.remove_trip(dynamo_store, blobs, "u1", trip_id)

    assert dynamo_store.get(Collection.TRIPS, trip_id) is None
    assert dynamo_store.get(Collection.LOCATIONS, location_id) is None
    assert dynamo_store.query(Collection.TRIP_MEMBERS, "tripId", trip_id) == []
