"""Shared test fixtures for Tripper."""

import copy
import os
import sys
import uuid
from pathlib import Path
from typing import Any

import pytest
from dotenv import load_dotenv

# Load .env file for test configuration
load_dotenv()

# Unset AWS_PROFILE for local testing (DynamoDB Local doesn't need it)
if "AWS_PROFILE" in os.environ:
    del os.environ["AWS_PROFILE"]

# Add src directory to Python path for imports
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from core.db.interface import BlobStore, Collection, DocumentStore  # noqa: E402
from core.errors import ConflictError, NotFoundError  # noqa: E402


class InMemoryDocumentStore(DocumentStore):
    """Dict-backed store with the same observable behavior as DynamoDocumentStore."""

    def __init__(self) -> None:
        self.collections: dict[Collection, dict[str, dict[str, Any]]] = {c: {} for c in Collection}

    def get(self, collection: Collection, doc_id: str) -> dict[str, Any] | None:
        row = self.collections[collection].get(doc_id)
        return copy.deepcopy(row) if row else None

    def insert(self, collection: Collection, fields: dict[str, Any]) -> str:
        doc_id = str(uuid.uuid4())
        self.put(collection, {**fields, "id": doc_id})
        return doc_id

    def insert_many(self, writes: list[tuple[Collection, dict[str, Any]]]) -> list[str]:
        documents = [(collection, {"id": str(uuid.uuid4()), **fields}) for collection, fields in writes]
        for collection, document in documents:
            if document["id"] in self.collections[collection]:
                raise ConflictError("Document already exists")

        for collection, document in documents:
            self.collections[collection][document["id"]] = {k: copy.deepcopy(v) for k, v in document.items() if v is not None}
        return [document["id"] for _, document in documents]

    def put(self, collection: Collection, document: dict[str, Any]) -> None:
        self.collections[collection][document["id"]] = {k: copy.deepcopy(v) for k, v in document.items() if v is not None}

    def patch(self, collection: Collection, doc_id: str, fields: dict[str, Any]) -> None:
        row = self.collections[collection].get(doc_id)
        if row is None:
            raise NotFoundError(f"{collection.value} {doc_id} not found")
        for name, value in fields.items():
            if value is None:
                row.pop(name, None)
            else:
                row[name] = copy.deepcopy(value)

    def delete(self, collection: Collection, doc_id: str) -> None:
        self.collections[collection].pop(doc_id, None)

    def query(self, collection: Collection, field: str, value: Any) -> list[dict[str, Any]]:
        return [copy.deepcopy(row) for row in self.collections[collection].values() if row.get(field) == value]

    def scan(self, collection: Collection) -> list[dict[str, Any]]:
        return [copy.deepcopy(row) for row in self.collections[collection].values()]

    def count(self, collection: Collection) -> int:
        return len(self.collections[collection])


class FakeBlobStore(BlobStore):
    def __init__(self) -> None:
        self.issued: list[str] = []
        self.deleted: list[str] = []

    def generate_upload_url(self) -> tuple[str, str]:
        file_id = f"file-{len(self.issued) + 1}"
        self.issued.append(file_id)
        return file_id, f"https://uploads.example.com/{file_id}?signature=abc"

    def get_url(self, file_id: str) -> str:
        return f"https://files.example.com/{file_id}?signature=abc"

    def delete(self, file_id: str) -> None:
        self.deleted.append(file_id)


@pytest.fixture
def store():
    return InMemoryDocumentStore()


@pytest.fixture
def blobs():
    return FakeBlobStore()


@pytest.fixture
def add_user(store):
    """Mirror a signed-up user into the users collection."""

    def _add(user_id: str, email: str, name: str | None = None) -> str:
        store.put(Collection.USERS, {"id": user_id, "email": email, "name": name})
        return user_id

    return _add


@pytest.fixture
def make_trip(store):
    """Create a trip owned by ``owner`` via the service, returning its id."""
    from core.models import TripCreate
    from core.services.trips import create_trip

    def _make(owner: str = "owner-1", name: str = "Tokyo", **fields: Any) -> str:
        return create_trip(store, owner, TripCreate(name=name, **fields))

    return _make


@pytest.fixture
def add_member(store):
    def _add(trip_id: str, user_id: str, role: str = "member", invited_by: str = "owner-1") -> str:
        from core.models import membership_id

        member_id = membership_id(trip_id, user_id)
        store.put(
            Collection.TRIP_MEMBERS,
            {"id": member_id, "tripId": trip_id, "userId": user_id, "role": role, "invitedBy": invited_by, "invitedAt": 1},
        )
        return member_id

    return _add


def _api_event(
    method: str,
    resource: str,
    user_id: str | None = "owner-1",
    path: dict[str, str] | None = None,
    query: dict[str, str] | None = None,
    body: str | None = None,
    headers: dict[str, str] | None = None,
) -> dict[str, Any]:
    """A REST API Gateway proxy event as the handlers receive it after the authorizer."""
    authorizer = {"userId": user_id} if user_id else {"principalId": "anonymous"}
    return {
        "httpMethod": method,
        "resource": resource,
        "pathParameters": path,
        "queryStringParameters": query,
        "headers": headers or {},
        "body": body,
        "isBase64Encoded": False,
        "requestContext": {"authorizer": authorizer},
    }


@pytest.fixture
def api_event():
    return _api_event


# DynamoDB fixtures
@pytest.fixture
def dynamodb_resource():
    """Provide a DynamoDB resource for integration tests."""
    import boto3
    from core.config import get_config

    config = get_config()

    resource = boto3.resource(
        "dynamodb",
        endpoint_url=config.dynamodb_endpoint or "http://localhost:8000",
        region_name=config.aws_region,
        aws_access_key_id="dummy",
        aws_secret_access_key="dummy",
    )

    return resource


@pytest.fixture
def dynamo_store(dynamodb_resource):
    """DynamoDocumentStore against DynamoDB Local; tables come from scripts/create_local_tables.py."""
    from core.config import get_config
    from core.db.dynamo import DynamoDocumentStore

    store = DynamoDocumentStore(dynamodb_resource, get_config())
    yield store

    # Cleanup: scan and delete all items created during test
    for collection in Collection:
        table = store._table(collection)
        response = table.scan()
        with table.batch_writer() as batch:
            for item in response.get("Items", []):
                batch.delete_item(Key={"id": item["id"]})
