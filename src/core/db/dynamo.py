"""DynamoDB document store: one table per collection, one GSI per foreign key."""

import logging
import uuid
from decimal import Decimal
from typing import Any

from boto3.dynamodb.conditions import Key
from botocore.exceptions import ClientError

from core.config import Config
from core.db.interface import Collection, DocumentStore, index_name
from core.errors import ConflictError, NotFoundError

logger = logging.getLogger(__name__)


def _to_dynamo(value: Any) -> Any:
    """DynamoDB rejects float; numbers go in as Decimal."""
    if isinstance(value, bool):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, dict):
        return {k: _to_dynamo(v) for k, v in value.items() if v is not None}
    if isinstance(value, list):
        return [_to_dynamo(v) for v in value]
    return value


def _from_dynamo(value: Any) -> Any:
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, dict):
        return {k: _from_dynamo(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_from_dynamo(v) for v in value]
    return value


class DynamoDocumentStore(DocumentStore):
    def __init__(self, dynamo_resource: Any, config: Config) -> None:
        self._resource = dynamo_resource
        self._table_names: dict[Collection, str] = {
            Collection.TRIPS: config.trips_table,
            Collection.TRIP_MEMBERS: config.trip_members_table,
            Collection.TRIP_INVITES: config.trip_invites_table,
            Collection.CATEGORIES: config.categories_table,
            Collection.LOCATIONS: config.locations_table,
            Collection.ATTACHMENTS: config.attachments_table,
            Collection.USERS: config.users_table,
        }

    def _table(self, collection: Collection) -> Any:
        return self._resource.Table(self._table_names[collection])

    def get(self, collection: Collection, doc_id: str) -> dict[str, Any] | None:
        response = self._table(collection).get_item(Key={"id": doc_id})
        item = response.get("Item")
        return _from_dynamo(item) if item else None

    def insert(self, collection: Collection, fields: dict[str, Any]) -> str:
        doc_id = str(uuid.uuid4())
        self._table(collection).put_item(Item=_to_dynamo({**fields, "id": doc_id}))
        return doc_id

    def insert_many(self, writes: list[tuple[Collection, dict[str, Any]]]) -> list[str]:
        documents = [(collection, {"id": str(uuid.uuid4()), **fields}) for collection, fields in writes]
        # The resource's client serializes native Python values like Table does.
        transact_items = [
            {
                "Put": {
                    "TableName": self._table_names[collection],
                    "Item": _to_dynamo(document),
                    "ConditionExpression": "attribute_not_exists(id)",
                }
            }
            for collection, document in documents
        ]

        try:
            self._resource.meta.client.transact_write_items(TransactItems=transact_items)
        except ClientError as e:
            if e.response["Error"]["Code"] != "TransactionCanceledException":
                raise
            reasons = [reason.get("Code") for reason in e.response.get("CancellationReasons", [])]
            if "ConditionalCheckFailed" in reasons:
                raise ConflictError("Document already exists") from e
            raise

        return [document["id"] for _, document in documents]

    def put(self, collection: Collection, document: dict[str, Any]) -> None:
        self._table(collection).put_item(Item=_to_dynamo(document))

    def patch(self, collection: Collection, doc_id: str, fields: dict[str, Any]) -> None:
        if not fields:
            return

        names: dict[str, str] = {}
        values: dict[str, Any] = {}
        sets: list[str] = []
        removes: list[str] = []
        for i, (name, value) in enumerate(fields.items()):
            names[f"#f{i}"] = name
            if value is None:
                removes.append(f"#f{i}")
            else:
                values[f":v{i}"] = _to_dynamo(value)
                sets.append(f"#f{i} = :v{i}")

        expression = ""
        if sets:
            expression += "SET " + ", ".join(sets)
        if removes:
            expression += (" " if expression else "") + "REMOVE " + ", ".join(removes)

        update_kwargs: dict[str, Any] = {
            "Key": {"id": doc_id},
            "UpdateExpression": expression,
            "ConditionExpression": "attribute_exists(id)",
            "ExpressionAttributeNames": names,
        }
        if values:
            update_kwargs["ExpressionAttributeValues"] = values

        try:
            self._table(collection).update_item(**update_kwargs)
        except ClientError as e:
            if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                raise NotFoundError(f"{collection.value} {doc_id} not found") from e
            raise

    def delete(self, collection: Collection, doc_id: str) -> None:
        self._table(collection).delete_item(Key={"id": doc_id})

    def query(self, collection: Collection, field: str, value: Any) -> list[dict[str, Any]]:
        items: list[dict[str, Any]] = []
        last_key = None

        while True:
            query_kwargs: dict[str, Any] = {
                "IndexName": index_name(field),
                "KeyConditionExpression": Key(field).eq(_to_dynamo(value)),
            }
            if last_key:
                query_kwargs["ExclusiveStartKey"] = last_key

            response = self._table(collection).query(**query_kwargs)
            items.extend(_from_dynamo(item) for item in response.get("Items", []))

            last_key = response.get("LastEvaluatedKey")
            if not last_key:
                break

        return items

    def scan(self, collection: Collection) -> list[dict[str, Any]]:
        items: list[dict[str, Any]] = []
        last_key = None

        while True:
            scan_kwargs: dict[str, Any] = {}
            if last_key:
                scan_kwargs["ExclusiveStartKey"] = last_key

            response = self._table(collection).scan(**scan_kwargs)
            items.extend(_from_dynamo(item) for item in response.get("Items", []))

            last_key = response.get("LastEvaluatedKey")
            if not last_key:
                break

        logger.info("Scanned %d items from %s", len(items), collection.value)
        return items
