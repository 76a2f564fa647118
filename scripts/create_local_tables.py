#!/usr/bin/env python3
"""Create DynamoDB tables for local development.

Creates one table per collection, keyed on ``id``, with a ``<field>-index`` GSI
for every foreign key the services query by. Configured against DynamoDB Local.

Usage:
    python scripts/create_local_tables.py
"""

import sys
from pathlib import Path

import boto3
from botocore.exceptions import ClientError

# Add src to path for config import
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from core.config import get_config
from core.db.interface import INDEXES, Collection, index_name


def table_names(config) -> dict[Collection, str]:
    return {
        Collection.TRIPS: config.trips_table,
        Collection.TRIP_MEMBERS: config.trip_members_table,
        Collection.TRIP_INVITES: config.trip_invites_table,
        Collection.CATEGORIES: config.categories_table,
        Collection.LOCATIONS: config.locations_table,
        Collection.ATTACHMENTS: config.attachments_table,
        Collection.USERS: config.users_table,
    }


def create_table(dynamodb, table_name: str, indexed_fields: tuple[str, ...]):
    """Create a collection table with one GSI per indexed field."""
    attributes = [{"AttributeName": "id", "AttributeType": "S"}]
    attributes += [{"AttributeName": field, "AttributeType": "S"} for field in indexed_fields]

    try:
        dynamodb.create_table(
            TableName=table_name,
            KeySchema=[{"AttributeName": "id", "KeyType": "HASH"}],
            AttributeDefinitions=attributes,
            GlobalSecondaryIndexes=[
                {
                    "IndexName": index_name(field),
                    "KeySchema": [{"AttributeName": field, "KeyType": "HASH"}],
                    "Projection": {"ProjectionType": "ALL"},
                }
                for field in indexed_fields
            ],
            BillingMode="PAY_PER_REQUEST",
        )
        print(f"✓ Created {table_name} table with {len(indexed_fields)} GSI(s)")
    except ClientError as e:
        if e.response["Error"]["Code"] == "ResourceInUseException":
            print(f"✓ {table_name} table already exists")
        else:
            raise


def enable_invite_ttl(dynamodb, table_name: str):
    """Expired invites are swept by DynamoDB using the ``ttl`` attribute."""
    try:
        dynamodb.update_time_to_live(
            TableName=table_name,
            TimeToLiveSpecification={"Enabled": True, "AttributeName": "ttl"},
        )
        print(f"✓ Enabled TTL on {table_name}")
    except ClientError as e:
        if e.response["Error"]["Code"] == "ValidationException":
            print(f"✓ TTL already enabled on {table_name}")
        else:
            raise


def main():
    """Create all DynamoDB tables."""
    config = get_config()

    endpoint_url = config.dynamodb_endpoint or "http://localhost:8000"

    print(f"Creating DynamoDB tables at {endpoint_url}...")
    print()

    # For DynamoDB Local, use dummy credentials
    dynamodb = boto3.client(
        "dynamodb",
        endpoint_url=endpoint_url,
        region_name=config.aws_region,
        aws_access_key_id="dummy",
        aws_secret_access_key="dummy",
    )

    names = table_names(config)
    for collection, table_name in names.items():
        create_table(dynamodb, table_name, INDEXES[collection])
    enable_invite_ttl(dynamodb, names[Collection.TRIP_INVITES])

    print()
    print("✅ All DynamoDB tables ready")


if __name__ == "__main__":
    main()
