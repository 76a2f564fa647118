"""Lazy-initialized boto3 clients and stores, reused across warm Lambda invocations."""

from functools import lru_cache
from typing import Any

import boto3

from core.config import get_config
from core.db.dynamo import DynamoDocumentStore
from core.db.interface import BlobStore, DocumentStore
from core.db.s3 import S3BlobStore


@lru_cache(maxsize=1)
def get_dynamo_resource() -> Any:
    config = get_config()
    return boto3.resource("dynamodb", endpoint_url=config.dynamodb_endpoint, region_name=config.aws_region)


@lru_cache(maxsize=1)
def get_s3_client() -> Any:
    config = get_config()
    return boto3.client("s3", endpoint_url=config.s3_endpoint, region_name=config.aws_region)


@lru_cache(maxsize=1)
def get_document_store() -> DocumentStore:
    return DynamoDocumentStore(get_dynamo_resource(), get_config())


@lru_cache(maxsize=1)
def get_blob_store() -> BlobStore:
    return S3BlobStore(get_s3_client(), get_config().attachments_bucket)
