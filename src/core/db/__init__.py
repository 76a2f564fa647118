"""
Storage clients for Tripper.

The document store holds every collection; the blob store holds
attachment files.
"""

from core.db.dynamo import DynamoDocumentStore
from core.db.interface import INDEXES, BlobStore, Collection, DocumentStore, index_name
from core.db.s3 import S3BlobStore

__all__ = [
    "INDEXES",
    "BlobStore",
    "Collection",
    "DocumentStore",
    "DynamoDocumentStore",
    "S3BlobStore",
    "index_name",
]
