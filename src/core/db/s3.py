"""S3-backed blob storage for location attachments."""

import uuid
from typing import Any

from core.db.interface import BlobStore

URL_EXPIRY_SECONDS = 3600


class S3BlobStore(BlobStore):
    def __init__(self, s3_client: Any, bucket: str) -> None:
        self._client = s3_client
        self._bucket = bucket

    def generate_upload_url(self) -> tuple[str, str]:
        file_id = str(uuid.uuid4())
        url = self._client.generate_presigned_url(
            "put_object",
            Params={"Bucket": self._bucket, "Key": file_id},
            ExpiresIn=URL_EXPIRY_SECONDS,
        )
        return file_id, url

    def get_url(self, file_id: str) -> str:
        return self._client.generate_presigned_url(
            "get_object",
            Params={"Bucket": self._bucket, "Key": file_id},
            ExpiresIn=URL_EXPIRY_SECONDS,
        )

    def delete(self, file_id: str) -> None:
        """delete_object is idempotent: no error for missing keys."""
        self._client.delete_object(Bucket=self._bucket, Key=file_id)
