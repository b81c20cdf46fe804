"""
CV blob storage on S3.

Clients upload CVs straight to S3 through a short-lived pre-signed PUT URL;
the AI endpoint later reads the object back by key.
"""

import logging
import time
import uuid

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from jobboard.config import settings
from jobboard.errors import DownstreamError, NotFoundError
from jobboard.utils.text import now_iso

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"


def new_cv_key(file_type: str) -> str:
    ext = ".pdf" if file_type == PDF_CONTENT_TYPE else ""
    return f"cvs/{uuid.uuid4()}-{int(time.time() * 1000)}{ext}"


class BlobStore:
    """Pre-signed uploads and object reads against one bucket."""

    def __init__(self, bucket: str | None = None, region: str | None = None, client=None):
        self.bucket = bucket or settings.s3_bucket_name
        self._client = client
        self._region = region or settings.aws_region

    @property
    def client(self):
        if self._client is None:
            self._client = boto3.client("s3", region_name=self._region)
        return self._client

    def presign_upload(self, file_type: str = PDF_CONTENT_TYPE, expires_in: int | None = None) -> dict:
        """Return ``{uploadUrl, key, expiresIn}`` for a new CV object."""
        expires_in = expires_in or settings.presign_expires
        key = new_cv_key(file_type)
        try:
            url = self.client.generate_presigned_url(
                "put_object",
                Params={
                    "Bucket": self.bucket,
                    "Key": key,
                    "ContentType": file_type,
                    "Metadata": {"uploadedAt": now_iso()},
                },
                ExpiresIn=expires_in,
            )
        except (BotoCoreError, ClientError) as e:
            raise DownstreamError(f"Pre-signing {key} failed: {e}", "Failed to create upload URL") from e
        return {"uploadUrl": url, "key": key, "expiresIn": expires_in}

    def get_bytes(self, key: str) -> bytes:
        try:
            response = self.client.get_object(Bucket=self.bucket, Key=key)
            return response["Body"].read()
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code")
            if code in ("NoSuchKey", "404"):
                raise NotFoundError("CV file not found") from e
            raise DownstreamError(f"Reading {key} failed: {e}", "Failed to read CV") from e
        except BotoCoreError as e:
            raise DownstreamError(f"Reading {key} failed: {e}", "Failed to read CV") from e
