from __future__ import annotations

import logging
import secrets
import string
import time
from pathlib import PurePosixPath
from typing import Any

from botocore.config import Config

from minutes_studio.config import Settings
from minutes_studio.models.minutes_model import UploadTicket
from minutes_studio.utils.auth_aws import get_session

UPLOAD_PREFIX = "uploads"
_BASE36 = string.digits + string.ascii_lowercase


def _random_token(length: int = 11) -> str:
    return "".join(secrets.choice(_BASE36) for _ in range(length))


def upload_key(filename: str, now_ms: int | None = None) -> str:
    ext = filename.rsplit(".", 1)[-1] or "bin"
    timestamp = now_ms if now_ms is not None else int(time.time() * 1000)
    return f"{UPLOAD_PREFIX}/{timestamp}_{_random_token()}.{ext}"


class S3Storage:
    """Presigned uploads and object reads against the configured bucket."""

    def __init__(self, bucket: str, client: Any, expires_in: int = 600):
        self.bucket = bucket
        self.client = client
        self.expires_in = expires_in
        self.logger = logging.getLogger(__name__)

    @classmethod
    def from_settings(cls, settings: Settings, client: Any | None = None) -> "S3Storage | None":
        """Return None when region, bucket or credentials are missing."""
        if not settings.storage_configured:
            return None
        if client is None:
            client = get_session(settings).client("s3", config=Config(signature_version="s3v4"))
        return cls(bucket=settings.aws_s3_bucket, client=client, expires_in=settings.upload_url_expires_seconds)

    def create_upload_ticket(self, filename: str, content_type: str | None = None) -> UploadTicket:
        key = upload_key(filename)
        url = self.client.generate_presigned_url(
            "put_object",
            Params={
                "Bucket": self.bucket,
                "Key": key,
                "ContentType": content_type or "application/octet-stream",
            },
            ExpiresIn=self.expires_in,
        )
        self.logger.info("Issued upload url key=%s expires_in=%s", key, self.expires_in)
        return UploadTicket(url=url, key=key)

    def read_bytes(self, key: str) -> bytes:
        response = self.client.get_object(Bucket=self.bucket, Key=key)
        return response["Body"].read()

    @staticmethod
    def filename_for(key: str) -> str:
        return PurePosixPath(key).name or "audio.mp3"
