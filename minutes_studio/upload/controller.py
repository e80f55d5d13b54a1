from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from minutes_studio.models.minutes_model import UploadSignRequest, UploadTicket
from minutes_studio.services.s3_storage import S3Storage


class StorageNotConfigured(RuntimeError):
    pass


class UploadController:
    def __init__(self, storage: S3Storage | None):
        self.storage = storage

    def sign(self, body: Any) -> UploadTicket:
        if self.storage is None:
            raise StorageNotConfigured("S3 is not configured")
        try:
            payload = UploadSignRequest.model_validate(body or {})
        except ValidationError as exc:
            raise ValueError("invalid request body") from exc
        if not payload.filename:
            raise ValueError("filename required")
        return self.storage.create_upload_ticket(payload.filename, payload.content_type)
