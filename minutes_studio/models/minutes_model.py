from pydantic import BaseModel, ConfigDict, Field


class StyleDocument(BaseModel):
    filename: str
    content: bytes


class AudioFile(BaseModel):
    filename: str
    content: bytes
    content_type: str = "audio/mpeg"


class MinutesResult(BaseModel):
    transcript: str
    summary: str
    minutes_body: str


class MinutesPayload(BaseModel):
    """Structured output expected from the text model."""

    model_config = ConfigDict(extra="forbid", strict=True)

    summary: str
    minutes: str


class MinutesResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    transcript: str
    summary: str
    minutes: str
    style_guidelines: str = Field(alias="styleGuidelines")
    used_ai: bool = Field(alias="usedAI")


class StorageKeysRequest(BaseModel):
    s3_keys: list[str] = Field(default_factory=list, alias="s3Keys")


class UploadSignRequest(BaseModel):
    filename: str | None = None
    content_type: str | None = Field(default=None, alias="contentType")


class UploadTicket(BaseModel):
    url: str
    key: str


class ExportRequest(BaseModel):
    summary: str = ""
    minutes: str = ""


class ErrorResponse(BaseModel):
    error: str
    details: str | None = None
