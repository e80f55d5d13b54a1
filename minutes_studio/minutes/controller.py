from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Union

from minutes_studio.config import Settings
from minutes_studio.models.minutes_model import AudioFile, MinutesResponse, StyleDocument
from minutes_studio.services.minutes_generator import MinutesGenerator
from minutes_studio.services.s3_storage import S3Storage
from minutes_studio.services.style_corpus import extract_style_corpus
from minutes_studio.services.style_guidelines import build_style_guidelines
from minutes_studio.services.transcription import Transcriber
from minutes_studio.utils.auth_openai import get_openai_client


class InputError(ValueError):
    """Client-side problem with the submitted request body."""


@dataclass(frozen=True)
class AudioInput:
    audio_files: list[AudioFile]
    style_documents: list[StyleDocument] = field(default_factory=list)


@dataclass(frozen=True)
class StorageKeyInput:
    keys: list[str]
    style_documents: list[StyleDocument] = field(default_factory=list)


@dataclass(frozen=True)
class TranscriptInput:
    transcript: str
    style_documents: list[StyleDocument] = field(default_factory=list)


MinutesInput = Union[AudioInput, StorageKeyInput, TranscriptInput]


def decide_input(
    audio_files: list[AudioFile],
    s3_keys: list[str],
    transcript: str | None,
    style_documents: list[StyleDocument] | None = None,
) -> MinutesInput:
    """Pick exactly one input mode.

    Direct audio wins over storage keys, and storage keys win over transcript
    text. A transcript that is missing or blank is rejected here, before any
    AI call.
    """
    styles = list(style_documents or [])
    if audio_files:
        return AudioInput(audio_files=list(audio_files), style_documents=styles)
    keys = [key.strip() for key in s3_keys if key and key.strip()]
    if keys:
        return StorageKeyInput(keys=keys, style_documents=styles)
    if transcript is None or not transcript.strip():
        raise InputError("transcript is required")
    return TranscriptInput(transcript=transcript, style_documents=styles)


class MinutesController:
    def __init__(self, settings: Settings, ai_client: Any | None = None, storage: S3Storage | None = None):
        self.settings = settings
        self.ai_client = ai_client
        self.storage = storage
        self.transcriber = Transcriber(ai_client, settings)
        self.generator = MinutesGenerator(ai_client, settings)
        self.logger = logging.getLogger(__name__)

    @classmethod
    def from_settings(cls, settings: Settings) -> "MinutesController":
        return cls(settings, ai_client=get_openai_client(settings), storage=S3Storage.from_settings(settings))

    @property
    def used_ai(self) -> bool:
        return self.ai_client is not None

    def run(self, request_input: MinutesInput) -> MinutesResponse:
        self.logger.info(
            "Minutes request mode=%s style_files=%s used_ai=%s",
            type(request_input).__name__,
            len(request_input.style_documents),
            self.used_ai,
        )
        transcript = self.resolve_transcript(request_input)

        corpus = extract_style_corpus(request_input.style_documents)
        guidelines = build_style_guidelines(corpus, self.ai_client, self.settings)
        result = self.generator.generate(transcript, guidelines)

        return MinutesResponse(
            transcript=result.transcript or transcript,
            summary=result.summary,
            minutes=result.minutes_body,
            styleGuidelines=guidelines,
            usedAI=self.used_ai,
        )

    def resolve_transcript(self, request_input: MinutesInput) -> str:
        if isinstance(request_input, AudioInput):
            return self.transcriber.transcribe_all(request_input.audio_files)
        if isinstance(request_input, StorageKeyInput):
            return self.transcriber.transcribe_all(self.fetch_audio(request_input.keys))
        return request_input.transcript

    def fetch_audio(self, keys: list[str]) -> list[AudioFile]:
        if self.storage is None:
            self.logger.warning("Storage is not configured, ignoring %s uploaded key(s)", len(keys))
            return []
        return [
            AudioFile(filename=S3Storage.filename_for(key), content=self.storage.read_bytes(key))
            for key in keys
        ]
