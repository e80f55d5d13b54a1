from __future__ import annotations

import logging
from pathlib import PurePath
from typing import Any, Callable, Sequence

from minutes_studio.config import Settings
from minutes_studio.models.minutes_model import AudioFile
from minutes_studio.utils.attempts import collect_successes, first_success

MOCK_TRANSCRIPT = "【モック転記】AIキー未設定のためダミーの議事録本文です。"

RECOMMENDED_AUDIO_SUFFIXES = {".mp3", ".wav", ".m4a"}
RECOMMENDED_MAX_AUDIO_BYTES = 300 * 1024 * 1024

TRANSCRIPT_SEPARATOR = "\n\n"


def advisory_warnings(audio: AudioFile) -> list[str]:
    """Soft recommendations only; nothing here rejects a file."""
    warnings: list[str] = []
    if PurePath(audio.filename).suffix.lower() not in RECOMMENDED_AUDIO_SUFFIXES:
        warnings.append(f"{audio.filename}: 推奨形式（mp3 / wav / m4a）以外のファイルです")
    if len(audio.content) > RECOMMENDED_MAX_AUDIO_BYTES:
        warnings.append(f"{audio.filename}: 推奨上限（300MB）を超えています")
    return warnings


class Transcriber:
    def __init__(self, client: Any | None, settings: Settings):
        self.client = client
        self.settings = settings
        self.logger = logging.getLogger(__name__)

    @property
    def models(self) -> list[str]:
        return [self.settings.openai_transcribe_model, self.settings.openai_transcribe_fallback_model]

    def transcribe_all(self, audio_files: Sequence[AudioFile]) -> str:
        if not audio_files:
            return ""
        if self.client is None:
            return MOCK_TRANSCRIPT

        for audio in audio_files:
            for message in advisory_warnings(audio):
                self.logger.warning(message)

        pieces = collect_successes(audio_files, self.transcribe_one, label=lambda audio: audio.filename)
        return TRANSCRIPT_SEPARATOR.join(piece for piece in pieces if piece)

    def transcribe_one(self, audio: AudioFile) -> str:
        strategies = [(model, self._strategy(model, audio)) for model in self.models]
        text = first_success(strategies)
        self.logger.info("Transcribed %s (%s bytes, %s chars)", audio.filename, len(audio.content), len(text))
        return text

    def _strategy(self, model: str, audio: AudioFile) -> Callable[[], str]:
        def run() -> str:
            response = self.client.audio.transcriptions.create(
                model=model,
                file=(audio.filename, audio.content, audio.content_type),
                language=self.settings.transcribe_language,
            )
            return getattr(response, "text", "") or ""

        return run
