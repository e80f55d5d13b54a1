"""Structured minutes synthesis.

The text model is asked for a JSON object with exactly two string fields,
``summary`` (one paragraph) and ``minutes`` (headings and bullets). Anything
else is treated as a failed synthesis and replaced by fixed placeholders so
the caller always receives a complete ``MinutesResult``.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from minutes_studio.config import DEFAULT_PROMPT_PATH, Settings
from minutes_studio.models.minutes_model import MinutesPayload, MinutesResult

logger = logging.getLogger(__name__)

MAX_TRANSCRIPT_CHARS = 120000

MOCK_TRANSCRIPT_BODY = "【モック転記】AIキー未設定のためダミー本文。"
MOCK_SUMMARY = "【モック要約】主要論点と次回アクションを整理しました。"
MOCK_MINUTES = "【モック議事録】\n## 議題\n- （AIキー未設定のためダミー）\n## 決定事項\n- なし\n## 次回アクション\n- なし"

SUMMARY_PARSE_FAILURE = "要約の解析に失敗しました。"
MINUTES_PARSE_FAILURE = "議事録本文の解析に失敗しました。"

DEFAULT_SYSTEM_PROMPT = (
    "あなたは日本語の議事録作成アシスタントです。\n"
    "正確・簡潔・箇条書きを基本とし、見出しと段落を適切に整形します。"
)

USER_PROMPT_PREFIX = "次の書き起こしから議事録を作成してください。要約は段落1つ、本文は見出し・箇条書き中心で。\n\n"

MINUTES_RESPONSE_FORMAT: dict[str, Any] = {
    "type": "json_schema",
    "json_schema": {
        "name": "MinutesSchema",
        "strict": True,
        "schema": {
            "type": "object",
            "properties": {
                "summary": {"type": "string"},
                "minutes": {"type": "string"},
            },
            "required": ["summary", "minutes"],
            "additionalProperties": False,
        },
    },
}


def load_base_prompt(path: str | Path | None) -> str:
    prompt_path = Path(path or DEFAULT_PROMPT_PATH)
    if prompt_path.is_file():
        text = prompt_path.read_text(encoding="utf-8").strip()
        if text:
            return text
    logger.warning("Minutes prompt %s not found, using built-in prompt", prompt_path)
    return DEFAULT_SYSTEM_PROMPT


def build_system_prompt(base_prompt: str, style_guidelines: str) -> str:
    parts = [base_prompt]
    if style_guidelines:
        parts.append(f"以下のスタイル指針に合わせて記述してください:\n{style_guidelines}")
    return "\n\n".join(part for part in parts if part)


def parse_minutes_payload(raw: str | None) -> MinutesPayload | None:
    try:
        return MinutesPayload.model_validate(json.loads(raw or ""))
    except (json.JSONDecodeError, ValidationError) as exc:
        logger.warning("Structured minutes response rejected: %s", exc)
        return None


def mock_minutes(transcript: str) -> MinutesResult:
    return MinutesResult(
        transcript=transcript or MOCK_TRANSCRIPT_BODY,
        summary=MOCK_SUMMARY,
        minutes_body=MOCK_MINUTES,
    )


class MinutesGenerator:
    def __init__(self, client: Any | None, settings: Settings):
        self.client = client
        self.settings = settings

    def generate(self, transcript: str, style_guidelines: str = "") -> MinutesResult:
        if self.client is None:
            return mock_minutes(transcript)

        system = build_system_prompt(load_base_prompt(self.settings.minutes_prompt_path), style_guidelines)
        response = self.client.chat.completions.create(
            model=self.settings.openai_text_model,
            temperature=0.2,
            response_format=MINUTES_RESPONSE_FORMAT,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": USER_PROMPT_PREFIX + transcript[:MAX_TRANSCRIPT_CHARS]},
            ],
        )
        choices = response.choices or []
        content = choices[0].message.content if choices else None

        payload = parse_minutes_payload(content)
        if payload is None:
            return MinutesResult(
                transcript=transcript,
                summary=SUMMARY_PARSE_FAILURE,
                minutes_body=MINUTES_PARSE_FAILURE,
            )
        return MinutesResult(transcript=transcript, summary=payload.summary, minutes_body=payload.minutes)
