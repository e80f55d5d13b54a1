from __future__ import annotations

import logging
from typing import Any

from minutes_studio.config import Settings

logger = logging.getLogger(__name__)

MIN_STYLE_CORPUS_CHARS = 200
MAX_STYLE_CORPUS_CHARS = 15000

STYLE_SYSTEM_PROMPT = "あなたはプロのテクニカルライターです。文章スタイルを抽出し、具体的で再現可能な指針にまとめます。"


def _style_prompt(corpus: str) -> str:
    return (
        "以下は過去の議事録の一部です。文体・言い回し・構成上の特徴を抽出し、"
        "今後の生成に使える日本語ガイドラインを箇条書きで10項目前後に要約してください。\n\n"
        f"---\n{corpus[:MAX_STYLE_CORPUS_CHARS]}\n---"
    )


def build_style_guidelines(corpus: str, client: Any | None, settings: Settings) -> str:
    if not corpus or len(corpus) < MIN_STYLE_CORPUS_CHARS:
        return ""
    if client is None:
        return ""

    response = client.chat.completions.create(
        model=settings.openai_text_model,
        temperature=0.2,
        messages=[
            {"role": "system", "content": STYLE_SYSTEM_PROMPT},
            {"role": "user", "content": _style_prompt(corpus)},
        ],
    )
    choices = response.choices or []
    content = choices[0].message.content if choices else None
    logger.info("Style guidelines built from %s corpus chars", min(len(corpus), MAX_STYLE_CORPUS_CHARS))
    return content or ""
