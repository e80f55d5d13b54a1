"""Download renderings of generated minutes.

The ``docx`` export is an HTML document served under the Word MIME type so
Word opens it in compatibility mode. It is not a real OOXML package.
"""
from __future__ import annotations

import html
import time
from dataclasses import dataclass

EMPTY_PLACEHOLDER = "（未作成）"

_FONT_STACK = (
    "-apple-system,BlinkMacSystemFont,Segoe UI,Roboto,Helvetica,Arial,"
    "'Noto Sans JP','Hiragino Kaku Gothic ProN',Meiryo,sans-serif"
)


@dataclass(frozen=True)
class ExportFile:
    content: str
    media_type: str
    filename: str


def escape_html(value: str) -> str:
    return html.escape(value, quote=True)


def render_html(summary: str, minutes_body: str) -> str:
    return (
        '<!doctype html><html lang="ja"><meta charset="utf-8"><title>Minutes Studio — 議事録</title>'
        f'<body style="font-family:{_FONT_STACK};line-height:1.7;padding:40px;max-width:900px;margin:auto">'
        "<h1>議事録（AI生成）</h1>"
        f"<h3>概要</h3><p>{escape_html(summary or EMPTY_PLACEHOLDER)}</p>"
        f'<h3>本文</h3><pre style="white-space:pre-wrap">{escape_html(minutes_body or EMPTY_PLACEHOLDER)}</pre>'
        "</body></html>"
    )


def render_word_html(summary: str, minutes_body: str) -> str:
    body = ""
    if summary:
        body += f"<h3>概要</h3><p>{escape_html(summary)}</p>"
    if minutes_body:
        body += f"<h3>本文</h3><pre>{escape_html(minutes_body)}</pre>"
    return f'<!doctype html><html><meta charset="utf-8"><body>{body}</body></html>'


def render_text(summary: str, minutes_body: str) -> str:
    return f"■ 概要\n{summary or EMPTY_PLACEHOLDER}\n\n■ 本文\n{minutes_body or EMPTY_PLACEHOLDER}\n"


EXPORT_FORMATS = {
    "html": (render_html, "text/html; charset=utf-8"),
    "docx": (
        render_word_html,
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ),
    "txt": (render_text, "text/plain; charset=utf-8"),
}


def export_minutes(fmt: str, summary: str, minutes_body: str, now_ms: int | None = None) -> ExportFile:
    try:
        renderer, media_type = EXPORT_FORMATS[fmt]
    except KeyError as exc:
        raise ValueError(f"unsupported export format: {fmt}") from exc
    timestamp = now_ms if now_ms is not None else int(time.time() * 1000)
    return ExportFile(
        content=renderer(summary, minutes_body),
        media_type=media_type,
        filename=f"minutes_{timestamp}.{fmt}",
    )
