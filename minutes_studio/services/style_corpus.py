"""Plain-text extraction of prior minutes used as style exemplars.

Supported inputs are Word (.docx), plain text (.txt / .md) and HTML
(.html / .htm). Other extensions are ignored. A document that cannot be read
contributes nothing to the corpus instead of failing the request.
"""
from __future__ import annotations

import io
import logging
import re
from pathlib import PurePath
from typing import Callable, Iterable, Iterator

from bs4 import BeautifulSoup
from docx import Document
from docx.table import Table

from minutes_studio.models.minutes_model import StyleDocument
from minutes_studio.utils.attempts import collect_successes

logger = logging.getLogger(__name__)

CORPUS_SEPARATOR = "\n\n"
_WHITESPACE = re.compile(r"\s+")


def _block_texts(container) -> Iterator[str]:
    """Paragraph and table-cell text in document order, including nested tables."""
    for block in container.iter_inner_content():
        if isinstance(block, Table):
            for row in block.rows:
                seen: list = []
                for cell in row.cells:
                    # 結合セルは同じセルが繰り返し返る
                    if cell._tc in seen:
                        continue
                    seen.append(cell._tc)
                    yield from _block_texts(cell)
        else:
            yield block.text


def extract_docx(content: bytes) -> str:
    doc = Document(io.BytesIO(content))
    return "\n".join(_block_texts(doc))


def extract_plain(content: bytes) -> str:
    return content.decode("utf-8", errors="replace")


def extract_html(content: bytes) -> str:
    soup = BeautifulSoup(content.decode("utf-8", errors="replace"), "html.parser")
    # スクリプトとスタイルは本文ごと除去
    for tag in soup(["script", "style"]):
        tag.decompose()
    text = soup.get_text(separator=" ")
    return _WHITESPACE.sub(" ", text).strip()


EXTRACTORS: dict[str, Callable[[bytes], str]] = {
    ".docx": extract_docx,
    ".txt": extract_plain,
    ".md": extract_plain,
    ".html": extract_html,
    ".htm": extract_html,
}


def get_extractor(filename: str) -> Callable[[bytes], str] | None:
    return EXTRACTORS.get(PurePath(filename).suffix.lower())


def extract_style_corpus(documents: Iterable[StyleDocument]) -> str:
    supported: list[tuple[StyleDocument, Callable[[bytes], str]]] = []
    for document in documents:
        extractor = get_extractor(document.filename)
        if extractor is None:
            logger.debug("Ignoring unsupported style file %s", document.filename)
            continue
        supported.append((document, extractor))

    texts = collect_successes(
        supported,
        lambda pair: pair[1](pair[0].content),
        label=lambda pair: pair[0].filename,
    )
    return CORPUS_SEPARATOR.join(text for text in texts if text)
