"""Plain-text ledes from Markdown bodies."""

import re
from typing import List

from markdown_it import MarkdownIt
from markdown_it.token import Token

_md = MarkdownIt("commonmark")

# Inline tokens whose ``content`` is visible text.
_TEXT_TOKENS = {"text", "code_inline"}
_BREAK_TOKENS = {"softbreak", "hardbreak"}


def _inline_text(inline: Token) -> str:
    parts: List[str] = []
    for child in inline.children or []:
        if child.type in _TEXT_TOKENS:
            parts.append(child.content)
        elif child.type in _BREAK_TOKENS:
            parts.append(" ")
        # images, raw html and link/emphasis markers carry no prose
    return re.sub(r"\s+", " ", "".join(parts)).strip()


def _paragraphs(markdown: str) -> List[str]:
    """Plain text of every paragraph, in document order.

    Headings, code blocks and html blocks are not paragraphs and never show up.
    """
    tokens = _md.parse(markdown)
    return [
        _inline_text(tokens[i + 1])
        for i, tok in enumerate(tokens)
        if tok.type == "paragraph_open" and i + 1 < len(tokens) and tokens[i + 1].type == "inline"
    ]


def strip_markdown(text: str) -> str:
    """Flatten a Markdown fragment to a single line of plain text."""
    return " ".join(p for p in _paragraphs(text) if p)


def lede(markdown: str, max_paragraphs: int) -> str:
    """Return the first *max_paragraphs* prose paragraphs as plain text."""
    kept = [p for p in _paragraphs(markdown) if p][:max_paragraphs]
    return "\n\n".join(kept)
