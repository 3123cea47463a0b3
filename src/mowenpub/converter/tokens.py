"""Markdown tokenization using mistune's AST mode.

Tokens are the plain dicts mistune v3 produces: a ``type`` tag, optional
``children``, ``raw`` text on leaves and ``attrs`` on links, images,
headings and lists.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

import mistune

Token = dict[str, Any]


class TokenKind(StrEnum):
    """Token types the atom builder knows about."""

    PARAGRAPH = "paragraph"
    HEADING = "heading"
    BLOCK_QUOTE = "block_quote"
    IMAGE = "image"
    TEXT = "text"
    STRONG = "strong"
    EMPHASIS = "emphasis"
    LINK = "link"
    LIST = "list"
    LIST_ITEM = "list_item"
    # Inline container mistune uses for the content of tight list items
    BLOCK_TEXT = "block_text"
    SOFTBREAK = "softbreak"
    BLANK_LINE = "blank_line"
    THEMATIC_BREAK = "thematic_break"
    LINEBREAK = "linebreak"
    BLOCK_HTML = "block_html"
    INLINE_HTML = "inline_html"


# Layout-only tokens that never produce an atom
CONTROL_KINDS: frozenset[TokenKind] = frozenset({
    TokenKind.BLANK_LINE,
    TokenKind.THEMATIC_BREAK,
    TokenKind.LINEBREAK,
    TokenKind.BLOCK_HTML,
    TokenKind.INLINE_HTML,
})

_BREAK_KINDS = frozenset({TokenKind.SOFTBREAK, TokenKind.LINEBREAK})


def classify(token: Token) -> TokenKind | None:
    """Return the kind of a token, or None for types outside the known set."""
    try:
        return TokenKind(token.get("type", ""))
    except ValueError:
        return None


def flatten_text(token: Token) -> str:
    """Concatenate the raw text of a token and all of its descendants.

    Breaks become newlines. Markup such as emphasis markers is not
    reconstructed, only the text it wraps.
    """
    if classify(token) in _BREAK_KINDS:
        return "\n"
    children = token.get("children")
    if children:
        return "".join(flatten_text(child) for child in children)
    raw = token.get("raw", "")
    return raw if isinstance(raw, str) else ""


class MarkdownTokenizer:
    """Parses markdown into mistune's token tree.

    A single instance is reusable; each call parses into fresh tokens.
    """

    def __init__(self) -> None:
        self._markdown = mistune.create_markdown(renderer=None)

    def tokenize(self, markdown: str) -> list[Token]:
        """Tokenize a markdown document.

        Args:
            markdown: Markdown source text.

        Returns:
            Root-level block tokens in document order.

        """
        tokens = self._markdown(markdown)
        # mistune only returns a string when an HTML renderer is attached
        if isinstance(tokens, str):
            return []
        return list(tokens)
