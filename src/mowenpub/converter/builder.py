"""Markdown to Mowen atom tree conversion.

The builder walks mistune's token tree depth-first and compiles each token
into an atom. Image tokens are uploaded through an ImageResolver while the
walk is suspended, so uploads happen one at a time in document order.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable

from mowenpub.converter.atoms import Atom, AtomKind, Mark, MarkKind
from mowenpub.converter.protocols import ImageResolver
from mowenpub.converter.tokens import (
    CONTROL_KINDS,
    MarkdownTokenizer,
    Token,
    TokenKind,
    classify,
    flatten_text,
)
from mowenpub.logger import logger

TokenConverter = Callable[[Token], Awaitable[Atom | None]]

# List item children whose inline content is merged into the item's paragraph
_ITEM_INLINE_WRAPPERS = frozenset({TokenKind.BLOCK_TEXT, TokenKind.PARAGRAPH})


class AtomBuilder:
    """Converts markdown into Mowen note atoms.

    Holds no per-document state: one instance can convert any number of
    documents, and every call returns a freshly built tree.
    """

    def __init__(
        self,
        *,
        resolver: ImageResolver,
        image_align: str = "center",
        fallback_alt: str = "图片",
        tokenizer: MarkdownTokenizer | None = None,
    ) -> None:
        """Initialize the builder.

        Args:
            resolver: Image host used to upload every image in the document.
            image_align: Alignment written to image atoms.
            fallback_alt: Link text used when a failed image has no alt text.
            tokenizer: Markdown tokenizer, a default mistune one if omitted.

        """
        self._resolver = resolver
        self._image_align = image_align
        self._fallback_alt = fallback_alt
        self._tokenizer = tokenizer or MarkdownTokenizer()
        self._converters: dict[TokenKind, TokenConverter] = {
            TokenKind.PARAGRAPH: self._convert_paragraph,
            TokenKind.HEADING: self._convert_heading,
            TokenKind.BLOCK_QUOTE: self._convert_block_quote,
            TokenKind.IMAGE: self._convert_image,
            TokenKind.TEXT: self._convert_text,
            TokenKind.BLOCK_TEXT: self._convert_text,
            TokenKind.SOFTBREAK: self._convert_softbreak,
            TokenKind.STRONG: self._convert_strong,
            TokenKind.EMPHASIS: self._convert_emphasis,
            TokenKind.LINK: self._convert_link,
            TokenKind.LIST: self._convert_list,
        }

    async def convert(self, markdown: str) -> list[Atom]:
        """Convert a markdown document to root-level atoms.

        Args:
            markdown: Markdown source text.

        Returns:
            Root-level atoms in document order, not yet wrapped in a doc node.

        """
        logger.debug("[CONVERSION STARTED] %d characters of markdown", len(markdown))
        tokens = self._tokenizer.tokenize(markdown)
        atoms = await self.convert_tokens(tokens)
        logger.debug("Converted %d root tokens into %d atoms", len(tokens), len(atoms))
        return atoms

    async def build_document(self, markdown: str) -> Atom:
        """Convert a markdown document and wrap the result in a ``doc`` atom."""
        return Atom.document(await self.convert(markdown))

    async def convert_tokens(self, tokens: Iterable[Token]) -> list[Atom]:
        """Convert a token sequence, dropping tokens that produce no atom."""
        atoms: list[Atom] = []
        for token in tokens:
            atom = await self._convert_token(token)
            if atom is not None:
                atoms.append(atom)
        return atoms

    async def _convert_token(self, token: Token) -> Atom | None:
        kind = classify(token)
        if kind in CONTROL_KINDS:
            return None

        converter = self._converters.get(kind) if kind is not None else None
        if converter is None:
            logger.warning("Skipping unsupported markdown token: %s", token.get("type"))
            return None

        return await converter(token)

    async def _convert_children(self, token: Token) -> list[Atom]:
        return await self.convert_tokens(token.get("children") or [])

    async def _convert_paragraph(self, token: Token) -> Atom:
        children = await self._convert_children(token)

        # Images are block level in Mowen, so a lone image replaces its paragraph.
        # A lone image that fell back to a link paragraph is promoted the same way.
        if len(children) == 1 and (
            children[0].kind is AtomKind.IMAGE or _is_lone_image(token)
        ):
            return children[0]

        return Atom.block(AtomKind.PARAGRAPH, children or [self._fallback_text(token)])

    async def _convert_heading(self, token: Token) -> Atom:
        children = await self._convert_children(token)
        level = (token.get("attrs") or {}).get("level", 1)
        # Mowen rejects numeric heading levels
        return Atom.block(
            AtomKind.HEADING,
            children or [self._fallback_text(token)],
            attrs={"level": str(level)},
        )

    async def _convert_block_quote(self, token: Token) -> Atom:
        return Atom.block(AtomKind.QUOTE, await self._convert_children(token))

    async def _convert_image(self, token: Token) -> Atom:
        url = str((token.get("attrs") or {}).get("url", ""))
        alt = flatten_text(token)

        upload = await self._resolver.upload_image(url)
        if upload.ok:
            return Atom.image(uuid=str(upload.file_id), alt=alt, align=self._image_align)

        logger.warning("Using link fallback for image %s: %s", url, upload.error)
        link_text = f"[{alt or self._fallback_alt}]({url})"
        return Atom.block(AtomKind.PARAGRAPH, [Atom.text_node(link_text)])

    async def _convert_text(self, token: Token) -> Atom:
        return Atom.text_node(flatten_text(token))

    async def _convert_softbreak(self, token: Token) -> Atom:
        return Atom.text_node("\n")

    async def _convert_strong(self, token: Token) -> Atom:
        return Atom.text_node(flatten_text(token), Mark(kind=MarkKind.BOLD))

    async def _convert_emphasis(self, token: Token) -> Atom:
        return Atom.text_node(flatten_text(token), Mark(kind=MarkKind.ITALIC))

    async def _convert_link(self, token: Token) -> Atom:
        # Nested marks inside the link text are flattened away
        href = str((token.get("attrs") or {}).get("url", ""))
        return Atom.text_node(flatten_text(token), Mark.link(href))

    async def _convert_list(self, token: Token) -> Atom:
        items: list[Atom] = []
        for item in token.get("children") or []:
            if classify(item) is not TokenKind.LIST_ITEM:
                continue
            items.append(await self._convert_list_item(item))

        ordered = bool((token.get("attrs") or {}).get("ordered", False))
        kind = AtomKind.ORDERED_LIST if ordered else AtomKind.BULLET_LIST
        return Atom.block(kind, items)

    async def _convert_list_item(self, item: Token) -> Atom:
        """Normalize a list item to list_item > paragraph > content.

        Tight items hold their inline tokens in a block_text wrapper and loose
        items in a paragraph. Both wrappers are unwrapped here, so every item
        ends up with exactly one paragraph child whatever the source shape.
        """
        content: list[Atom] = []
        for child in item.get("children") or []:
            if classify(child) in _ITEM_INLINE_WRAPPERS:
                content.extend(await self._convert_children(child))
                continue
            atom = await self._convert_token(child)
            if atom is not None:
                content.append(atom)

        return Atom.block(AtomKind.LIST_ITEM, [Atom.block(AtomKind.PARAGRAPH, content)])

    def _fallback_text(self, token: Token) -> Atom:
        return Atom.text_node(flatten_text(token))


def _is_lone_image(token: Token) -> bool:
    content = [
        child for child in token.get("children") or [] if classify(child) not in CONTROL_KINDS
    ]
    return len(content) == 1 and classify(content[0]) is TokenKind.IMAGE
