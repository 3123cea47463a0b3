"""Mowen note atoms.

An atom is one node of the document tree accepted by the Mowen
``note/create`` endpoint. Atoms serialize to plain dicts with the keys
``type``, ``text``, ``attrs``, ``marks`` and ``content``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from typing import Any

LINK_TARGET_BLANK = "_blank"


def _frozen_attrs(attrs: Mapping[str, str]) -> Mapping[str, str]:
    return MappingProxyType(dict(attrs))


class AtomKind(StrEnum):
    """Node types of the Mowen document schema."""

    DOC = "doc"
    PARAGRAPH = "paragraph"
    HEADING = "heading"
    QUOTE = "quote"
    IMAGE = "image"
    TEXT = "text"
    LIST_ITEM = "list_item"
    ORDERED_LIST = "ordered_list"
    BULLET_LIST = "bullet_list"


class MarkKind(StrEnum):
    """Inline annotations that can be attached to a text atom."""

    BOLD = "bold"
    ITALIC = "italic"
    LINK = "link"


@dataclass(frozen=True, slots=True, kw_only=True)
class Mark:
    """Inline style attached to a text atom.

    Attributes:
        kind: Mark type
        attrs: Read-only mark attributes, e.g. ``href`` and ``target`` for links

    """

    kind: MarkKind
    attrs: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "attrs", _frozen_attrs(self.attrs))

    def __hash__(self) -> int:
        return hash((self.kind, frozenset(self.attrs.items())))

    @classmethod
    def link(cls, href: str) -> Mark:
        """Create a link mark that opens in a new tab."""
        return cls(kind=MarkKind.LINK, attrs={"href": href, "target": LINK_TARGET_BLANK})

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": str(self.kind)}
        if self.attrs:
            data["attrs"] = dict(self.attrs)
        return data


@dataclass(frozen=True, slots=True, kw_only=True)
class Atom:
    """A node of the Mowen document tree.

    Attributes:
        kind: Node type
        text: Literal payload, only set on text atoms
        attrs: Read-only scalar metadata; values are always strings
        marks: Inline marks, only meaningful on text atoms
        children: Child atoms for block nodes, None for leaf nodes

    """

    kind: AtomKind
    text: str | None = None
    attrs: Mapping[str, str] = field(default_factory=dict)
    marks: tuple[Mark, ...] = ()
    children: tuple[Atom, ...] | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "attrs", _frozen_attrs(self.attrs))

    def __hash__(self) -> int:
        return hash(
            (self.kind, self.text, frozenset(self.attrs.items()), self.marks, self.children)
        )

    @classmethod
    def block(
        cls,
        kind: AtomKind,
        children: list[Atom] | tuple[Atom, ...],
        attrs: dict[str, str] | None = None,
    ) -> Atom:
        """Create a block atom owning the given children."""
        return cls(kind=kind, attrs=attrs or {}, children=tuple(children))

    @classmethod
    def text_node(cls, text: str, *marks: Mark) -> Atom:
        """Create a text atom with optional marks."""
        return cls(kind=AtomKind.TEXT, text=text, marks=marks)

    @classmethod
    def image(cls, *, uuid: str, alt: str, align: str) -> Atom:
        """Create an image atom referencing an uploaded file."""
        return cls(kind=AtomKind.IMAGE, attrs={"uuid": uuid, "alt": alt, "align": align})

    @classmethod
    def document(cls, children: list[Atom] | tuple[Atom, ...]) -> Atom:
        """Wrap root-level atoms in the ``doc`` root node."""
        return cls.block(AtomKind.DOC, children)

    @property
    def is_leaf(self) -> bool:
        return self.children is None

    def to_dict(self) -> dict[str, Any]:
        """Serialize the atom and its subtree to a JSON-compatible dict.

        Empty attrs and marks are omitted. ``content`` is present on every
        block atom, even when empty, and absent on leaf atoms.

        Returns:
            Dictionary in the shape expected by the Mowen note API

        """
        data: dict[str, Any] = {"type": str(self.kind)}
        if self.text is not None:
            data["text"] = self.text
        if self.attrs:
            data["attrs"] = dict(self.attrs)
        if self.marks:
            data["marks"] = [mark.to_dict() for mark in self.marks]
        if self.children is not None:
            data["content"] = [child.to_dict() for child in self.children]
        return data
