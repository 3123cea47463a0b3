"""Converter package for turning markdown into Mowen note atoms.

Pipeline: markdown -> mistune tokens -> atom tree -> serialized ``doc`` payload.
"""

from mowenpub.converter.atoms import Atom, AtomKind, Mark, MarkKind
from mowenpub.converter.builder import AtomBuilder
from mowenpub.converter.protocols import ImageResolver
from mowenpub.converter.tokens import MarkdownTokenizer, TokenKind
from mowenpub.converter.validation import find_schema_issues

__all__ = [
    "Atom",
    "AtomBuilder",
    "AtomKind",
    "ImageResolver",
    "Mark",
    "MarkKind",
    "MarkdownTokenizer",
    "TokenKind",
    "find_schema_issues",
]
