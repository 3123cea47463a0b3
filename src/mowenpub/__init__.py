"""mowenpub - Markdown to Mowen note publisher.

Converts markdown articles into Mowen document trees, uploading images
along the way, and publishes them as notes.
"""

from mowenpub.config import Settings, settings
from mowenpub.converter import Atom, AtomBuilder, AtomKind, Mark, MarkKind
from mowenpub.mowen_client import ImageUpload, MowenClient
from mowenpub.publisher import NotePublisher

__version__ = "0.1.0"

__all__ = [
    "Atom",
    "AtomBuilder",
    "AtomKind",
    "ImageUpload",
    "Mark",
    "MarkKind",
    "MowenClient",
    "NotePublisher",
    "Settings",
    "__version__",
    "settings",
]
