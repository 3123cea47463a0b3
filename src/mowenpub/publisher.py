"""Note publishing service.

Converts a markdown article into a Mowen document tree and submits it
through the note creation endpoint.
"""

from __future__ import annotations

from typing import Any

from mowenpub.config import Settings
from mowenpub.converter.builder import AtomBuilder
from mowenpub.converter.validation import find_schema_issues
from mowenpub.logger import logger
from mowenpub.mowen_client import MowenClient


class NotePublisher:
    """Service for publishing markdown articles as Mowen notes.

    Attributes:
        client: MowenClient used for image uploads and note creation
        builder: AtomBuilder converting markdown into atoms
        auto_publish: Whether created notes are published immediately

    """

    def __init__(
        self,
        *,
        client: MowenClient,
        builder: AtomBuilder,
        auto_publish: bool = True,
    ) -> None:
        """Initialize the publisher.

        Args:
            client: Configured MowenClient instance
            builder: AtomBuilder, normally resolving images through the same client
            auto_publish: Publish notes immediately instead of keeping drafts

        """
        self.client = client
        self.builder = builder
        self.auto_publish = auto_publish

    @classmethod
    def from_settings(cls, settings: Settings) -> NotePublisher:
        """Build a publisher and its client from application settings."""
        client = MowenClient(
            api_key=settings.mowen_api_key,
            api_url=settings.mowen_api_url,
            timeout=settings.mowen_timeout,
        )
        builder = AtomBuilder(
            resolver=client,
            image_align=settings.mowen_image_align,
            fallback_alt=settings.mowen_image_fallback_alt,
        )
        return cls(client=client, builder=builder, auto_publish=settings.mowen_auto_publish)

    async def build_payload(self, markdown: str) -> dict[str, Any]:
        """Build the exact request payload ``publish_note`` would send.

        Images are still uploaded, since their handles are part of the payload.
        """
        doc = await self.builder.build_document(markdown)
        return {"body": doc.to_dict(), "settings": {"autoPublish": self.auto_publish}}

    async def publish_note(self, title: str, markdown: str) -> dict[str, Any]:
        """Convert markdown and create a note from it.

        Args:
            title: Article title, used for logging
            markdown: Article body in markdown

        Returns:
            Decoded response of the note creation endpoint

        Raises:
            PublishError: If Mowen rejects the note or cannot be reached

        """
        logger.info("Converting and publishing note: %s", title)
        doc = await self.builder.build_document(markdown)
        body = doc.to_dict()

        for issue in find_schema_issues(body):
            logger.warning("Note payload issue: %s", issue)

        logger.info("Sending %d atoms to Mowen", len(body["content"]))
        result = await self.client.create_note(body, auto_publish=self.auto_publish)
        logger.info("[NOTE PUBLISHED] %s", title)
        return result

    async def close(self) -> None:
        """Close the underlying client."""
        await self.client.close()
