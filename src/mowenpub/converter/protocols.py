"""Protocol definitions for the converter package.

Contains structural typing protocols for the collaborators the atom
builder depends on, so tests and alternative image hosts can be plugged in.
"""

from typing import Protocol

from mowenpub.mowen_client import ImageUpload


class ImageResolver(Protocol):
    """Protocol defining the interface for image hosts.

    Implementations should:
    - Make exactly one upload attempt per call
    - Return a failed ImageUpload instead of raising on any upload problem
    """

    async def upload_image(self, source_url: str) -> ImageUpload:
        """Upload an image referenced by URL.

        Args:
            source_url: Public URL of the image to upload.

        Returns:
            ImageUpload holding the file handle, or the failure reason.

        """
        ...
