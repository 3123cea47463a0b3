"""Shared fixtures for unit tests."""

import pytest

from mowenpub.converter.builder import AtomBuilder
from mowenpub.mowen_client import ImageUpload


class StubResolver:
    """In-memory image host recording every upload request."""

    def __init__(self, *, fail: bool = False) -> None:
        self.fail = fail
        self.calls: list[str] = []

    async def upload_image(self, source_url: str) -> ImageUpload:
        self.calls.append(source_url)
        if self.fail:
            return ImageUpload.failed("upload refused")
        return ImageUpload(file_id=f"file:{source_url}", error=None)


@pytest.fixture
def resolver() -> StubResolver:
    """Create a resolver that accepts every image."""
    return StubResolver()


@pytest.fixture
def failing_resolver() -> StubResolver:
    """Create a resolver that rejects every image."""
    return StubResolver(fail=True)


@pytest.fixture
def builder(resolver: StubResolver) -> AtomBuilder:
    """Create an AtomBuilder backed by the accepting resolver."""
    return AtomBuilder(resolver=resolver)


@pytest.fixture
def failing_builder(failing_resolver: StubResolver) -> AtomBuilder:
    """Create an AtomBuilder whose image uploads always fail."""
    return AtomBuilder(resolver=failing_resolver)
