"""Shared pytest fixtures for imagestudio tests."""

import base64

import pytest

from imagestudio.config import Settings
from imagestudio.models.content import ChatTurn, ContentPart
from imagestudio.services.generation_service import GenerationHandler
from imagestudio.services.image_store import ImageStore
from imagestudio.services.record_store import InMemoryGenerationRepository, JsonFileGenerationRepository
from imagestudio.services.retry_service import RetryableError

# 1x1 transparent PNG
PNG_BYTES = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mNkYAAAAAYAAjCB0C8AAAAASUVORK5CYII="
)
PNG_DATA_URL = "data:image/png;base64," + base64.b64encode(PNG_BYTES).decode("ascii")
JPEG_BYTES = b"\xff\xd8\xff\xe0fake-jpeg"
JPEG_DATA_URL = "data:image/jpeg;base64," + base64.b64encode(JPEG_BYTES).decode("ascii")


class MockChatProvider:
    """Mock chat provider for testing."""

    def __init__(
        self,
        reply: list[ContentPart] | None = None,
        error: Exception | None = None,
        fail_count: int = 0,
    ):
        """
        Initialize mock provider.

        Args:
            reply: Parts returned on success
            error: Exception raised on failing calls
            fail_count: Number of calls that raise before succeeding (all calls if error and 0)
        """
        self.reply = reply if reply is not None else []
        self.error = error
        self.fail_count = fail_count
        self.calls: list[tuple[list[ChatTurn], list[ContentPart]]] = []

    @property
    def model_id(self) -> str:
        return "mock-model"

    async def send_message(self, history: list[ChatTurn], message: list[ContentPart]) -> list[ContentPart]:
        self.calls.append((history, message))
        if self.error is not None and (self.fail_count == 0 or len(self.calls) <= self.fail_count):
            raise self.error
        return self.reply

    @property
    def call_count(self) -> int:
        return len(self.calls)


@pytest.fixture
def png_bytes():
    return PNG_BYTES


@pytest.fixture
def png_data_url():
    return PNG_DATA_URL


@pytest.fixture
def jpeg_bytes():
    return JPEG_BYTES


@pytest.fixture
def jpeg_data_url():
    return JPEG_DATA_URL


@pytest.fixture
def make_provider():
    """Factory fixture building MockChatProvider instances."""
    return MockChatProvider


@pytest.fixture
def settings(tmp_path):
    """Settings pointing all storage at a temporary directory."""
    return Settings(
        gemini_api_key="test-key",
        image_dir=tmp_path / "public" / "generated-images",
        records_path=tmp_path / "data" / "generatedImages.json",
    )


@pytest.fixture
def image_store(settings):
    return ImageStore(settings.image_dir, url_prefix=settings.image_url_prefix)


@pytest.fixture
def json_repository(settings):
    return JsonFileGenerationRepository(settings.records_path)


@pytest.fixture
def memory_repository():
    return InMemoryGenerationRepository()


@pytest.fixture
def image_reply():
    """Provider reply with a description and a PNG image."""
    return [
        ContentPart.from_text("A red dragon over a castle"),
        ContentPart.from_bytes(PNG_BYTES, "image/png"),
    ]


@pytest.fixture
def mock_provider(image_reply):
    """Fixture for a working mock provider returning an image."""
    return MockChatProvider(reply=image_reply)


@pytest.fixture
def failing_provider():
    """Fixture for a provider that always fails with a non-retryable error."""
    from imagestudio.models.errors import ErrorCode

    return MockChatProvider(error=RetryableError(ErrorCode.PROVIDER_REJECTED, "Gemini API error: bad request"))


@pytest.fixture
def handler(mock_provider, json_repository, image_store, settings):
    return GenerationHandler(
        provider=mock_provider,
        repository=json_repository,
        image_store=image_store,
        settings=settings,
    )
