"""imagestudio - Gemini image generation endpoint with local persistence."""

from imagestudio.config import Settings
from imagestudio.interfaces import GenerationRepository
from imagestudio.models.content import ChatTurn, ContentPart, InlineData
from imagestudio.models.errors import ErrorCode, is_retryable
from imagestudio.models.image_responses import GenerationOutput
from imagestudio.models.metrics import GenerationMetrics
from imagestudio.models.records import GenerationRecord
from imagestudio.models.requests import GenerationRequest, HistoryItem, HistoryPart, Role
from imagestudio.models.responses import GenerationError, GenerationResponse
from imagestudio.providers.base import ChatProvider
from imagestudio.services.generation_service import GenerationHandler
from imagestudio.services.image_store import ImageStore
from imagestudio.services.record_store import InMemoryGenerationRepository, JsonFileGenerationRepository
from imagestudio.services.retry_service import RetryableError

__version__ = "0.1.0"

__all__ = [
    # Configuration
    "Settings",
    # Interfaces
    "ChatProvider",
    "GenerationRepository",
    # Request types
    "GenerationRequest",
    "HistoryItem",
    "HistoryPart",
    "Role",
    # Content types
    "ChatTurn",
    "ContentPart",
    "InlineData",
    # Response/Error types
    "GenerationResponse",
    "GenerationError",
    "GenerationOutput",
    "GenerationMetrics",
    "GenerationRecord",
    "ErrorCode",
    "is_retryable",
    "RetryableError",
    # Services
    "GenerationHandler",
    "ImageStore",
    "InMemoryGenerationRepository",
    "JsonFileGenerationRepository",
]
