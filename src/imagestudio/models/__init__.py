"""Models package for imagestudio."""

from imagestudio.models.content import ChatTurn, ContentPart, InlineData
from imagestudio.models.errors import ErrorCode, is_retryable
from imagestudio.models.image_responses import GenerationOutput
from imagestudio.models.metrics import GenerationMetrics
from imagestudio.models.records import GenerationRecord
from imagestudio.models.requests import GenerationRequest, HistoryItem, HistoryPart, Role
from imagestudio.models.responses import GenerationError, GenerationResponse

__all__ = [
    "ChatTurn",
    "ContentPart",
    "ErrorCode",
    "is_retryable",
    "GenerationError",
    "GenerationMetrics",
    "GenerationOutput",
    "GenerationRecord",
    "GenerationRequest",
    "GenerationResponse",
    "HistoryItem",
    "HistoryPart",
    "InlineData",
    "Role",
]
