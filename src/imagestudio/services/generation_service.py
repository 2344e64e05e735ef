"""Generation handler: request translation, provider call, persistence."""

import asyncio
import json
import logging
import time
from datetime import datetime, timezone
from typing import Callable, Optional

from imagestudio.config import Settings
from imagestudio.interfaces import GenerationRepository
from imagestudio.models.content import ContentPart, InlineData
from imagestudio.models.errors import ErrorCode
from imagestudio.models.image_responses import GenerationOutput
from imagestudio.models.metrics import GenerationMetrics
from imagestudio.models.records import GenerationRecord
from imagestudio.models.requests import GenerationRequest
from imagestudio.models.responses import GenerationError, GenerationResponse
from imagestudio.providers.base import ChatProvider
from imagestudio.services.image_store import ImageStore
from imagestudio.services.retry_service import (
    RetryableError,
    build_retry_config,
    retry_with_backoff,
    should_retry,
)
from imagestudio.services.translation import build_message_parts, translate_history
from imagestudio.utils.data_url import PNG_MIME_TYPE, InvalidDataUrlError, build_data_url

logger = logging.getLogger(__name__)


def extract_reply(parts: list[ContentPart]) -> tuple[Optional[InlineData], Optional[str]]:
    """
    Pick the image and description out of a reply.

    Parts are scanned in order; when several images or texts are present the
    last one seen wins.
    """
    image: Optional[InlineData] = None
    description: Optional[str] = None

    for part in parts:
        if part.inline_data is not None:
            image = InlineData(
                data=part.inline_data.data,
                mime_type=part.inline_data.mime_type or PNG_MIME_TYPE,
            )
            logger.info(
                f"🖼️ [GenerationHandler] Image data received, {len(image.data)} bytes, MIME type {image.mime_type}"
            )
        elif part.text:
            description = part.text
            logger.info(f"💬 [GenerationHandler] Text response received: {description[:50]}...")

    return image, description


class GenerationHandler:
    """Handles one generation request end to end and returns a typed result."""

    def __init__(
        self,
        provider: ChatProvider,
        repository: GenerationRepository,
        image_store: ImageStore,
        settings: Settings | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        """
        Initialize generation handler.

        Args:
            provider: Chat provider used for generation
            repository: Store that receives one record per completed request
            image_store: Local storage for returned images
            settings: Retry/timeout options (single attempt, no timeout when omitted)
            clock: Returns the current UTC time for records
        """
        self.provider = provider
        self.repository = repository
        self.image_store = image_store
        self.max_attempts = settings.max_attempts if settings else 1
        self.timeout_seconds = settings.request_timeout_seconds if settings else None
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    async def generate(self, request: GenerationRequest) -> GenerationResponse[GenerationOutput]:
        """
        Generate (or edit) an image from the request.

        Args:
            request: Generation request

        Returns:
            GenerationResponse with the image/description or a classified error
        """
        start_time = time.time()
        attempts = 0

        if not request.prompt:
            return self._failure(ErrorCode.INVALID_INPUT, "Prompt is required", start_time)

        input_json = json.dumps({
            "prompt_length": len(request.prompt),
            "has_image": bool(request.image),
            "history_length": len(request.history or []),
        })

        try:
            history = translate_history(request.history)
            message = build_message_parts(request.prompt, request.image)
        except InvalidDataUrlError as e:
            logger.warning(f"⚠️ [GenerationHandler] Rejected input image: {e}")
            return self._failure(ErrorCode.INVALID_INPUT, str(e), start_time, input_json)

        if request.image:
            logger.info("✏️ [GenerationHandler] Processing image edit request")

        async def _send() -> list[ContentPart]:
            nonlocal attempts
            attempts += 1
            return await self.provider.send_message(history, message)

        try:
            reply = await retry_with_backoff(
                _send,
                retry_config=build_retry_config(self.max_attempts),
                timeout_seconds=self.timeout_seconds,
            )
        except RetryableError as e:
            logger.error(f"❌ [GenerationHandler] Provider call failed: {e.message}")
            return self._failure(
                e.error_code,
                e.message,
                start_time,
                input_json,
                retry_count=max(attempts - 1, 0),
            )
        except Exception as e:
            logger.error(f"❌ [GenerationHandler] Unexpected provider failure: {str(e)}", exc_info=True)
            return self._failure(
                ErrorCode.INTERNAL_ERROR,
                f"Generation failed: {str(e)}",
                start_time,
                input_json,
                retry_count=max(attempts - 1, 0),
            )

        image, description = extract_reply(reply)
        output = GenerationOutput(
            image=build_data_url(image.data, image.mime_type) if image else None,
            description=description,
            mime_type=image.mime_type if image else None,
        )

        if image is not None:
            try:
                output.image_path = await asyncio.to_thread(self.image_store.save, image.data, image.mime_type)
            except Exception as e:
                logger.error(f"❌ [GenerationHandler] Error storing image: {e}", exc_info=True)
                output.persistence_errors.append(self._persistence_error("Could not store image", e))

        record = GenerationRecord(prompt=request.prompt, image_path=output.image_path, created_at=self._clock())
        try:
            await asyncio.to_thread(self.repository.append, record)
        except Exception as e:
            logger.error(f"❌ [GenerationHandler] Error saving generation record: {e}", exc_info=True)
            output.persistence_errors.append(self._persistence_error("Could not save generation record", e))

        metrics = GenerationMetrics(
            duration_ms=int((time.time() - start_time) * 1000),
            model_used=self.provider.model_id,
            retry_count=max(attempts - 1, 0),
            timestamp=datetime.now(timezone.utc),
            input=input_json,
            output=json.dumps({
                "image_bytes": len(image.data) if image else 0,
                "description_length": len(description) if description else 0,
                "image_path": output.image_path,
            }),
        )

        return GenerationResponse[GenerationOutput](success=True, data=output, metrics=metrics)

    def list_records(self) -> list[GenerationRecord]:
        """Return all stored generation records."""
        return self.repository.list()

    @staticmethod
    def _persistence_error(message: str, exception: Exception) -> GenerationError:
        return GenerationError(
            code=ErrorCode.PERSISTENCE_FAILED,
            message=f"{message}: {str(exception)}",
            retryable=False,
        )

    @staticmethod
    def _failure(
        code: ErrorCode,
        message: str,
        start_time: float,
        input_json: str | None = None,
        retry_count: int = 0,
    ) -> GenerationResponse[GenerationOutput]:
        return GenerationResponse[GenerationOutput](
            success=False,
            error=GenerationError(
                code=code,
                message=message,
                retryable=should_retry(code),
            ),
            metrics=GenerationMetrics(
                duration_ms=int((time.time() - start_time) * 1000),
                retry_count=retry_count,
                timestamp=datetime.now(timezone.utc),
                input=input_json,
            ),
        )
