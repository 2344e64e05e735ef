"""Google Gemini chat provider."""

import logging

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from imagestudio.config import Settings
from imagestudio.models.content import ChatTurn, ContentPart
from imagestudio.models.errors import ErrorCode
from imagestudio.services.retry_service import RetryableError

logger = logging.getLogger(__name__)


def to_gemini_part(part: ContentPart) -> types.Part:
    """Convert a content part to the SDK's Part type."""
    if part.inline_data is not None:
        return types.Part.from_bytes(data=part.inline_data.data, mime_type=part.inline_data.mime_type)
    return types.Part(text=part.text)


def to_gemini_content(turn: ChatTurn) -> types.Content:
    return types.Content(role=turn.role.value, parts=[to_gemini_part(part) for part in turn.parts])


def from_gemini_part(part: types.Part) -> ContentPart | None:
    """Convert an SDK Part to a content part. Parts with neither image nor text yield None."""
    if part.inline_data is not None and part.inline_data.data:
        return ContentPart.from_bytes(part.inline_data.data, part.inline_data.mime_type or "image/png")
    if part.text:
        return ContentPart.from_text(part.text)
    return None


class GeminiChatProvider:
    """Chat provider using the Gemini API via google-genai."""

    def __init__(self, settings: Settings, client: genai.Client | None = None):
        """
        Initialize Gemini provider.

        Args:
            settings: Application settings (API key, model and sampling options)
            client: Optional preconfigured google-genai client
        """
        self.settings = settings
        self.client = client or genai.Client(api_key=settings.gemini_api_key)
        self.generation_config = types.GenerateContentConfig(
            temperature=settings.temperature,
            top_p=settings.top_p,
            top_k=settings.top_k,
            response_modalities=settings.response_modalities,
        )

    @property
    def model_id(self) -> str:
        return self.settings.model_id

    async def send_message(
        self,
        history: list[ChatTurn],
        message: list[ContentPart],
    ) -> list[ContentPart]:
        """
        Send a message in a new chat seeded with history.

        Raises:
            RetryableError: With RATE_LIMITED, PROVIDER_OVERLOADED, PROVIDER_REJECTED,
                PROVIDER_TIMEOUT or INTERNAL_ERROR depending on the failure
        """
        try:
            chat = self.client.aio.chats.create(
                model=self.settings.model_id,
                config=self.generation_config,
                history=[to_gemini_content(turn) for turn in history],
            )
            logger.info(f"📤 [GeminiProvider] Sending message with {len(message)} parts")
            response = await chat.send_message([to_gemini_part(part) for part in message])

        except genai_errors.APIError as e:
            if e.code == 429:
                raise RetryableError(
                    ErrorCode.RATE_LIMITED,
                    f"Gemini rate limit exceeded: {str(e)}",
                    original_exception=e,
                )
            if e.code is not None and e.code >= 500:
                raise RetryableError(
                    ErrorCode.PROVIDER_OVERLOADED,
                    f"Gemini server error {e.code}: {str(e)}",
                    original_exception=e,
                )
            # Non-retryable error (4xx client errors)
            raise RetryableError(
                ErrorCode.PROVIDER_REJECTED,
                f"Gemini API error: {str(e)}",
                original_exception=e,
            )
        except httpx.TimeoutException as e:
            raise RetryableError(
                ErrorCode.PROVIDER_TIMEOUT,
                f"Gemini request timed out: {str(e)}",
                original_exception=e,
            )
        except Exception as e:
            raise RetryableError(
                ErrorCode.INTERNAL_ERROR,
                f"Gemini generation failed: {str(e)}",
                original_exception=e,
            )

        if not response.candidates:
            logger.warning("⚠️ [GeminiProvider] Response contained no candidates")
            return []

        content = response.candidates[0].content
        sdk_parts = (content.parts if content else None) or []
        logger.info(f"📥 [GeminiProvider] Number of parts in response: {len(sdk_parts)}")

        parts = [converted for converted in (from_gemini_part(part) for part in sdk_parts) if converted is not None]
        return parts
