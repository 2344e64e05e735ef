"""Translation of request history and message into provider chat turns."""

import logging
from typing import Optional

from imagestudio.models.content import ChatTurn, ContentPart
from imagestudio.models.requests import HistoryItem, HistoryPart
from imagestudio.utils.data_url import InvalidDataUrlError, parse_data_url

logger = logging.getLogger(__name__)


def translate_part(part: HistoryPart) -> Optional[ContentPart]:
    """Map a history part to a content part, or None if it carries nothing usable."""
    if part.text:
        return ContentPart.from_text(part.text)

    if part.image:
        try:
            data, mime_type = parse_data_url(part.image, strict=False)
        except InvalidDataUrlError as e:
            logger.warning(f"⚠️ [Translation] Dropping unreadable history image: {e}")
            return None
        return ContentPart.from_bytes(data, mime_type)

    return None


def translate_history(history: Optional[list[HistoryItem]]) -> list[ChatTurn]:
    """
    Convert request history into the provider's alternating role/parts structure.

    Parts that yield neither text nor image are dropped, and turns left with
    no parts are dropped entirely. Order is preserved.

    Args:
        history: Prior chat turns from the request (may be None or empty)

    Returns:
        List of translated chat turns
    """
    turns: list[ChatTurn] = []
    for item in history or []:
        parts = [content for content in (translate_part(part) for part in item.parts) if content is not None]
        if not parts:
            continue
        turns.append(ChatTurn(role=item.role, parts=parts))
    return turns


def build_message_parts(prompt: str, image: Optional[str] = None) -> list[ContentPart]:
    """
    Build the parts of the new message: the prompt, then the optional input image.

    Raises:
        InvalidDataUrlError: If the input image is not a base64 data URL
    """
    parts = [ContentPart.from_text(prompt)]

    if image:
        data, mime_type = parse_data_url(image, strict=True)
        logger.info(f"🖼️ [Translation] Input image attached: {len(data)} bytes, MIME type {mime_type}")
        parts.append(ContentPart.from_bytes(data, mime_type))

    return parts
