"""Base provider interface for chat-style multimodal generation."""

from typing import Protocol

from typing_extensions import runtime_checkable

from imagestudio.models.content import ChatTurn, ContentPart


@runtime_checkable
class ChatProvider(Protocol):
    """Protocol for chat generation providers."""

    @property
    def model_id(self) -> str:
        """Model identifier used for generation."""
        ...

    async def send_message(
        self,
        history: list[ChatTurn],
        message: list[ContentPart],
    ) -> list[ContentPart]:
        """
        Start a chat with the given history and send a new message.

        Args:
            history: Prior turns, oldest first
            message: Parts of the new user message (text and/or inline data)

        Returns:
            Content parts of the first reply candidate (empty if none)

        Raises:
            RetryableError: Provider failures classified with an ErrorCode
        """
        ...
