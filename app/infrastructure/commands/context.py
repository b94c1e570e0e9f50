"""Command execution context - platform agnostic."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Protocol
from uuid import uuid4

from core.logging import get_module_logger

logger = get_module_logger()


class ResponseChannel(Protocol):
    """Protocol for platform-specific response channels."""

    def send_message(self, text: str, **kwargs) -> None:
        """Send message to user."""
        ...  # pylint: disable=unnecessary-ellipsis

    def send_ephemeral(self, text: str, **kwargs) -> None:
        """Send ephemeral message (visible only to user)."""
        ...  # pylint: disable=unnecessary-ellipsis


@dataclass
class CommandContext:
    """Platform-agnostic command execution context.

    One context is created per inbound message by the platform adapter and
    handed to guards and handlers.

    Attributes:
        platform: Platform name (discord, slack, api)
        user_id: Platform-specific identifier of the user who sent the command
        channel_id: Platform-specific channel identifier
        metadata: Platform-specific payload (e.g. the raw message event)
        correlation_id: Request identifier for log correlation

    Example:
        async def ping(ctx: CommandContext, args: ArgumentSet):
            ctx.respond("pong")
    """

    platform: str
    user_id: str
    channel_id: str = ""
    metadata: Dict[str, Any] = field(default_factory=dict)
    correlation_id: Optional[str] = None

    # Injected by adapter
    _responder: Optional[ResponseChannel] = field(default=None)

    def __post_init__(self):
        """Initialize defaults."""
        if self.metadata is None:
            self.metadata = {}
        if self.correlation_id is None:
            self.correlation_id = str(uuid4())

    def respond(self, text: str, **kwargs) -> None:
        """Send response message to user.

        Args:
            text: Message text
            **kwargs: Platform-specific options
        """
        if self._responder is None:
            logger.warning("respond called without responder set", text=text)
            return
        self._responder.send_message(text, **kwargs)

    def respond_ephemeral(self, text: str, **kwargs) -> None:
        """Send ephemeral message (visible only to user).

        Args:
            text: Message text
            **kwargs: Platform-specific options
        """
        if self._responder is None:
            logger.warning("respond_ephemeral called without responder set", text=text)
            return
        self._responder.send_ephemeral(text, **kwargs)

    def set_responder(self, responder: ResponseChannel) -> None:
        """Set the response channel."""
        self._responder = responder
