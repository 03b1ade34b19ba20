"""Notification message types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol


@dataclass(frozen=True)
class NotificationMessage:
    """One notification for an exchange user or for the operator.

    recipient_id is the exchange user the message is addressed to; None marks an
    operator message such as system started/stopped. Activity messages carry the
    status alias (trade-sent, payment-made, ...) in payload["alias"].
    """

    event_type: str
    message: str
    title: str | None = None
    recipient_id: str | None = None
    payload: dict[str, Any] | None = None

    @property
    def alias(self) -> str:
        """Activity alias, or the event type for non-activity messages."""
        alias = (self.payload or {}).get("alias")
        return str(alias) if alias else self.event_type

    @property
    def is_operator_message(self) -> bool:
        return self.recipient_id is None


class NotificationStyler(Protocol):
    """Render a message into a formatted string for delivery."""

    def render(self, message: NotificationMessage, *, parse_html: bool = True) -> str:
        """Return the message formatted for a channel.

        Args:
            message: Notification message to render.
            parse_html: If True (default), output includes HTML tags. If False, plain text.
        """
        ...
