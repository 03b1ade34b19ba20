# -*- coding: utf-8 -*-
"""Base notification channel."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import TYPE_CHECKING

from collectibles_exchange.notifications.types import NotificationMessage

if TYPE_CHECKING:  # pragma: no cover
    from collectibles_exchange.config.config import Settings


class BaseNotificationStrategy(ABC):
    """One delivery channel for exchange notifications.

    A channel may be restricted to a set of activity aliases (e.g. only
    payment-made and both-marked-trade-completed for an operator chat).
    Operator messages are always delivered.
    """

    def __init__(self, settings: "Settings", aliases: Iterable[str] = ()):
        """
        Args:
            settings: Global configuration (Settings).
            aliases: Activity aliases this channel delivers; empty delivers all.
        """
        self.settings = settings
        self.aliases: frozenset[str] = frozenset(aliases)

    def handles(self, message: NotificationMessage) -> bool:
        """True when this channel should deliver the message."""
        if not self.aliases or message.is_operator_message:
            return True
        return message.alias in self.aliases

    @property
    @abstractmethod
    def is_running(self) -> bool:
        """True between initialize() and shutdown()."""
        pass

    @abstractmethod
    async def initialize(self) -> None:
        pass

    @abstractmethod
    async def shutdown(self) -> None:
        pass

    @abstractmethod
    async def send_notification(
        self,
        message: NotificationMessage,
    ) -> None:
        """
        Deliver one message. Implementations may raise; NotificationService
        logs the failure and moves on to the next channel.

        Args:
            message: Message to deliver (NotificationMessage)
        """
        pass
