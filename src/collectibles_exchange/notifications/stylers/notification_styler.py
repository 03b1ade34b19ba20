# -*- coding: utf-8 -*-
"""Exchange notification styler with emoji headings (Telegram-style HTML or plain text)."""

from __future__ import annotations

from html import escape
from typing import Any

from collectibles_exchange.notifications.types import NotificationMessage, NotificationStyler

_KIND_EMOJI = {
    "trade": "🔄",
    "offer": "🏷️",
    "shipping": "📦",
    "payment": "💳",
}

_ALIAS_TITLES = {
    "trade-sent": "New Trade Proposal",
    "counter-trade-offer": "Counter Offer Received",
    "trade-offer-updated": "Trade Terms Updated",
    "trade-accepted": "Trade Accepted",
    "counter-offer-accepted": "Counter Offer Accepted",
    "trade-offer-accepted-sender-pay": "Trade Accepted, Sender Pays",
    "trade-offer-accepted-receiver-pay": "Trade Accepted, Receiver Pays",
    "counter-offer-accepted-sender-pay": "Counter Offer Accepted, Sender Pays",
    "counter-offer-accepted-receiver-pay": "Counter Offer Accepted, Receiver Pays",
    "trade-declined": "Trade Declined",
    "counter-offer-declined": "Counter Offer Declined",
    "trade-cancelled": "Trade Cancelled",
    "payment-initiated": "Payment Started",
    "payment-made": "Payment Received",
    "payment-declined": "Payment Declined",
    "payout-details-not-available": "Payout Details Missing",
    "shipped-by-sender": "Sender Shipped",
    "shipped-by-receiver": "Receiver Shipped",
    "both-traders-shipped": "Both Traders Shipped",
    "marked-trade-completed-by-sender": "Sender Marked Complete",
    "marked-trade-completed-by-receiver": "Receiver Marked Complete",
    "both-marked-trade-completed": "Trade Completed",
    "offer-accepted": "Offer Accepted",
    "offer-sent": "Buy Offer Sent",
    "offer-cancelled": "Buy Offer Cancelled",
    "cart-item-removed": "Item Removed From Cart",
    "cart-hold-expired": "Cart Hold Expired",
    "cancelled-item-committed-elsewhere": "Item Sold Elsewhere",
    "shipment-status-updated": "Shipment Update",
}


class ExchangeNotificationStyler(NotificationStyler):
    """Render exchange activity and system notifications."""

    def render(self, message: NotificationMessage, *, parse_html: bool = True) -> str:
        if message.event_type == "exchange_activity":
            text = self._render_activity(message)
        elif message.event_type in ("system_started", "system_stopped"):
            text = self._render_system(message)
        else:
            text = self._render_generic(message)
        return text if parse_html else self._strip_tags(text)

    def _render_activity(self, message: NotificationMessage) -> str:
        payload: dict[str, Any] = dict(message.payload or {})
        alias = str(payload.get("alias") or "")
        kind = str(payload.get("kind") or "")
        emoji = _KIND_EMOJI.get(kind, "ℹ️")
        title = message.title or self.title_for(alias)
        lines = [
            f"{emoji} <b>{escape(title)}</b>\n",
            self._section(
                "🧾 Transaction",
                [
                    ("🔖 Code", payload.get("code")),
                    ("🆔 ID", payload.get("transaction_id")),
                    ("📌 Status", alias),
                ],
            ),
            self._section(
                "👥 Parties",
                [
                    ("📤 From", payload.get("from_user_id")),
                    ("📥 To", payload.get("to_user_id")),
                ],
            ),
        ]
        if payload.get("detail"):
            lines.append(self._section("📝 Detail", [("", payload["detail"])]))
        return "\n".join(line for line in lines if line).strip()

    def _render_system(self, message: NotificationMessage) -> str:
        started = message.event_type == "system_started"
        emoji, title = ("▶️", "System Started") if started else ("⏹️", "System Stopped")
        lines = [
            f"{emoji} <b>{title}</b>\n",
            self._section("🚀 Status" if started else "🛑 Status", [("", message.message)]),
        ]
        return "\n".join(line for line in lines if line).strip()

    def _render_generic(self, message: NotificationMessage) -> str:
        title = message.title or message.event_type.replace("_", " ").title()
        lines = [f"ℹ️ <b>{escape(title)}</b>", escape(message.message)]
        for key in sorted((message.payload or {}).keys()):
            value = message.payload[key]  # type: ignore[index]
            if value is not None:
                lines.append(f"<b>{key}:</b> {escape(str(value))}")
        return "\n".join(lines).strip()

    @staticmethod
    def title_for(alias: str) -> str:
        return _ALIAS_TITLES.get(alias, alias.replace("-", " ").title() or "Exchange Activity")

    def _section(self, header: str, rows: list[tuple[str, Any]]) -> str:
        content: list[str] = []
        for label, value in rows:
            if not value:
                continue
            text = escape(str(value))
            content.append(f"{self._format_label(label)} {text}" if label else text)
        if not content:
            return ""
        return "\n".join([f"{self._format_heading(header)}\n{'─' * 12}", *content]) + "\n"

    @staticmethod
    def _format_heading(text: str) -> str:
        emoji, _, remainder = text.partition(" ")
        if remainder:
            return f"{emoji} <b>{remainder}</b>"
        return f"<b>{text}</b>"

    @staticmethod
    def _format_label(label: str) -> str:
        emoji, _, remainder = label.partition(" ")
        if remainder:
            return f"{emoji} <b>{remainder}:</b>"
        return f"<b>{label}:</b>"

    @staticmethod
    def _strip_tags(text: str) -> str:
        for tag in ("<b>", "</b>"):
            text = text.replace(tag, "")
        return text
