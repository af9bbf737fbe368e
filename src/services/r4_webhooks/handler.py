# src/services/r4_webhooks/handler.py
"""
Обработчик решений по вебхукам R4.

Логика поиска заказа по документу и сумме живёт в приложении
платформы; сюда она подключается через set_webhook_handler().
"""

from __future__ import annotations

from typing import Protocol

from src.common.logger import log_warning
from src.r4_sdk.webhooks import ConsultaRequest, NotificaRequest


class R4WebhookHandler(Protocol):
    """Решения по входящим вебхукам."""

    async def handle_consulta(self, data: ConsultaRequest) -> bool:
        """Принять ли платёж (есть ли ожидающий заказ на эту сумму)."""
        ...

    async def handle_notifica(self, data: NotificaRequest) -> bool:
        """Зачесть уведомление о поступившем платеже."""
        ...


class DecliningWebhookHandler:
    """Обработчик по умолчанию: отклоняет все платежи."""

    async def handle_consulta(self, data: ConsultaRequest) -> bool:
        await log_warning(
            f"[R4 Query Hook] Обработчик не подключён, отказ: IdCliente={data.IdCliente}, Monto={data.Monto}"
        )
        return False

    async def handle_notifica(self, data: NotificaRequest) -> bool:
        await log_warning(
            f"[R4 Notification Hook] Обработчик не подключён, отказ: Referencia={data.Referencia}"
        )
        return False
