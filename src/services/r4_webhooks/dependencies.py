# src/services/r4_webhooks/dependencies.py
"""
Dependency Injection для приёмника вебхуков R4.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.config.loader import R4Settings
    from src.services.r4_webhooks.handler import R4WebhookHandler


_handler: "R4WebhookHandler | None" = None
_r4_settings: "R4Settings | None" = None


def set_webhook_handler(handler: "R4WebhookHandler") -> None:
    """Подключить обработчик решений (вызывается при старте приложения)."""
    global _handler
    _handler = handler


def get_webhook_handler() -> "R4WebhookHandler":
    """Получить обработчик; по умолчанию отклоняющий."""
    global _handler

    if _handler is None:
        from src.services.r4_webhooks.handler import DecliningWebhookHandler
        _handler = DecliningWebhookHandler()

    return _handler


def set_r4_settings(r4_settings: "R4Settings") -> None:
    """Переопределить настройки R4 (тесты, встраивание)."""
    global _r4_settings
    _r4_settings = r4_settings


def get_r4_settings() -> "R4Settings":
    """Настройки R4; по умолчанию из config.json и окружения."""
    if _r4_settings is None:
        from src.config import settings
        return settings.r4
    return _r4_settings


async def cleanup_dependencies() -> None:
    """Сбросить зависимости при остановке приложения."""
    global _handler, _r4_settings
    _handler = None
    _r4_settings = None
