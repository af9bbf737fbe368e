# src/services/r4_webhooks/guard.py
"""
Проверка входящих вебхуков R4: токен в Authorization и IP отправителя.
"""

from __future__ import annotations

import hmac
from dataclasses import dataclass


IPV4_MAPPED_PREFIX = "::ffff:"


@dataclass(frozen=True)
class GuardResult:
    """Итог проверки запроса."""
    authorized: bool
    client_ip: str
    ip_allowed: bool
    reason: str | None = None


def normalize_client_ip(ip: str | None) -> str:
    """::ffff:127.0.0.1 -> 127.0.0.1"""
    if not ip:
        return ""
    if ip.startswith(IPV4_MAPPED_PREFIX):
        return ip[len(IPV4_MAPPED_PREFIX):]
    return ip


def mask_token(token: str | None) -> str:
    """Для логов: только последние 4 символа."""
    if not token:
        return "missing"
    return "***" + token[-4:]


def check_webhook_request(
    auth_header: str | None,
    expected_token: str,
    client_ip: str | None,
    ip_whitelist: list[str],
) -> GuardResult:
    """
    Проверить вебхук.

    Токен обязателен: пустой ожидаемый токен означает, что приёмник
    не настроен, и все запросы отклоняются. IP вне белого списка
    только помечается (решение принимается по токену).
    """
    ip = normalize_client_ip(client_ip)
    ip_allowed = ip in ip_whitelist

    if not expected_token:
        return GuardResult(False, ip, ip_allowed, "R4_WEBHOOK_TOKEN не настроен")

    if auth_header is None or not hmac.compare_digest(auth_header.encode(), expected_token.encode()):
        return GuardResult(False, ip, ip_allowed, "неверный токен")

    return GuardResult(True, ip, ip_allowed)
