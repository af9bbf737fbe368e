# src/common/constants.py
"""
Общие константы и перечисления.
"""

from enum import Enum


class TypeMsg(str, Enum):
    """Типы сообщений для логирования."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class WebhookEndpoint(str, Enum):
    """Вебхуки, которые банк R4 вызывает на стороне комерсио."""
    CONSULTA = "R4consulta"
    NOTIFICA = "R4notifica"
