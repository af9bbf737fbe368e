# src/r4_sdk/errors.py
"""
Ошибки клиента R4 Conecta.

Бизнес-ошибки, закодированные внутри ответа со статусом 200
(например, код "51", недостаточно средств), ошибкой НЕ считаются:
клиент возвращает такой ответ как успешный, разбирать его должен вызывающий код.
"""

from __future__ import annotations

from typing import Any


class R4Error(Exception):
    """Базовая ошибка вызова R4."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message

    def __str__(self) -> str:
        if self.code is None:
            return self.message
        return f"[{self.code}] {self.message}"


class R4TransportError(R4Error):
    """Сетевая ошибка: таймаут, DNS, обрыв соединения. Кода от банка нет."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code=None)


class R4RemoteError(R4Error):
    """
    Банк ответил статусом не 2xx.

    Если тело содержит {code, message}, они переданы без изменений,
    иначе code берётся из номера HTTP статуса, message из его текста.
    """

    def __init__(self, message: str, code: str, status_code: int) -> None:
        super().__init__(message, code=code)
        self.status_code = status_code


class R4ResponseError(R4Error):
    """Ответ 2xx, который не удалось разобрать как JSON-объект ожидаемой формы."""

    def __init__(self, message: str, status_code: int, body: Any = None) -> None:
        super().__init__(message, code=None)
        self.status_code = status_code
        self.body = body
