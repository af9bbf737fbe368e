# tests/common/test_constants.py
"""
Тесты для модуля констант.
"""

import pytest

from src.common.constants import TypeMsg, WebhookEndpoint


class TestTypeMsg:
    """Тесты для enum TypeMsg."""

    def test_type_msg_values(self) -> None:
        """Проверяет значения типов сообщений."""
        assert TypeMsg.DEBUG.value == "debug"
        assert TypeMsg.INFO.value == "info"
        assert TypeMsg.WARNING.value == "warning"
        assert TypeMsg.ERROR.value == "error"
        assert TypeMsg.CRITICAL.value == "critical"

    def test_type_msg_is_str_enum(self) -> None:
        """Проверяет, что TypeMsg является строковым enum."""
        assert isinstance(TypeMsg.DEBUG, str)
        assert TypeMsg.INFO == "info"


class TestWebhookEndpoint:
    """Тесты для enum WebhookEndpoint."""

    @pytest.mark.parametrize(
        "endpoint, path",
        [
            (WebhookEndpoint.CONSULTA, "R4consulta"),
            (WebhookEndpoint.NOTIFICA, "R4notifica"),
        ],
    )
    def test_values_match_routes(self, endpoint: WebhookEndpoint, path: str) -> None:
        """Значения совпадают с путями, которые вызывает банк."""
        assert endpoint.value == path
        assert endpoint == path
