# tests/conftest.py
"""
Общие фикстуры и настройки для тестов.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Callable

import httpx
import pytest

# Устанавливаем переменные окружения перед импортом модулей
os.environ.setdefault("R4_COMMERCE_TOKEN", "test_commerce_token")
os.environ.setdefault("R4_WEBHOOK_TOKEN", "test_webhook_token")

from src.r4_sdk.client import R4Client
from src.r4_sdk.models import (
    BcvRequest,
    C2pRequest,
    C2pReversalRequest,
    DispersionBeneficiary,
    DispersionRequest,
    GenerateOtpRequest,
    ImmediateCreditAccountRequest,
    ImmediateCreditRequest,
    ImmediateDebitRequest,
    MandateAccountRequest,
    MandatePhoneRequest,
    OperationStatusRequest,
    R4Request,
    VueltoRequest,
)
from src.r4_sdk.signing import R4Endpoint


COMMERCE = "secret"
BASE_URL = "https://r4.test"

PHONE = "04121234567"
BANK = "0102"
DOCUMENT = "V12345678"
ACCOUNT = "01020123456789012345"
OPERATION_ID = "123e4567-e89b-12d3-a456-426614174000"


# =============================================================================
# ФИКСТУРЫ КОНФИГУРАЦИИ
# =============================================================================

@pytest.fixture(scope="session")
def project_root() -> Path:
    """Корневая директория проекта."""
    return Path(__file__).parent.parent


@pytest.fixture
def mock_config() -> dict[str, Any]:
    """Мок конфигурации для тестов."""
    return {
        "_comment_system": "Тестовая конфигурация",
        "PROJECT_NAME": "r4_conecta_test",
        "VERSION": "1.0.0-test",
        "DEBUG": True,
        "ENVIRONMENT": "test",
        "LOG_LEVEL": "DEBUG",
        "LOG_FORMAT": "json",
        "LOG_TO_FILE": False,
        "LOG_FILE_PATH": "logs/test.log",
        "LOG_MAX_BYTES": 1024,
        "R4_BASE_URL": "https://sandbox.r4.test",
        "R4_TIMEOUT": 5.0,
        "R4_WEBHOOK_IP_WHITELIST": ["10.0.0.1"],
        "R4_WEBHOOKS_HOST": "127.0.0.1",
        "R4_WEBHOOKS_PORT": 9000,
    }


@pytest.fixture
def temp_config_file(tmp_path: Path, mock_config: dict[str, Any]) -> Path:
    """Создаёт временный файл конфигурации."""
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps(mock_config, ensure_ascii=False, indent=2))
    return config_file


# =============================================================================
# ФИКСТУРЫ ЗАПРОСОВ R4
# =============================================================================

@pytest.fixture
def sample_requests() -> dict[R4Endpoint, R4Request]:
    """По одному валидному запросу на каждый эндпоинт."""
    return {
        R4Endpoint.BCV_RATE: BcvRequest(currency="USD", value_date="2024-01-15"),
        R4Endpoint.VUELTO: VueltoRequest(
            destination_phone=PHONE, amount="10.00", bank_code=BANK, national_id=DOCUMENT,
        ),
        R4Endpoint.C2P: C2pRequest(
            destination_phone=PHONE, amount="10.00", bank_code=BANK, national_id=DOCUMENT, otp="12345678",
        ),
        R4Endpoint.C2P_REVERSAL: C2pReversalRequest(
            national_id=DOCUMENT, bank_code=BANK, reference="00012345",
        ),
        R4Endpoint.DISPERSION: DispersionRequest(
            amount="150.75",
            payment_date="01/15/2024",
            reference="00012345",
            beneficiaries=[
                DispersionBeneficiary(
                    names="Tienda Uno", document="J12345678", account_number=ACCOUNT, partial_amount="100.50",
                ),
                DispersionBeneficiary(
                    names="Tienda Dos", document="V87654321", account_number=ACCOUNT, partial_amount="50.25",
                ),
            ],
        ),
        R4Endpoint.GENERATE_OTP: GenerateOtpRequest(
            bank_code=BANK, amount="10.00", phone=PHONE, national_id=DOCUMENT,
        ),
        R4Endpoint.IMMEDIATE_DEBIT: ImmediateDebitRequest(
            bank_code=BANK, amount="10.00", phone=PHONE, national_id=DOCUMENT,
            name="Juan Perez", otp="12345678", concept="Pedido 42",
        ),
        R4Endpoint.IMMEDIATE_CREDIT: ImmediateCreditRequest(
            bank_code=BANK, national_id=DOCUMENT, phone=PHONE, amount="10.00", concept="Pago",
        ),
        R4Endpoint.IMMEDIATE_CREDIT_ACCOUNT: ImmediateCreditAccountRequest(
            national_id=DOCUMENT, account_number=ACCOUNT, amount="10.00", concept="Pago",
        ),
        R4Endpoint.MANDATE_ACCOUNT: MandateAccountRequest(
            document=DOCUMENT, name="Juan Perez", account_number=ACCOUNT, amount="10.00", concept="Mensualidad",
        ),
        R4Endpoint.MANDATE_PHONE: MandatePhoneRequest(
            document=DOCUMENT, phone=PHONE, name="Juan Perez", bank_code=BANK, amount="10.00", concept="Mensualidad",
        ),
        R4Endpoint.OPERATION_STATUS: OperationStatusRequest(operation_id=OPERATION_ID),
    }


# =============================================================================
# HTTP МОКИ
# =============================================================================

class RecordingTransport:
    """httpx.MockTransport, запоминающий запросы и отвечающий заданным ответом."""

    def __init__(self, responder: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: list[httpx.Request] = []
        self._responder = responder
        self.transport = httpx.MockTransport(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._responder(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> dict[str, Any]:
        return json.loads(self.last.content)


@pytest.fixture
def make_client() -> Callable[..., tuple[R4Client, RecordingTransport]]:
    """
    Фабрика клиента поверх MockTransport.

    make_client(status_code=200, json={...}) или make_client(responder=callable).
    """

    def factory(
        status_code: int = 200,
        json: Any = None,
        content: bytes | None = None,
        responder: Callable[[httpx.Request], httpx.Response] | None = None,
        base_url: str = BASE_URL,
        commerce: str = COMMERCE,
    ) -> tuple[R4Client, RecordingTransport]:
        if responder is None:
            def responder(request: httpx.Request) -> httpx.Response:
                if content is not None:
                    return httpx.Response(status_code, content=content)
                return httpx.Response(status_code, json=json if json is not None else {})

        recorder = RecordingTransport(responder)
        http_client = httpx.AsyncClient(transport=recorder.transport)
        client = R4Client(commerce=commerce, base_url=base_url, http_client=http_client)
        return client, recorder

    return factory
