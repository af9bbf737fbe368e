# src/r4_sdk/signing.py
"""
Подпись запросов R4 Conecta.

Каждый эндпоинт подписывается своим набором полей в строго заданном порядке:
    Authorization = hex(HMAC-SHA256(key=commerce, msg=prefix + field1 + field2 + ...))

Значения берутся из уже сериализованного тела запроса (имена полей как на проводе),
поэтому строка подписи всегда совпадает с тем, что уходит в JSON.
Проверка на стороне банка побайтовая: любая перестановка полей или лишний пробел
дают отказ без внятной ошибки.
"""

from __future__ import annotations

import hashlib
import hmac
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping


class R4Endpoint(str, Enum):
    """Эндпоинты API R4 Conecta."""
    BCV_RATE = "bcv_rate"
    VUELTO = "vuelto"
    C2P = "c2p"
    C2P_REVERSAL = "c2p_reversal"
    DISPERSION = "dispersion"
    GENERATE_OTP = "generate_otp"
    IMMEDIATE_DEBIT = "immediate_debit"
    IMMEDIATE_CREDIT = "immediate_credit"
    IMMEDIATE_CREDIT_ACCOUNT = "immediate_credit_account"
    MANDATE_ACCOUNT = "mandate_account"
    MANDATE_PHONE = "mandate_phone"
    OPERATION_STATUS = "operation_status"


@dataclass(frozen=True)
class SignatureSpec:
    """Путь эндпоинта и состав строки подписи."""
    path: str
    fields: tuple[str, ...]
    prefix: str = ""


# =============================================================================
# ТАБЛИЦА ПОДПИСЕЙ
# =============================================================================

SIGNATURE_TABLE: dict[R4Endpoint, SignatureSpec] = {
    R4Endpoint.BCV_RATE: SignatureSpec(
        path="/MBbcv",
        fields=("Fechavalor", "Moneda"),
    ),
    R4Endpoint.VUELTO: SignatureSpec(
        path="/MBvuelto",
        fields=("TelefonoDestino", "Monto", "Banco", "Cedula"),
    ),
    # Единственный эндпоинт с ведущим пробелом в строке подписи
    R4Endpoint.C2P: SignatureSpec(
        path="/MBc2p",
        fields=("TelefonoDestino", "Monto", "Banco", "Cedula"),
        prefix=" ",
    ),
    R4Endpoint.C2P_REVERSAL: SignatureSpec(
        path="/MBanulacionC2P",
        fields=("Banco",),
    ),
    R4Endpoint.DISPERSION: SignatureSpec(
        path="/R4pagos",
        fields=("monto", "fecha"),
    ),
    R4Endpoint.GENERATE_OTP: SignatureSpec(
        path="/GenerarOtp",
        fields=("Banco", "Monto", "Telefono", "Cedula"),
    ),
    R4Endpoint.IMMEDIATE_DEBIT: SignatureSpec(
        path="/DebitoInmediato",
        fields=("Banco", "Cedula", "Telefono", "Monto", "OTP"),
    ),
    R4Endpoint.IMMEDIATE_CREDIT: SignatureSpec(
        path="/CreditoInmediato",
        fields=("Banco", "Cedula", "Telefono", "Monto"),
    ),
    R4Endpoint.IMMEDIATE_CREDIT_ACCOUNT: SignatureSpec(
        path="/CICuentas",
        fields=("Cedula", "Cuenta", "Monto"),
    ),
    R4Endpoint.MANDATE_ACCOUNT: SignatureSpec(
        path="/TransferenciaOnline/DomiciliacionCNTA",
        fields=("cuenta",),
    ),
    R4Endpoint.MANDATE_PHONE: SignatureSpec(
        path="/TransferenciaOnline/DomiciliacionCELE",
        fields=("telefono",),
    ),
    R4Endpoint.OPERATION_STATUS: SignatureSpec(
        path="/ConsultarOperaciones",
        fields=("Id",),
    ),
}


# =============================================================================
# ВЫЧИСЛЕНИЕ ПОДПИСИ
# =============================================================================

def build_signature_input(endpoint: R4Endpoint, body: Mapping[str, Any]) -> str:
    """
    Собрать строку для подписи из сериализованного тела запроса.

    Raises:
        KeyError: В теле нет поля, участвующего в подписи.
        TypeError: Значение поля не строка.
    """
    spec = SIGNATURE_TABLE[endpoint]
    parts = [spec.prefix]
    for field in spec.fields:
        value = body[field]
        if not isinstance(value, str):
            raise TypeError(
                f"Поле {field} эндпоинта {endpoint.value} должно быть строкой, получено {type(value).__name__}"
            )
        parts.append(value)
    return "".join(parts)


def compute_signature(commerce: str, message: str) -> str:
    """HMAC-SHA256 с ключом commerce, в нижнем регистре hex."""
    return hmac.new(
        commerce.encode("utf-8"),
        message.encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()


def sign_request(endpoint: R4Endpoint, body: Mapping[str, Any], commerce: str) -> str:
    """Подпись для заголовка Authorization."""
    return compute_signature(commerce, build_signature_input(endpoint, body))
