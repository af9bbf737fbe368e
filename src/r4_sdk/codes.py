# src/r4_sdk/codes.py
"""
Известные коды ответов R4.

Банк кладёт бизнес-результат операции в тело ответа со статусом 200.
Клиент эти коды не интерпретирует; помощники ниже для вызывающего кода.
"""

from __future__ import annotations

from enum import Enum


class NetworkCode(str, Enum):
    """Коды межбанковской сети (паго мовиль, вульто, C2P)."""
    APPROVED = "00"
    REFER_TO_CUSTOMER = "01"
    TIMEOUT_EXCEEDED = "05"
    INVALID_TOKEN = "08"
    INVALID_TRANSACTION = "12"
    INVALID_AMOUNT = "13"
    WRONG_RECEIVER_PHONE = "14"
    WRONG_KEY = "15"
    FORMAT_ERROR = "30"
    SERVICE_INACTIVE = "41"
    SERVICE_INACTIVE_2 = "43"
    INSUFFICIENT_FUNDS = "51"
    ORIGIN_PHONE_NOT_FOUND = "55"
    PHONE_MISMATCH = "56"
    DENIED_BY_RECEIVER = "57"
    RESTRICTED_ACCOUNT = "62"
    LATE_RESPONSE_REVERSAL = "68"
    WRONG_DOCUMENT = "80"
    TIME_OUT = "87"
    BANK_CLOSING = "90"
    INSTITUTION_UNAVAILABLE = "91"
    RECEIVER_BANK_NOT_AFFILIATED = "92"
    NOTIFICATION_ERROR = "99"


class TransferCode(str, Enum):
    """Коды дебета / кредита инмедиато и домисилиасьон."""
    ACCEPTED = "ACCP"
    PENDING_RECEIVER = "AC00"
    TIMEOUT = "AB01"
    AGENT_OFFLINE = "AB07"
    WRONG_ACCOUNT = "AC01"
    ACCOUNT_CANCELLED = "AC04"
    ACCOUNT_BLOCKED = "AC06"
    INVALID_CURRENCY = "AC09"
    RESTRICTED_TRANSACTION = "AG01"
    PAYMENT_NOT_RECEIVED = "AG09"
    AGENT_SUSPENDED = "AG10"
    AMOUNT_NOT_ALLOWED = "AM02"
    INSUFFICIENT_BALANCE = "AM04"
    DUPLICATE_OPERATION = "AM05"
    CUSTOMER_DATA_MISMATCH = "BE01"
    INVALID_NAME_LENGTH = "BE20"
    WRONG_DECIMALS = "CH20"
    CANCELLED_BY_DEBTOR = "CUST"
    OPERATION_CANCELLED = "DS02"
    INVALID_PROCESSING_DATE = "DT03"
    DUPLICATE_MESSAGE_ID = "DU01"
    SETTLEMENT_FAILED = "ED05"
    WRONG_PRODUCT_CODE = "FF05"
    WRONG_SUBPRODUCT_CODE = "FF07"
    NO_AFFILIATION = "MD01"
    AFFILIATION_INACTIVE = "MD09"
    WRONG_AMOUNT = "MD15"
    CHARGE_NOT_ALLOWED = "MD21"
    AFFILIATION_SUSPENDED = "MD22"
    UNKNOWN_BANK_CODE = "RC08"
    REJECTED = "RJCT"
    WRONG_DEBIT_CODE = "TKCM"
    TECHNICAL_REJECTION = "TM01"
    OUTSIDE_BUSINESS_HOURS = "VE01"


CODE_DESCRIPTIONS: dict[str, str] = {
    # Сеть
    "00": "Aprobado",
    "01": "Referirse al cliente",
    "05": "Tiempo de respuesta excedido",
    "08": "Token inválido",
    "12": "Transacción inválida",
    "13": "Monto inválido",
    "14": "Número teléfono receptor errado",
    "15": "Llave errónea",
    "30": "Error de formato",
    "41": "Servicio no activo",
    "43": "Servicio no activo",
    "51": "Fondos insuficientes",
    "55": "Teléfono origen no existe",
    "56": "Celular no coincide",
    "57": "Negada por el receptor",
    "62": "Cuenta restringida",
    "68": "Respuesta tardía, procede reverso",
    "80": "Cédula o pasaporte errado",
    "87": "Time out",
    "90": "Cierre bancario en proceso",
    "91": "Institución no disponible",
    "92": "Banco receptor no afiliado",
    "99": "Error en notificación",
    # Трансферы
    "ACCP": "Operación aceptada",
    "AC00": "Operación en espera de respuesta del receptor",
    "AB01": "Tiempo de espera agotado",
    "AB07": "Agente fuera de línea",
    "AC01": "Número de cuenta incorrecto",
    "AC04": "Cuenta cancelada",
    "AC06": "Cuenta bloqueada",
    "AC09": "Moneda no válida",
    "AG01": "Transacción restringida",
    "AG09": "Pago no recibido",
    "AG10": "Agente suspendido o excluido",
    "AM02": "Monto de la transacción no permitido",
    "AM04": "Saldo insuficiente",
    "AM05": "Operación duplicada",
    "BE01": "Datos del cliente no corresponden a la cuenta",
    "BE20": "Longitud del nombre inválida",
    "CH20": "Número de decimales incorrecto",
    "CUST": "Cancelación solicitada por el deudor",
    "DS02": "Operación cancelada",
    "DT03": "Fecha de procesamiento no bancaria no válida",
    "DU01": "Identificación de mensaje duplicado",
    "ED05": "Liquidación fallida",
    "FF05": "Código del producto incorrecto",
    "FF07": "Código del sub producto incorrecto",
    "MD01": "No posee afiliación",
    "MD09": "Afiliación inactiva",
    "MD15": "Monto incorrecto",
    "MD21": "Cobro no permitido",
    "MD22": "Afiliación suspendida",
    "RC08": "Código del banco no existe en el sistema",
    "RJCT": "Operación rechazada",
    "TKCM": "Código único de operación de débito incorrecto",
    "TM01": "Rechazo técnico",
    "VE01": "Fuera del horario permitido",
}

APPROVED_CODES = frozenset({NetworkCode.APPROVED.value, TransferCode.ACCEPTED.value})

# Операция ещё не завершена, статус нужно перепроверить через ConsultarOperaciones
PENDING_CODES = frozenset({TransferCode.PENDING_RECEIVER.value})


def _as_text(code: str | int | None) -> str | None:
    """Числовой код из ответа приводится к строке только для поиска."""
    if isinstance(code, int):
        return str(code)
    return code


def describe_code(code: str | int | None) -> str:
    """Текст кода ответа или "Código desconocido"."""
    code = _as_text(code)
    if code is None:
        return "Código desconocido"
    return CODE_DESCRIPTIONS.get(code, f"Código desconocido: {code}")


def is_approved(code: str | int | None) -> bool:
    """Код означает успешную операцию."""
    return _as_text(code) in APPROVED_CODES


def is_pending(code: str | int | None) -> bool:
    return _as_text(code) in PENDING_CODES
