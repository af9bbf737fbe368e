# src/r4_sdk/models.py
"""
DTO запросов и ответов API R4 Conecta V3.0.

Имена полей на проводе не нормализуются: регистр у разных эндпоинтов разный
("Monto" / "monto", "Cedula" / "docId") и передаётся как есть через alias.
В Python используются snake_case атрибуты, заполнять можно и так, и так.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from src.r4_sdk.amounts import format_amount, format_bcv_date, format_dispersion_date


# Шаблоны полей
PHONE_PATTERN = r"^\d{11}$"
BANK_CODE_PATTERN = r"^\d{4}$"
ACCOUNT_PATTERN = r"^\d{20}$"
DOCUMENT_PATTERN = r"^[VEJPG]\d{1,9}$"
OTP_PATTERN = r"^\d{1,8}$"
REFERENCE_PATTERN = r"^\d{8}$"
CURRENCY_PATTERN = r"^[A-Z]{3}$"

CONCEPT_MAX_LENGTH = 30

# Банк присылает коды и референсы то строкой, то числом
WireCode = str | int


# =============================================================================
# БАЗОВЫЕ КЛАССЫ
# =============================================================================

class R4Request(BaseModel):
    """Базовый запрос: неизменяемый, сериализуется с оригинальными именами полей."""

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="forbid")

    def to_body(self) -> dict[str, Any]:
        """Тело запроса в виде, в котором оно уходит в JSON и в подпись."""
        return self.model_dump(by_alias=True, exclude_none=True)


class R4Response(BaseModel):
    """
    Базовый ответ.

    Проверяется только форма; неизвестные поля сохраняются как есть.
    Обязателен только код результата: при отказе банк присылает
    {"code", "message"} без остальных полей. Значения не приводятся к
    другому типу (код "00" и код 0 возвращаются так, как пришли).
    Успех на уровне бизнеса (code == "00", "ACCP" и т.д.) не проверяется.
    """

    model_config = ConfigDict(extra="allow")


def _amount(value: Any) -> str:
    if isinstance(value, (str, int, float, Decimal)):
        return format_amount(value)
    raise ValueError(f"Некорректная сумма: {value!r}")


# =============================================================================
# КУРС BCV: POST /MBbcv
# =============================================================================

class BcvRequest(R4Request):
    """Официальный курс BCV на дату валютирования."""
    currency: str = Field(alias="Moneda", pattern=CURRENCY_PATTERN)
    value_date: str = Field(alias="Fechavalor")

    @field_validator("value_date", mode="before")
    @classmethod
    def normalize_value_date(cls, v: str | date) -> str:
        """Дата как YYYY-MM-DD."""
        return format_bcv_date(v)


class BcvResponse(R4Response):
    code: WireCode
    message: str | None = None
    fechavalor: str | None = None
    tipocambio: str | int | float | None = None


# =============================================================================
# ВУЛЬТО (ИСХОДЯЩИЙ ПАГО МОВИЛЬ): POST /MBvuelto
# =============================================================================

class VueltoRequest(R4Request):
    """Возврат денег плательщику через паго мовиль."""
    destination_phone: str = Field(alias="TelefonoDestino", pattern=PHONE_PATTERN)
    national_id: str = Field(alias="Cedula", pattern=DOCUMENT_PATTERN)
    bank_code: str = Field(alias="Banco", pattern=BANK_CODE_PATTERN)
    amount: str = Field(alias="Monto")
    concept: str | None = Field(default=None, alias="Concepto", max_length=CONCEPT_MAX_LENGTH)
    ip: str | None = Field(default=None, alias="Ip")

    normalize_amount = field_validator("amount", mode="before")(_amount)


class VueltoResponse(R4Response):
    code: WireCode
    message: str | None = None
    reference: WireCode | None = None


# =============================================================================
# COBRO C2P: POST /MBc2p
# =============================================================================

class C2pRequest(R4Request):
    """Списание с плательщика по телефону, банку и документу."""
    destination_phone: str = Field(alias="TelefonoDestino", pattern=PHONE_PATTERN)
    national_id: str = Field(alias="Cedula", pattern=DOCUMENT_PATTERN)
    concept: str | None = Field(default=None, alias="Concepto", max_length=CONCEPT_MAX_LENGTH)
    bank_code: str = Field(alias="Banco", pattern=BANK_CODE_PATTERN)
    ip: str | None = Field(default=None, alias="Ip")
    amount: str = Field(alias="Monto")
    otp: str = Field(alias="Otp", pattern=OTP_PATTERN)

    normalize_amount = field_validator("amount", mode="before")(_amount)


class C2pResponse(R4Response):
    code: WireCode
    message: str | None = None
    reference: WireCode | None = None


class C2pReversalRequest(R4Request):
    """Анулирование ранее проведённого C2P."""
    national_id: str = Field(alias="Cedula", pattern=DOCUMENT_PATTERN)
    bank_code: str = Field(alias="Banco", pattern=BANK_CODE_PATTERN)
    reference: str = Field(alias="Referencia", min_length=1)


class C2pReversalResponse(R4Response):
    code: WireCode
    message: str | None = None
    reference: WireCode | None = None


# =============================================================================
# ДИСПЕРСИЯ ПЛАТЕЖЕЙ: POST /R4pagos
# =============================================================================

class DispersionBeneficiary(R4Request):
    """Получатель в пакетной выплате."""
    names: str = Field(alias="nombres", min_length=1)
    document: str = Field(alias="documento", pattern=DOCUMENT_PATTERN)
    account_number: str = Field(alias="destino", pattern=ACCOUNT_PATTERN)
    partial_amount: str = Field(alias="montoPart")

    normalize_amount = field_validator("partial_amount", mode="before")(_amount)


class DispersionRequest(R4Request):
    """Пакетная выплата. Итоговая сумма обязана совпадать с суммой частей."""
    amount: str = Field(alias="monto")
    payment_date: str = Field(alias="fecha")
    reference: str = Field(alias="Referencia", pattern=REFERENCE_PATTERN)
    beneficiaries: list[DispersionBeneficiary] = Field(alias="personas", min_length=1)

    normalize_amount = field_validator("amount", mode="before")(_amount)

    @field_validator("payment_date", mode="before")
    @classmethod
    def normalize_date(cls, v: str | date) -> str:
        """Дата как MM/DD/YYYY."""
        return format_dispersion_date(v)

    @model_validator(mode="after")
    def check_total(self) -> "DispersionRequest":
        """Банк отклоняет пакет, если сумма частей не равна итогу."""
        parts = sum((Decimal(b.partial_amount) for b in self.beneficiaries), Decimal("0"))
        if parts != Decimal(self.amount):
            raise ValueError(
                f"Сумма montoPart ({parts:.2f}) не совпадает с monto ({self.amount})"
            )
        return self


class DispersionResponse(R4Response):
    """Кода нет: результат в success."""
    success: bool | None = None
    message: str | None = None
    error: str | None = None


# =============================================================================
# OTP + ДЕБЕТ ИНМЕДИАТО: POST /GenerarOtp, POST /DebitoInmediato
# =============================================================================

class GenerateOtpRequest(R4Request):
    """Запрос OTP у банка плательщика перед немедленным дебетом."""
    bank_code: str = Field(alias="Banco", pattern=BANK_CODE_PATTERN)
    amount: str = Field(alias="Monto")
    phone: str = Field(alias="Telefono", pattern=PHONE_PATTERN)
    national_id: str = Field(alias="Cedula", pattern=DOCUMENT_PATTERN)

    normalize_amount = field_validator("amount", mode="before")(_amount)


class GenerateOtpResponse(R4Response):
    code: WireCode
    message: str | None = None
    success: bool | None = None


class ImmediateDebitRequest(R4Request):
    """Немедленный дебет, подтверждённый OTP."""
    bank_code: str = Field(alias="Banco", pattern=BANK_CODE_PATTERN)
    amount: str = Field(alias="Monto")
    phone: str = Field(alias="Telefono", pattern=PHONE_PATTERN)
    national_id: str = Field(alias="Cedula", pattern=DOCUMENT_PATTERN)
    name: str = Field(alias="Nombre", min_length=1, max_length=20)
    otp: str = Field(alias="OTP", pattern=OTP_PATTERN)
    concept: str = Field(alias="Concepto", max_length=CONCEPT_MAX_LENGTH)

    normalize_amount = field_validator("amount", mode="before")(_amount)


class TransferResponse(R4Response):
    """Общий ответ дебета / кредита инмедиато."""
    code: WireCode
    message: str | None = None
    reference: WireCode | None = None
    id: str | None = None
    Id: str | None = None


class ImmediateDebitResponse(TransferResponse):
    pass


# =============================================================================
# КРЕДИТ ИНМЕДИАТО: POST /CreditoInmediato, POST /CICuentas
# =============================================================================

class ImmediateCreditRequest(R4Request):
    """Зачисление получателю по номеру телефона."""
    bank_code: str = Field(alias="Banco", pattern=BANK_CODE_PATTERN)
    national_id: str = Field(alias="Cedula", pattern=DOCUMENT_PATTERN)
    phone: str = Field(alias="Telefono", pattern=PHONE_PATTERN)
    amount: str = Field(alias="Monto")
    concept: str = Field(alias="Concepto", max_length=CONCEPT_MAX_LENGTH)

    normalize_amount = field_validator("amount", mode="before")(_amount)


class ImmediateCreditResponse(TransferResponse):
    pass


class ImmediateCreditAccountRequest(R4Request):
    """Зачисление на 20-значный счёт."""
    national_id: str = Field(alias="Cedula", pattern=DOCUMENT_PATTERN)
    account_number: str = Field(alias="Cuenta", pattern=ACCOUNT_PATTERN)
    amount: str = Field(alias="Monto")
    concept: str = Field(alias="Concepto", max_length=CONCEPT_MAX_LENGTH)

    normalize_amount = field_validator("amount", mode="before")(_amount)


class ImmediateCreditAccountResponse(TransferResponse):
    pass


# =============================================================================
# ДОМИСИЛИАСЬОН: POST /TransferenciaOnline/DomiciliacionCNTA|CELE
# =============================================================================

class MandateAccountRequest(R4Request):
    """Мандат на регулярное списание по 20-значному счёту."""
    document: str = Field(alias="docId", pattern=DOCUMENT_PATTERN)
    name: str = Field(alias="nombre", min_length=1)
    account_number: str = Field(alias="cuenta", pattern=ACCOUNT_PATTERN)
    amount: str = Field(alias="monto")
    concept: str = Field(alias="concepto", max_length=CONCEPT_MAX_LENGTH)

    normalize_amount = field_validator("amount", mode="before")(_amount)


class MandatePhoneRequest(R4Request):
    """Мандат на регулярное списание по телефону."""
    document: str = Field(alias="docId", pattern=DOCUMENT_PATTERN)
    phone: str = Field(alias="telefono", pattern=PHONE_PATTERN)
    name: str = Field(alias="nombre", min_length=1)
    bank_code: str = Field(alias="banco", pattern=BANK_CODE_PATTERN)
    amount: str = Field(alias="monto")
    concept: str = Field(alias="concepto", max_length=CONCEPT_MAX_LENGTH)

    normalize_amount = field_validator("amount", mode="before")(_amount)


class MandateResponse(R4Response):
    codigo: WireCode
    mensaje: str | None = None
    uuid: str | None = None


# =============================================================================
# СТАТУС ОПЕРАЦИИ: POST /ConsultarOperaciones
# =============================================================================

class OperationStatusRequest(R4Request):
    """Статус ранее проведённой операции по UUID."""
    operation_id: str = Field(alias="Id", min_length=36, max_length=36)


class OperationStatusResponse(R4Response):
    code: WireCode
    reference: WireCode | None = None
    success: bool | None = None
    message: str | None = None
    Id: str | None = None
