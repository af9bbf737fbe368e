# src/r4_sdk/webhooks.py
"""
Модели входящих вебхуков R4.

Эти эндпоинты реализует комерсио, банк вызывает их сам:
- POST {домен}/R4consulta: банк спрашивает, принимать ли платёж;
- POST {домен}/R4notifica: банк сообщает о зачисленном платеже.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

from pydantic import BaseModel, ConfigDict


class ConsultaRequest(BaseModel):
    """Запрос R4consulta."""
    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    IdCliente: str
    Monto: str
    TelefonoComercio: str | None = None

    def amount(self) -> Decimal | None:
        """Monto с точностью до сотых, None если не разбирается."""
        return parse_webhook_amount(self.Monto)


class ConsultaResponse(BaseModel):
    status: bool


class ConsultaSimfRequest(BaseModel):
    """Запрос R4consulta по модели SIMF."""
    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    IdComercio: str
    TelefonoComercio: str
    TelefonoEmisor: str
    Concepto: str | None = None
    BancoEmisor: str
    Monto: str
    FechaHora: str
    Referencia: str
    CodigoRed: str


class ConsultaSimfResponse(BaseModel):
    abono: bool


class NotificaRequest(BaseModel):
    """Уведомление R4notifica о зачисленном платеже."""
    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    IdComercio: str
    TelefonoComercio: str
    TelefonoEmisor: str
    Concepto: str | None = None
    BancoEmisor: str
    Monto: str
    FechaHora: str
    Referencia: str
    CodigoRed: str

    def amount(self) -> Decimal | None:
        return parse_webhook_amount(self.Monto)


class NotificaResponse(BaseModel):
    abono: bool


def parse_webhook_amount(value: str | None) -> Decimal | None:
    """
    Разобрать Monto из вебхука и округлить до сотых.

    Банк присылает суммы как строку ("120.5", "120.50"); сравнение
    с суммой заказа ведётся по двум знакам.
    """
    if value is None:
        return None
    try:
        amount = Decimal(str(value).strip())
        if not amount.is_finite():
            return None
        # Слишком большой порядок ("1e30") не помещается в точность контекста
        return amount.quantize(Decimal("0.01"))
    except InvalidOperation:
        return None
