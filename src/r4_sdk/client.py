# src/r4_sdk/client.py
"""
Асинхронный клиент API R4 Conecta.

Каждый вызов делает один POST {base_url}{path} с заголовками:
    Content-Type: application/json
    Authorization: <HMAC-SHA256 подпись, см. signing.py>
    Commerce: <токен комерсио>

Клиент не хранит состояния между вызовами: без ретраев, кэша и логирования.
Повторы, сверка по референсам и разбор бизнес-кодов в ответах 200 на стороне
вызывающего кода.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from src.r4_sdk.errors import R4RemoteError, R4ResponseError, R4TransportError
from src.r4_sdk.models import (
    BcvRequest,
    BcvResponse,
    C2pRequest,
    C2pResponse,
    C2pReversalRequest,
    C2pReversalResponse,
    DispersionRequest,
    DispersionResponse,
    GenerateOtpRequest,
    GenerateOtpResponse,
    ImmediateCreditAccountRequest,
    ImmediateCreditAccountResponse,
    ImmediateCreditRequest,
    ImmediateCreditResponse,
    ImmediateDebitRequest,
    ImmediateDebitResponse,
    MandateAccountRequest,
    MandatePhoneRequest,
    MandateResponse,
    OperationStatusRequest,
    OperationStatusResponse,
    R4Request,
    R4Response,
    VueltoRequest,
    VueltoResponse,
)
from src.r4_sdk.signing import SIGNATURE_TABLE, R4Endpoint, sign_request

if TYPE_CHECKING:
    from src.config.loader import Settings


DEFAULT_BASE_URL = "https://r4conecta.mibanco.com.ve"
DEFAULT_TIMEOUT = 30.0

ResponseT = TypeVar("ResponseT", bound=R4Response)


class R4Config(BaseModel):
    """Настройки клиента. Токен комерсио одновременно ключ HMAC и заголовок Commerce."""

    model_config = ConfigDict(frozen=True)

    commerce: str = Field(min_length=1)
    base_url: str = DEFAULT_BASE_URL
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)

    @field_validator("commerce")
    @classmethod
    def commerce_not_blank(cls, v: str) -> str:
        """Пустой токен даёт валидную, но бесполезную подпись."""
        if not v.strip():
            raise ValueError("Токен комерсио не может быть пустым")
        return v

    @field_validator("base_url", mode="before")
    @classmethod
    def normalize_base_url(cls, v: str | None) -> str:
        """Убирает завершающие слэши."""
        if not v:
            return DEFAULT_BASE_URL
        return v.rstrip("/")


class R4Client:
    """
    Клиент R4 Conecta.

    Пример:
        async with R4Client(commerce="...") as client:
            rate = await client.get_bcv_rate(BcvRequest(currency="USD", value_date=date.today()))
    """

    def __init__(
        self,
        commerce: str,
        base_url: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Args:
            commerce: Токен комерсио, выданный банком
            base_url: URL API (по умолчанию продуктивный хост банка)
            timeout: Таймаут по умолчанию для каждого вызова, секунды
            http_client: Готовый httpx.AsyncClient (закрывать его будет владелец)

        Raises:
            ValueError: Пустой токен или некорректный таймаут
        """
        self.config = R4Config(commerce=commerce, base_url=base_url, timeout=timeout)
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=self.config.timeout)

    @classmethod
    def from_config(cls, config: R4Config, http_client: httpx.AsyncClient | None = None) -> "R4Client":
        return cls(
            commerce=config.commerce,
            base_url=config.base_url,
            timeout=config.timeout,
            http_client=http_client,
        )

    @classmethod
    def from_settings(cls, settings: "Settings | None" = None) -> "R4Client":
        """Клиент из секции r4 настроек приложения."""
        if settings is None:
            from src.config import settings
        return cls(
            commerce=settings.r4.R4_COMMERCE_TOKEN,
            base_url=settings.r4.R4_BASE_URL,
            timeout=settings.r4.R4_TIMEOUT,
        )

    @property
    def base_url(self) -> str:
        return self.config.base_url

    async def aclose(self) -> None:
        """Закрыть HTTP клиент, если он создан здесь."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "R4Client":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    # === ЗАПРОС ===

    def url_for(self, endpoint: R4Endpoint) -> str:
        """Полный URL эндпоинта."""
        return f"{self.config.base_url}{SIGNATURE_TABLE[endpoint].path}"

    def build_headers(self, endpoint: R4Endpoint, body: dict[str, Any]) -> dict[str, str]:
        """Заголовки с подписью для конкретного тела запроса."""
        return {
            "Content-Type": "application/json",
            "Authorization": sign_request(endpoint, body, self.config.commerce),
            "Commerce": self.config.commerce,
        }

    async def _post(
        self,
        endpoint: R4Endpoint,
        request: R4Request,
        response_model: type[ResponseT],
        timeout: float | None = None,
    ) -> ResponseT:
        """
        Подписать и отправить запрос, разобрать ответ.

        Один вызов, один POST. При отмене корутины запрос не повторяется.
        """
        body = request.to_body()
        headers = self.build_headers(endpoint, body)

        try:
            response = await self._client.post(
                self.url_for(endpoint),
                json=body,
                headers=headers,
                timeout=timeout if timeout is not None else self.config.timeout,
            )
        except httpx.TransportError as e:
            raise R4TransportError(
                f"R4 {endpoint.value}: {type(e).__name__}: {e}"
            ) from e

        if response.is_success:
            return self._parse_success(endpoint, response, response_model)

        raise self._remote_error(response)

    @staticmethod
    def _parse_success(
        endpoint: R4Endpoint,
        response: httpx.Response,
        response_model: type[ResponseT],
    ) -> ResponseT:
        try:
            data = response.json()
        except ValueError as e:
            raise R4ResponseError(
                f"R4 {endpoint.value}: ответ не JSON",
                status_code=response.status_code,
                body=response.text,
            ) from e

        if not isinstance(data, dict):
            raise R4ResponseError(
                f"R4 {endpoint.value}: ожидался JSON-объект",
                status_code=response.status_code,
                body=data,
            )

        try:
            return response_model.model_validate(data)
        except ValidationError as e:
            raise R4ResponseError(
                f"R4 {endpoint.value}: неожиданная форма ответа: {e.error_count()} ошибок",
                status_code=response.status_code,
                body=data,
            ) from e

    @staticmethod
    def _remote_error(response: httpx.Response) -> R4RemoteError:
        """Ошибка из тела {code, message}, иначе из HTTP статуса."""
        reason = response.reason_phrase
        try:
            data = response.json()
        except ValueError:
            data = None

        if isinstance(data, dict) and data.get("code") is not None:
            return R4RemoteError(
                str(data.get("message") or reason),
                code=str(data["code"]),
                status_code=response.status_code,
            )

        return R4RemoteError(
            reason,
            code=str(response.status_code),
            status_code=response.status_code,
        )

    # === ЭНДПОИНТЫ ===

    async def get_bcv_rate(self, request: BcvRequest, *, timeout: float | None = None) -> BcvResponse:
        """Официальный курс BCV для валюты на дату."""
        return await self._post(R4Endpoint.BCV_RATE, request, BcvResponse, timeout)

    async def send_vuelto(self, request: VueltoRequest, *, timeout: float | None = None) -> VueltoResponse:
        """Вульто: исходящий паго мовиль плательщику."""
        return await self._post(R4Endpoint.VUELTO, request, VueltoResponse, timeout)

    async def charge_c2p(self, request: C2pRequest, *, timeout: float | None = None) -> C2pResponse:
        """
        Cobro C2P: списание по телефону, банку и документу плательщика.

        Подпись начинается с пробела (особенность контракта банка).
        """
        return await self._post(R4Endpoint.C2P, request, C2pResponse, timeout)

    async def reverse_c2p(
        self, request: C2pReversalRequest, *, timeout: float | None = None
    ) -> C2pReversalResponse:
        return await self._post(R4Endpoint.C2P_REVERSAL, request, C2pReversalResponse, timeout)

    async def disperse_payments(
        self, request: DispersionRequest, *, timeout: float | None = None
    ) -> DispersionResponse:
        """
        Пакетная выплата получателям (R4pagos).

        Результат в теле: success=False при статусе 200 не ошибка клиента.
        Собрать запрос из списка получателей помогает dispersion.build_dispersion_request().
        """
        return await self._post(R4Endpoint.DISPERSION, request, DispersionResponse, timeout)

    async def generate_otp(
        self, request: GenerateOtpRequest, *, timeout: float | None = None
    ) -> GenerateOtpResponse:
        """Первый шаг дебета инмедиато: банк отправляет OTP плательщику."""
        return await self._post(R4Endpoint.GENERATE_OTP, request, GenerateOtpResponse, timeout)

    async def immediate_debit(
        self, request: ImmediateDebitRequest, *, timeout: float | None = None
    ) -> ImmediateDebitResponse:
        """Второй шаг: дебет с OTP, полученным плательщиком."""
        return await self._post(R4Endpoint.IMMEDIATE_DEBIT, request, ImmediateDebitResponse, timeout)

    async def immediate_credit(
        self, request: ImmediateCreditRequest, *, timeout: float | None = None
    ) -> ImmediateCreditResponse:
        return await self._post(R4Endpoint.IMMEDIATE_CREDIT, request, ImmediateCreditResponse, timeout)

    async def immediate_credit_account(
        self, request: ImmediateCreditAccountRequest, *, timeout: float | None = None
    ) -> ImmediateCreditAccountResponse:
        return await self._post(
            R4Endpoint.IMMEDIATE_CREDIT_ACCOUNT, request, ImmediateCreditAccountResponse, timeout
        )

    async def mandate_by_account(
        self, request: MandateAccountRequest, *, timeout: float | None = None
    ) -> MandateResponse:
        """Домисилиасьон по 20-значному счёту."""
        return await self._post(R4Endpoint.MANDATE_ACCOUNT, request, MandateResponse, timeout)

    async def mandate_by_phone(
        self, request: MandatePhoneRequest, *, timeout: float | None = None
    ) -> MandateResponse:
        """Домисилиасьон по телефону."""
        return await self._post(R4Endpoint.MANDATE_PHONE, request, MandateResponse, timeout)

    async def get_operation_status(
        self, request: OperationStatusRequest, *, timeout: float | None = None
    ) -> OperationStatusResponse:
        """Статус операции по UUID (для сверки)."""
        return await self._post(R4Endpoint.OPERATION_STATUS, request, OperationStatusResponse, timeout)
