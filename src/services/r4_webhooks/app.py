# src/services/r4_webhooks/app.py
"""
FastAPI приложение приёмника вебхуков R4.

Endpoints:
- POST /R4consulta - банк спрашивает, принимать ли платёж
- POST /R4notifica - банк уведомляет о зачисленном платеже
- GET /health - проверка здоровья
"""

from __future__ import annotations

import json
from contextlib import asynccontextmanager
from typing import Annotated, Any

from fastapi import Depends, FastAPI, Request
from pydantic import BaseModel, ValidationError

from src.common.constants import WebhookEndpoint
from src.common.logger import log_error, log_info, log_warning, setup_logging
from src.config.loader import R4Settings
from src.r4_sdk.webhooks import ConsultaRequest, ConsultaResponse, NotificaRequest, NotificaResponse
from src.services.r4_webhooks.dependencies import (
    cleanup_dependencies,
    get_r4_settings,
    get_webhook_handler,
)
from src.services.r4_webhooks.guard import check_webhook_request, mask_token
from src.services.r4_webhooks.handler import R4WebhookHandler
from src.shared.models.common import HealthStatus


SERVICE_NAME = "r4_webhooks"
SERVICE_VERSION = "1.0.0"


# === LIFESPAN ===

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Жизненный цикл приложения."""
    setup_logging()
    await log_info("R4 webhooks: старт")

    yield

    await cleanup_dependencies()
    await log_info("R4 webhooks: остановка")


# === APP ===

app = FastAPI(
    title="R4 Webhooks",
    description="Приёмник вебхуков R4 Conecta (R4consulta, R4notifica).",
    version=SERVICE_VERSION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)


# === HEALTH CHECK ===

@app.get("/health", response_model=HealthStatus, tags=["Health"])
async def health_check() -> HealthStatus:
    """Проверка здоровья сервиса."""
    return HealthStatus(
        status="healthy",
        service=SERVICE_NAME,
        version=SERVICE_VERSION,
    )


# === ОБЩАЯ ОБРАБОТКА ===

async def _authorize(request: Request, endpoint: WebhookEndpoint, r4_settings: R4Settings) -> bool:
    """Проверка токена и IP с логированием, как того ждёт сверка с банком."""
    auth_header = request.headers.get("authorization")
    client_ip = request.client.host if request.client else None

    result = check_webhook_request(
        auth_header=auth_header,
        expected_token=r4_settings.R4_WEBHOOK_TOKEN,
        client_ip=client_ip,
        ip_whitelist=r4_settings.R4_WEBHOOK_IP_WHITELIST,
    )

    await log_info(
        f"[R4 {endpoint.value}] Проверка запроса: IP={result.client_ip}, token={mask_token(auth_header)}"
    )

    if not result.authorized:
        await log_warning(f"[R4 {endpoint.value}] Авторизация не пройдена: {result.reason}")
        return False

    # Белый список пока только логируется: реальные IP банка сверяются по логам
    if not result.ip_allowed:
        await log_warning(f"[R4 {endpoint.value}] IP не в белом списке (разрешено): {result.client_ip}")

    return True


async def _parse_payload(request: Request, endpoint: WebhookEndpoint, model: type[BaseModel]) -> Any:
    """Тело вебхука или None, если оно не разбирается."""
    try:
        payload = await request.json()
        return model.model_validate(payload)
    except (json.JSONDecodeError, UnicodeDecodeError, ValidationError) as e:
        await log_warning(f"[R4 {endpoint.value}] Некорректное тело запроса: {e}")
        return None


# === ВЕБХУКИ ===

@app.post("/R4consulta", response_model=ConsultaResponse, tags=["R4"])
async def r4_consulta(
    request: Request,
    handler: Annotated[R4WebhookHandler, Depends(get_webhook_handler)],
    r4_settings: Annotated[R4Settings, Depends(get_r4_settings)],
) -> ConsultaResponse:
    """
    Банк спрашивает, есть ли ожидающий заказ с этим документом и суммой.

    Всегда HTTP 200; отказ передаётся как {"status": false}.
    """
    endpoint = WebhookEndpoint.CONSULTA
    if not await _authorize(request, endpoint, r4_settings):
        return ConsultaResponse(status=False)

    data = await _parse_payload(request, endpoint, ConsultaRequest)
    if data is None:
        return ConsultaResponse(status=False)

    await log_info(f"[R4 {endpoint.value}] IdCliente={data.IdCliente}, Monto={data.Monto}")

    if data.amount() is None:
        await log_warning(f"[R4 {endpoint.value}] Некорректная сумма: {data.Monto}")
        return ConsultaResponse(status=False)

    try:
        accepted = await handler.handle_consulta(data)
    except Exception as e:
        await log_error(f"[R4 {endpoint.value}] Ошибка обработчика: {e}", exc_info=True)
        return ConsultaResponse(status=False)

    await log_info(f"[R4 {endpoint.value}] Решение: status={accepted}")
    return ConsultaResponse(status=bool(accepted))


@app.post("/R4notifica", response_model=NotificaResponse, tags=["R4"])
async def r4_notifica(
    request: Request,
    handler: Annotated[R4WebhookHandler, Depends(get_webhook_handler)],
    r4_settings: Annotated[R4Settings, Depends(get_r4_settings)],
) -> NotificaResponse:
    """
    Банк уведомляет о зачисленном платеже.

    Всегда HTTP 200; {"abono": true} подтверждает, что платёж зачтён.
    """
    endpoint = WebhookEndpoint.NOTIFICA
    if not await _authorize(request, endpoint, r4_settings):
        return NotificaResponse(abono=False)

    data = await _parse_payload(request, endpoint, NotificaRequest)
    if data is None:
        return NotificaResponse(abono=False)

    await log_info(
        f"[R4 {endpoint.value}] Referencia={data.Referencia}, Monto={data.Monto}, CodigoRed={data.CodigoRed}"
    )

    try:
        credited = await handler.handle_notifica(data)
    except Exception as e:
        await log_error(f"[R4 {endpoint.value}] Ошибка обработчика: {e}", exc_info=True)
        return NotificaResponse(abono=False)

    await log_info(f"[R4 {endpoint.value}] Решение: abono={credited}")
    return NotificaResponse(abono=bool(credited))
