#!/usr/bin/env python3
# main.py
"""
Главная точка входа R4 Conecta.
Запускает приёмник вебхуков или выполняет разовые запросы к API банка.
"""

from __future__ import annotations

import asyncio
import sys

from src.config import settings
from src.common.logger import setup_logging, log_info, log_error
from src.common.constants import TypeMsg
from src.r4_sdk import (
    BcvRequest,
    OperationStatusRequest,
    R4Client,
    R4Error,
    describe_code,
)
from src.r4_sdk.amounts import venezuela_today


async def run_webhooks() -> None:
    """Запускает приёмник вебхуков R4 (R4consulta, R4notifica)."""
    import uvicorn

    await log_info(
        f"Запуск R4 webhooks на порту {settings.deployment.R4_WEBHOOKS_PORT}...",
        type_msg=TypeMsg.INFO,
    )

    config = uvicorn.Config(
        "src.services.r4_webhooks.app:app",
        host=settings.deployment.R4_WEBHOOKS_HOST,
        port=settings.deployment.R4_WEBHOOKS_PORT,
        reload=settings.system.DEBUG,
        log_level="debug" if settings.system.DEBUG else "info",
    )

    server = uvicorn.Server(config)
    try:
        await server.serve()
    except asyncio.CancelledError:
        await log_info("R4 webhooks: graceful shutdown", type_msg=TypeMsg.DEBUG)
        await server.shutdown()


async def run_bcv(currency: str = "USD", value_date: str | None = None) -> int:
    """Печатает курс BCV; дата по умолчанию: сегодня по времени Венесуэлы."""
    async with R4Client.from_settings(settings) as client:
        response = await client.get_bcv_rate(
            BcvRequest(currency=currency, value_date=value_date or venezuela_today())
        )

    await log_info(
        f"BCV {currency} на {response.fechavalor}: {response.tipocambio} "
        f"(code={response.code}, {describe_code(response.code)})"
    )
    return 0


async def run_status(operation_id: str) -> int:
    """Печатает статус операции по UUID."""
    async with R4Client.from_settings(settings) as client:
        response = await client.get_operation_status(OperationStatusRequest(operation_id=operation_id))

    await log_info(
        f"Операция {operation_id}: code={response.code} ({describe_code(response.code)}), "
        f"success={response.success}, reference={response.reference}"
    )
    return 0


async def main(argv: list[str]) -> int:
    """
    Главная функция запуска.

    Args:
        argv: Аргументы без имени скрипта
    """
    setup_logging()

    mode = argv[0].lower() if argv else "webhooks"

    try:
        if mode == "webhooks":
            await run_webhooks()
            return 0
        if mode == "bcv":
            return await run_bcv(*argv[1:3])
        if mode == "status":
            if len(argv) < 2:
                await log_error("Нужен UUID операции: python main.py status <id>")
                return 2
            return await run_status(argv[1])
    except R4Error as e:
        await log_error(f"Ошибка R4: {e}")
        return 1

    await log_error(f"Неизвестный режим: {mode}")
    print_usage()
    return 2


def print_usage() -> None:
    """Выводит справку по использованию."""
    print("""
R4 Conecta: клиент банковского API и приёмник вебхуков

Использование:
    python main.py [mode] [args]

Режимы:
    webhooks                     Приёмник вебхуков R4 (:8095)
    bcv [MONEDA] [YYYY-MM-DD]    Курс BCV (по умолчанию USD на сегодня)
    status <UUID>                Статус операции (ConsultarOperaciones)

Секреты (R4_COMMERCE_TOKEN, R4_WEBHOOK_TOKEN) задаются в .env
    """)


if __name__ == "__main__":
    args = sys.argv[1:]
    if args and args[0] in ("--help", "-h"):
        print_usage()
        sys.exit(0)

    try:
        sys.exit(asyncio.run(main(args)))
    except KeyboardInterrupt:
        print("\nОстановлено")
