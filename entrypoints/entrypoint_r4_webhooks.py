#!/usr/bin/env python3
"""
Entrypoint для приёмника вебхуков R4.

Запуск:
    python entrypoint_r4_webhooks.py

Порт по умолчанию: 8095
"""

import sys
from pathlib import Path

# Добавляем корневую директорию проекта в путь
project_root = Path(__file__).parent.parent.resolve()
sys.path.insert(0, str(project_root))

import uvicorn

from src.config import settings


def main() -> None:
    """Запустить приёмник вебхуков R4."""
    uvicorn.run(
        "src.services.r4_webhooks.app:app",
        host=settings.deployment.R4_WEBHOOKS_HOST,
        port=settings.deployment.R4_WEBHOOKS_PORT,
        reload=settings.system.DEBUG,
        log_level=settings.logging.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
