# src/config/loader.py
"""
Загрузчик конфигурации проекта.
Единственный источник истины: config/config.json.
Секретные данные (токены R4) переопределяются из переменных окружения.
"""

from __future__ import annotations

import json
import os
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# =============================================================================
# ОПРЕДЕЛЕНИЕ ПУТЕЙ
# =============================================================================

def get_project_root() -> Path:
    """Возвращает корневую директорию проекта."""
    return Path(__file__).parent.parent.parent


def get_config_path() -> Path:
    """Возвращает путь к файлу конфигурации."""
    return get_project_root() / "config" / "config.json"


def load_config_json(path: Path | None = None) -> dict[str, Any]:
    """Загружает config.json и возвращает словарь."""
    config_path = path or get_config_path()
    if not config_path.exists():
        raise FileNotFoundError(f"Файл конфигурации не найден: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        return json.load(f)


# =============================================================================
# PYDANTIC МОДЕЛИ КОНФИГУРАЦИИ
# =============================================================================

class SystemSettings(BaseModel):
    """Системные настройки."""
    PROJECT_NAME: str = "r4_conecta"
    VERSION: str = "1.0.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"


class DeploymentSettings(BaseModel):
    """Настройки развертывания приёмника вебхуков."""
    R4_WEBHOOKS_HOST: str = "0.0.0.0"
    R4_WEBHOOKS_PORT: int = 8095


class LoggingSettings(BaseModel):
    """Настройки логирования."""
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "colored"
    LOG_TO_FILE: bool = False
    LOG_FILE_PATH: str = "logs/app.log"
    LOG_MAX_BYTES: int = 10485760


class R4Settings(BaseModel):
    """Настройки банковского API R4 Conecta."""
    R4_COMMERCE_TOKEN: str = ""
    R4_BASE_URL: str = "https://r4conecta.mibanco.com.ve"
    R4_TIMEOUT: float = 30.0
    R4_WEBHOOK_TOKEN: str = ""
    R4_WEBHOOK_IP_WHITELIST: list[str] = Field(
        default_factory=lambda: ["::1", "127.0.0.1"]
    )

    @field_validator("R4_COMMERCE_TOKEN", "R4_WEBHOOK_TOKEN", mode="before")
    @classmethod
    def get_from_env(cls, v: str, info) -> str:
        """Токены берутся из переменных окружения, если не заданы."""
        if not v:
            return os.getenv(info.field_name, "")
        return v

    @field_validator("R4_BASE_URL", mode="before")
    @classmethod
    def base_url_from_env(cls, v: str) -> str:
        """R4_BASE_URL из окружения имеет приоритет (песочница на стенде)."""
        return os.getenv("R4_BASE_URL") or v


# =============================================================================
# ГЛАВНЫЙ КЛАСС НАСТРОЕК
# =============================================================================

class Settings(BaseSettings):
    """
    Главный класс настроек приложения.
    Агрегирует все секции конфигурации.
    """
    system: SystemSettings = Field(default_factory=SystemSettings)
    deployment: DeploymentSettings = Field(default_factory=DeploymentSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    r4: R4Settings = Field(default_factory=R4Settings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @classmethod
    def from_config_json(cls, path: Path | None = None) -> "Settings":
        """
        Создаёт объект Settings из config.json.
        Секреты переопределяются из переменных окружения.
        """
        config_data = load_config_json(path)

        # Фильтруем комментарии (ключи, начинающиеся с _comment_)
        filtered_data = {k: v for k, v in config_data.items() if not k.startswith("_comment_")}

        # Маппинг полей в секции
        return cls(
            system=SystemSettings(
                PROJECT_NAME=filtered_data.get("PROJECT_NAME", "r4_conecta"),
                VERSION=filtered_data.get("VERSION", "1.0.0"),
                DEBUG=filtered_data.get("DEBUG", False),
                ENVIRONMENT=os.getenv("ENVIRONMENT", filtered_data.get("ENVIRONMENT", "development")),
            ),
            deployment=DeploymentSettings(
                R4_WEBHOOKS_HOST=filtered_data.get("R4_WEBHOOKS_HOST", "0.0.0.0"),
                R4_WEBHOOKS_PORT=int(os.getenv("R4_WEBHOOKS_PORT", filtered_data.get("R4_WEBHOOKS_PORT", 8095))),
            ),
            logging=LoggingSettings(
                LOG_LEVEL=filtered_data.get("LOG_LEVEL", "INFO"),
                LOG_FORMAT=filtered_data.get("LOG_FORMAT", "colored"),
                LOG_TO_FILE=filtered_data.get("LOG_TO_FILE", False),
                LOG_FILE_PATH=filtered_data.get("LOG_FILE_PATH", "logs/app.log"),
                LOG_MAX_BYTES=filtered_data.get("LOG_MAX_BYTES", 10485760),
            ),
            r4=R4Settings(
                R4_COMMERCE_TOKEN=filtered_data.get("R4_COMMERCE_TOKEN", ""),
                R4_BASE_URL=filtered_data.get("R4_BASE_URL", "https://r4conecta.mibanco.com.ve"),
                R4_TIMEOUT=filtered_data.get("R4_TIMEOUT", 30.0),
                R4_WEBHOOK_TOKEN=filtered_data.get("R4_WEBHOOK_TOKEN", ""),
                R4_WEBHOOK_IP_WHITELIST=filtered_data.get(
                    "R4_WEBHOOK_IP_WHITELIST", ["::1", "127.0.0.1"]
                ),
            ),
        )


@lru_cache()
def get_settings() -> Settings:
    """
    Возвращает синглтон настроек приложения.
    Использует кэширование для производительности.
    """
    from dotenv import load_dotenv

    # Загружаем .env файл
    env_path = get_project_root() / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    return Settings.from_config_json()


# Экспорт синглтона для удобного импорта
settings = get_settings()
