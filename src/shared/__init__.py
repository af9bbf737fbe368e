# src/shared/__init__.py
"""
Общий код между сервисами.

Модули:
- models: общие Pydantic-модели
"""

__all__: list[str] = []
