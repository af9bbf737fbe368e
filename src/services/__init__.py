# src/services/__init__.py
"""
Сервисы приложения.

Сервисы:
- r4_webhooks: приём вебхуков банка R4 (R4consulta, R4notifica)
"""

__all__: list[str] = []
