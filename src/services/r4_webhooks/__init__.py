# src/services/r4_webhooks/__init__.py
"""
Приёмник вебхуков R4: R4consulta и R4notifica.

Банк ждёт HTTP 200 с булевым ответом в любом случае, в том числе
при неверном токене: {"status": false} или {"abono": false}.
"""
