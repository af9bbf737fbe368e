# src/r4_sdk/amounts.py
"""
Каноничное строковое представление сумм, дат и референсов R4.

Одна и та же строка попадает и в JSON-тело запроса, и в строку подписи,
поэтому всё форматирование собрано здесь.
"""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal, InvalidOperation


# Максимум 8 цифр целой части и 2 знака после точки
MAX_INTEGER_DIGITS = 8
AMOUNT_QUANTUM = Decimal("0.01")

# Часовой пояс Венесуэлы (UTC-4, без перехода на летнее время)
VENEZUELA_TZ = timezone(timedelta(hours=-4))

BCV_DATE_FORMAT = "%Y-%m-%d"
DISPERSION_DATE_FORMAT = "%m/%d/%Y"

_AMOUNT_RE = re.compile(r"^\d+(\.\d{1,2})?$")


def format_amount(value: str | int | float | Decimal) -> str:
    """
    Привести сумму к каноничному виду: "1234.50".

    Разделитель дробной части: точка, без разделителей тысяч,
    ровно два знака после точки.

    Raises:
        ValueError: Некорректная, отрицательная или нулевая сумма,
            больше двух знаков после точки или больше 8 цифр целой части.
    """
    if isinstance(value, bool):
        raise ValueError(f"Некорректная сумма: {value!r}")

    if isinstance(value, float):
        value = repr(value)

    if isinstance(value, str):
        text = value.strip()
        if not _AMOUNT_RE.match(text):
            raise ValueError(f"Некорректная сумма: {value!r}")
        amount = Decimal(text)
    elif isinstance(value, (int, Decimal)):
        try:
            amount = Decimal(value)
        except InvalidOperation as e:
            raise ValueError(f"Некорректная сумма: {value!r}") from e
        if not amount.is_finite():
            raise ValueError(f"Некорректная сумма: {value!r}")
    else:
        raise ValueError(f"Некорректная сумма: {value!r}")

    if amount <= 0:
        raise ValueError(f"Сумма должна быть положительной: {value!r}")

    quantized = amount.quantize(AMOUNT_QUANTUM)
    if quantized != amount:
        raise ValueError(f"Больше двух знаков после точки: {value!r}")

    integer_part = f"{quantized:f}".split(".")[0]
    if len(integer_part) > MAX_INTEGER_DIGITS:
        raise ValueError(f"Больше {MAX_INTEGER_DIGITS} цифр в целой части: {value!r}")

    return f"{quantized:f}"


def sum_amounts(amounts: list[str]) -> str:
    """Точная сумма каноничных строк (без ошибок округления float)."""
    total = sum((Decimal(format_amount(a)) for a in amounts), Decimal("0"))
    return format_amount(total)


def format_bcv_date(value: str | date) -> str:
    """Дата консультации курса BCV: YYYY-MM-DD."""
    if isinstance(value, datetime):
        value = value.date()
    if isinstance(value, date):
        return value.strftime(BCV_DATE_FORMAT)
    try:
        parsed = datetime.strptime(value, BCV_DATE_FORMAT)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Ожидается дата YYYY-MM-DD: {value!r}") from e
    # strptime принимает "2024-1-5", банку нужны ведущие нули
    return parsed.strftime(BCV_DATE_FORMAT)


def format_dispersion_date(value: str | date) -> str:
    """Дата дисперсии: MM/DD/YYYY."""
    if isinstance(value, datetime):
        value = value.date()
    if isinstance(value, date):
        return value.strftime(DISPERSION_DATE_FORMAT)
    try:
        datetime.strptime(value, DISPERSION_DATE_FORMAT)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Ожидается дата MM/DD/YYYY: {value!r}") from e
    if len(value) != 10:
        raise ValueError(f"Ожидается дата MM/DD/YYYY: {value!r}")
    return value


def venezuela_today(now: datetime | None = None) -> date:
    """Текущая дата по времени Венесуэлы."""
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(VENEZUELA_TZ).date()


def format_reference(reference: str, length: int = 8) -> str:
    """Первые `length` символов референса, дополненные нулями слева."""
    return reference[:length].rjust(length, "0")
