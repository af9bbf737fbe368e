# src/r4_sdk/dispersion.py
"""
Сборка запроса R4pagos из списка получателей.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Iterable, Mapping

from src.r4_sdk.amounts import format_reference, sum_amounts, venezuela_today
from src.r4_sdk.models import DispersionBeneficiary, DispersionRequest


def build_beneficiary(
    names: str,
    document: str,
    account_number: str,
    amount: Any,
) -> DispersionBeneficiary:
    """
    Получатель с нормализованными данными.

    Документ хранится на платформе как "V-12345678", банку нужен "V12345678".
    """
    return DispersionBeneficiary(
        names=names,
        document=(document or "").replace("-", "").upper(),
        account_number=account_number,
        partial_amount=amount,
    )


def build_dispersion_request(
    beneficiaries: Iterable[DispersionBeneficiary | Mapping[str, Any]],
    reference: str,
    when: date | datetime | None = None,
) -> DispersionRequest:
    """
    Собрать DispersionRequest.

    Args:
        beneficiaries: Получатели (модели или словари с ключами
            names, document, account_number, amount)
        reference: Референс ранее полученного платежа
        when: Дата выплаты; по умолчанию сегодня по времени Венесуэлы (UTC-4)

    Returns:
        Запрос, где monto равен точной сумме montoPart

    Raises:
        ValueError: Пустой список получателей или пустой референс
    """
    if not reference:
        raise ValueError("Требуется референс предыдущего платежа")

    personas: list[DispersionBeneficiary] = []
    for item in beneficiaries:
        if isinstance(item, DispersionBeneficiary):
            personas.append(item)
        else:
            personas.append(
                build_beneficiary(
                    names=item["names"],
                    document=item["document"],
                    account_number=item["account_number"],
                    amount=item["amount"],
                )
            )

    if not personas:
        raise ValueError("Нет получателей для дисперсии")

    if when is None:
        payment_date = venezuela_today()
    elif isinstance(when, datetime):
        payment_date = venezuela_today(when)
    else:
        payment_date = when

    return DispersionRequest(
        amount=sum_amounts([p.partial_amount for p in personas]),
        payment_date=payment_date,
        reference=format_reference(reference),
        beneficiaries=personas,
    )
