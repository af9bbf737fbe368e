# tests/r4_sdk/test_dispersion.py
"""
Тесты сборки запроса дисперсии.
"""

from __future__ import annotations

from datetime import date, datetime, timezone

import pytest
from pydantic import ValidationError

from src.r4_sdk.dispersion import build_beneficiary, build_dispersion_request
from src.r4_sdk.signing import R4Endpoint, build_signature_input


ACCOUNT = "01020123456789012345"


def test_build_beneficiary_normalizes_document():
    """Документ "v-12345678" превращается в "V12345678"."""
    beneficiary = build_beneficiary("Tienda", "v-12345678", ACCOUNT, 12.5)

    assert beneficiary.document == "V12345678"
    assert beneficiary.partial_amount == "12.50"


def test_build_request_from_dicts():
    request = build_dispersion_request(
        [
            {"names": "Tienda Uno", "document": "J-12345678", "account_number": ACCOUNT, "amount": "100.50"},
            {"names": "Tienda Dos", "document": "V87654321", "account_number": ACCOUNT, "amount": 50.25},
        ],
        reference="12345",
        when=date(2024, 1, 15),
    )

    assert request.amount == "150.75"
    assert request.payment_date == "01/15/2024"
    assert request.reference == "00012345"
    assert [b.document for b in request.beneficiaries] == ["J12345678", "V87654321"]
    assert build_signature_input(R4Endpoint.DISPERSION, request.to_body()) == "150.7501/15/2024"


def test_build_request_from_models():
    beneficiary = build_beneficiary("Tienda", "V1", ACCOUNT, "0.10")

    request = build_dispersion_request([beneficiary, beneficiary, beneficiary], "87654321", date(2024, 3, 1))

    assert request.amount == "0.30"


def test_datetime_converted_to_venezuela_date():
    """Поздний вечер UTC-4 ещё прошлые сутки."""
    when = datetime(2024, 1, 16, 1, 30, tzinfo=timezone.utc)

    request = build_dispersion_request(
        [build_beneficiary("Tienda", "V1", ACCOUNT, "1")], "12345678", when,
    )

    assert request.payment_date == "01/15/2024"


def test_default_date_is_today():
    request = build_dispersion_request([build_beneficiary("Tienda", "V1", ACCOUNT, "1")], "12345678")
    assert len(request.payment_date) == 10


def test_empty_beneficiaries():
    with pytest.raises(ValueError, match="получателей"):
        build_dispersion_request([], "12345678")


def test_empty_reference():
    with pytest.raises(ValueError, match="референс"):
        build_dispersion_request([build_beneficiary("Tienda", "V1", ACCOUNT, "1")], "")


def test_invalid_account():
    with pytest.raises(ValidationError):
        build_dispersion_request(
            [{"names": "Tienda", "document": "V1", "account_number": "123", "amount": "1"}],
            "12345678",
        )
