from datetime import date

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

import main
from src.r4_sdk import BcvResponse, OperationStatusResponse, R4RemoteError, R4TransportError


@pytest.fixture
def r4_client():
    client = MagicMock()
    client.get_bcv_rate = AsyncMock(
        return_value=BcvResponse(code="00", fechavalor="2024-01-15", tipocambio=36.5)
    )
    client.get_operation_status = AsyncMock(
        return_value=OperationStatusResponse(code="00", success=True, reference="12345678")
    )
    context = MagicMock()
    context.__aenter__.return_value = client
    with patch("main.R4Client") as mock_cls:
        mock_cls.from_settings.return_value = context
        yield client


@pytest.mark.asyncio
async def test_bcv(r4_client):
    code = await main.main(["bcv", "USD", "2024-01-15"])

    assert code == 0
    request = r4_client.get_bcv_rate.call_args.args[0]
    assert request.to_body() == {"Moneda": "USD", "Fechavalor": "2024-01-15"}


@pytest.mark.asyncio
async def test_bcv_defaults_to_venezuela_today(r4_client):
    with patch("main.venezuela_today", return_value=date(2024, 1, 15)):
        code = await main.main(["bcv", "USD"])

    assert code == 0
    request = r4_client.get_bcv_rate.call_args.args[0]
    assert request.to_body()["Fechavalor"] == "2024-01-15"


@pytest.mark.asyncio
async def test_status(r4_client):
    operation_id = "123e4567-e89b-12d3-a456-426614174000"

    code = await main.main(["status", operation_id])

    assert code == 0
    assert r4_client.get_operation_status.call_args.args[0].operation_id == operation_id


@pytest.mark.asyncio
async def test_status_requires_id(r4_client):
    assert await main.main(["status"]) == 2
    r4_client.get_operation_status.assert_not_called()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [R4RemoteError("denied", code="99", status_code=400), R4TransportError("timeout")],
)
async def test_r4_error_returns_1(r4_client, error):
    r4_client.get_bcv_rate.side_effect = error

    assert await main.main(["bcv"]) == 1


@pytest.mark.asyncio
async def test_unknown_mode():
    assert await main.main(["unknown"]) == 2
