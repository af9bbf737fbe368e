# src/r4_sdk/__init__.py
"""
SDK банковского API R4 Conecta: подписанные запросы, модели, коды ответов.
"""

from src.r4_sdk.client import DEFAULT_BASE_URL, R4Client, R4Config
from src.r4_sdk.codes import NetworkCode, TransferCode, describe_code, is_approved, is_pending
from src.r4_sdk.dispersion import build_beneficiary, build_dispersion_request
from src.r4_sdk.errors import R4Error, R4RemoteError, R4ResponseError, R4TransportError
from src.r4_sdk.models import (
    BcvRequest,
    BcvResponse,
    C2pRequest,
    C2pResponse,
    C2pReversalRequest,
    C2pReversalResponse,
    DispersionBeneficiary,
    DispersionRequest,
    DispersionResponse,
    GenerateOtpRequest,
    GenerateOtpResponse,
    ImmediateCreditAccountRequest,
    ImmediateCreditAccountResponse,
    ImmediateCreditRequest,
    ImmediateCreditResponse,
    ImmediateDebitRequest,
    ImmediateDebitResponse,
    MandateAccountRequest,
    MandatePhoneRequest,
    MandateResponse,
    OperationStatusRequest,
    OperationStatusResponse,
    VueltoRequest,
    VueltoResponse,
)
from src.r4_sdk.signing import SIGNATURE_TABLE, R4Endpoint, SignatureSpec, sign_request
from src.r4_sdk.webhooks import (
    ConsultaRequest,
    ConsultaResponse,
    ConsultaSimfRequest,
    ConsultaSimfResponse,
    NotificaRequest,
    NotificaResponse,
)

__all__ = [
    "DEFAULT_BASE_URL",
    "R4Client",
    "R4Config",
    "R4Endpoint",
    "SignatureSpec",
    "SIGNATURE_TABLE",
    "sign_request",
    # Ошибки
    "R4Error",
    "R4RemoteError",
    "R4ResponseError",
    "R4TransportError",
    # Коды
    "NetworkCode",
    "TransferCode",
    "describe_code",
    "is_approved",
    "is_pending",
    # Дисперсия
    "build_beneficiary",
    "build_dispersion_request",
    # Модели
    "BcvRequest",
    "BcvResponse",
    "VueltoRequest",
    "VueltoResponse",
    "C2pRequest",
    "C2pResponse",
    "C2pReversalRequest",
    "C2pReversalResponse",
    "DispersionBeneficiary",
    "DispersionRequest",
    "DispersionResponse",
    "GenerateOtpRequest",
    "GenerateOtpResponse",
    "ImmediateDebitRequest",
    "ImmediateDebitResponse",
    "ImmediateCreditRequest",
    "ImmediateCreditResponse",
    "ImmediateCreditAccountRequest",
    "ImmediateCreditAccountResponse",
    "MandateAccountRequest",
    "MandatePhoneRequest",
    "MandateResponse",
    "OperationStatusRequest",
    "OperationStatusResponse",
    # Вебхуки
    "ConsultaRequest",
    "ConsultaResponse",
    "ConsultaSimfRequest",
    "ConsultaSimfResponse",
    "NotificaRequest",
    "NotificaResponse",
]
