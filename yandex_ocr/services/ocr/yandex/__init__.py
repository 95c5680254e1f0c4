"""Usage: Yandex Cloud OCR client (async submit + poll)."""

from yandex_ocr.services.ocr.yandex.client import YandexOcrClient, render_completion_text
from yandex_ocr.services.ocr.yandex.credentials import AuthMode, CredentialStore
from yandex_ocr.services.ocr.yandex.exceptions import (
    ConstructionError,
    IssuerInvocationError,
    PollExhaustedError,
    PollTimeoutError,
    ProviderError,
    TokenDecodeError,
    TokenRefreshError,
    TokenShapeError,
    TransportError,
    UnexpectedShapeError,
    ValidationError,
    YandexOcrError,
)
from yandex_ocr.services.ocr.yandex.token import CommandTokenIssuer, TokenRefresher

__all__ = [
    "YandexOcrClient",
    "render_completion_text",
    "AuthMode",
    "CredentialStore",
    "CommandTokenIssuer",
    "TokenRefresher",
    "YandexOcrError",
    "ConstructionError",
    "TokenRefreshError",
    "IssuerInvocationError",
    "TokenDecodeError",
    "TokenShapeError",
    "ValidationError",
    "TransportError",
    "ProviderError",
    "UnexpectedShapeError",
    "PollExhaustedError",
    "PollTimeoutError",
]
