"""Errors raised by the Yandex OCR client.

Every error carries the stage it happened in, so callers can tell credential
problems from transport problems from provider-reported ones.
"""


class YandexOcrError(Exception):
    """Base error of the Yandex OCR client."""

    stage = "client"

    def __init__(self, message: str, *, stage: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        if stage is not None:
            self.stage = stage

    def __str__(self) -> str:
        return f"{self.stage}: {self.message}"


class ConstructionError(YandexOcrError):
    """No usable credential at construction time."""

    stage = "construct"


class TokenRefreshError(YandexOcrError):
    """The IAM token could not be refreshed."""

    stage = "token"


class IssuerInvocationError(TokenRefreshError):
    """The token issuer could not be run or exited with an error."""


class TokenDecodeError(TokenRefreshError):
    """The token issuer produced non-text output."""


class TokenShapeError(TokenRefreshError):
    """The issued token does not match the expected pattern."""


class ValidationError(YandexOcrError):
    """Caller input is malformed; nothing was sent."""

    stage = "validate"


class TransportError(YandexOcrError):
    """The provider could not be reached."""


class ProviderError(YandexOcrError):
    """The provider answered with an error."""

    def __init__(self, message: str, *, stage: str | None = None, status_code: int | None = None) -> None:
        super().__init__(message, stage=stage)
        self.status_code = status_code


class UnexpectedShapeError(YandexOcrError):
    """Response body matches neither the success nor the error schema."""

    def __init__(self, message: str, *, stage: str | None = None, body: str | None = None) -> None:
        super().__init__(message, stage=stage)
        self.body = body


class PollExhaustedError(YandexOcrError):
    """Polling attempts were consumed without a result."""

    stage = "poll"

    def __init__(
        self,
        message: str,
        *,
        attempts: int,
        last_status: int | None = None,
        last_error: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.attempts = attempts
        self.last_status = last_status
        self.last_error = last_error


class PollTimeoutError(PollExhaustedError):
    """Polling was abandoned after the caller's deadline."""
