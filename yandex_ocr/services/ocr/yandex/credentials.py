from __future__ import annotations

import enum
import logging
import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable

from yandex_ocr.core.config import DEFAULT_BASE_URL, DEFAULT_TOKEN_PATTERN
from yandex_ocr.services.ocr.yandex.exceptions import ConstructionError

logger = logging.getLogger(__name__)


class AuthMode(str, enum.Enum):
    API_KEY = "api_key"
    BEARER_TOKEN = "bearer_token"
    UNSET = "unset"


def resolve_auth_mode(api_key: str | None, folder_id: str | None) -> AuthMode:
    """API key wins over folder id; with neither the mode stays unset."""

    if api_key:
        return AuthMode.API_KEY
    if folder_id:
        return AuthMode.BEARER_TOKEN
    return AuthMode.UNSET


@dataclass
class CredentialStore:
    """Selected auth mode and its secrets.

    Only :class:`TokenRefresher` mutates ``token`` and ``refreshed_at``.
    """

    base_url: str = DEFAULT_BASE_URL
    api_key: str | None = field(default=None, repr=False)
    token: str | None = field(default=None, repr=False)
    folder_id: str | None = None
    token_pattern: re.Pattern[str] | str = DEFAULT_TOKEN_PATTERN
    languages: list[str] = field(default_factory=lambda: ["ru"])
    clock: Callable[[], datetime] = field(default=datetime.now, repr=False, compare=False)
    refreshed_at: datetime | None = None
    mode: AuthMode = field(init=False, default=AuthMode.UNSET)

    def __post_init__(self) -> None:
        self.base_url = self.base_url or DEFAULT_BASE_URL
        self.api_key = self.api_key or None
        self.token = self.token or None
        self.folder_id = self.folder_id or None
        if isinstance(self.token_pattern, str):
            self.token_pattern = re.compile(self.token_pattern or DEFAULT_TOKEN_PATTERN)
        if not self.languages:
            self.languages = ["ru"]

        self.mode = resolve_auth_mode(self.api_key, self.folder_id)
        if self.mode is AuthMode.UNSET:
            raise ConstructionError("no usable credential supplied: need an API key or a folder id")

        if self.mode is AuthMode.BEARER_TOKEN and self.token and self.refreshed_at is None:
            self.refreshed_at = self.clock()

        logger.debug("Credential store ready: %r", self)

    @classmethod
    def from_api_key(cls, api_key: str, **kwargs) -> CredentialStore:
        return cls(api_key=api_key, **kwargs)

    @classmethod
    def from_folder(cls, folder_id: str, **kwargs) -> CredentialStore:
        return cls(folder_id=folder_id, **kwargs)

    @property
    def needs_refresh(self) -> bool:
        """Bearer mode without a token must refresh before the first request."""

        return self.mode is AuthMode.BEARER_TOKEN and not self.token
