from __future__ import annotations

import asyncio
import logging
import shlex
import subprocess
from datetime import timedelta
from typing import Callable

from yandex_ocr.services.ocr.yandex.credentials import AuthMode, CredentialStore
from yandex_ocr.services.ocr.yandex.exceptions import (
    IssuerInvocationError,
    TokenDecodeError,
    TokenShapeError,
)

logger = logging.getLogger(__name__)

TOKEN_VALIDITY = timedelta(hours=3)

TokenIssuer = Callable[[], bytes | str]


class CommandTokenIssuer:
    """Issue an IAM token by running an external command (``yc`` CLI by default)."""

    def __init__(self, command: str = "yc iam create-token") -> None:
        self.command = command

    def __call__(self) -> bytes:
        try:
            completed = subprocess.run(
                shlex.split(self.command),
                capture_output=True,
                check=True,
            )
        except FileNotFoundError as exc:
            raise IssuerInvocationError(f"token issuer not found: {self.command}") from exc
        except subprocess.CalledProcessError as exc:
            stderr = (exc.stderr or b"").decode("utf-8", errors="replace").strip()
            raise IssuerInvocationError(
                f"token issuer exited with code {exc.returncode}: {stderr or 'no output'}"
            ) from exc
        except OSError as exc:
            raise IssuerInvocationError(f"token issuer failed to start: {exc}") from exc
        return completed.stdout


def _strip_line_terminator(raw: str) -> str:
    if raw.endswith("\r\n"):
        return raw[:-2]
    if raw.endswith("\n"):
        return raw[:-1]
    return raw


class TokenRefresher:
    """Keeps the bearer token of a :class:`CredentialStore` fresh.

    The check-and-update sequence runs under a lock, so concurrent requests
    sharing one store invoke the issuer at most once at a time. An issuance
    outlives a cancelled waiter and still updates the store.
    """

    def __init__(
        self,
        store: CredentialStore,
        *,
        issuer: TokenIssuer | None = None,
        validity: timedelta = TOKEN_VALIDITY,
    ) -> None:
        self.store = store
        self.issuer = issuer or CommandTokenIssuer()
        self.validity = validity
        self._lock = asyncio.Lock()
        self._inflight: asyncio.Task[None] | None = None

    def is_fresh(self) -> bool:
        store = self.store
        if not store.token or store.refreshed_at is None:
            return False
        return store.clock() - store.refreshed_at < self.validity

    async def refresh(self, *, force: bool = False) -> None:
        if self.store.mode is not AuthMode.BEARER_TOKEN:
            return

        async with self._lock:
            if self._inflight is None:
                if not force and self.is_fresh():
                    logger.debug("Token refresh not required, last refresh at %s", self.store.refreshed_at)
                    return
                self._inflight = asyncio.create_task(self._issue())
                self._inflight.add_done_callback(self._issue_done)
            inflight = self._inflight

            await asyncio.shield(inflight)

    async def _issue(self) -> None:
        # issuer blocks with no timeout of its own
        loop = asyncio.get_running_loop()
        raw = await loop.run_in_executor(None, self._invoke_issuer)
        token = self._validate(raw)

        self.store.token = token
        self.store.refreshed_at = self.store.clock()
        logger.info("IAM token refreshed at %s", self.store.refreshed_at)

    def _issue_done(self, task: asyncio.Task[None]) -> None:
        if self._inflight is task:
            self._inflight = None
        if not task.cancelled() and task.exception() is not None:
            logger.warning("IAM token refresh failed: %s", task.exception())

    def _invoke_issuer(self) -> bytes | str:
        try:
            return self.issuer()
        except IssuerInvocationError:
            raise
        except Exception as exc:
            raise IssuerInvocationError(f"token issuer failed: {exc}") from exc

    def _validate(self, raw: bytes | str) -> str:
        if isinstance(raw, str):
            text = raw
        elif isinstance(raw, (bytes, bytearray)):
            try:
                text = bytes(raw).decode("utf-8")
            except UnicodeDecodeError as exc:
                raise TokenDecodeError(f"token issuer output is not valid UTF-8: {exc}") from exc
        else:
            raise TokenDecodeError(f"token issuer returned {type(raw).__name__}, expected text")

        token = _strip_line_terminator(text)
        if not self.store.token_pattern.search(token):
            raise TokenShapeError(f"Not valid token: {token!r}")
        return token
