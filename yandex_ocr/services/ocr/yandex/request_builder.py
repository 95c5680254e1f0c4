from __future__ import annotations

import logging
import re
from typing import Any, Mapping

import httpx

from yandex_ocr.services.ocr.yandex.credentials import AuthMode, CredentialStore
from yandex_ocr.services.ocr.yandex.token import TokenRefresher

logger = logging.getLogger(__name__)

DATA_LOGGING_HEADER = "x-data-logging-enabled"
FOLDER_HEADER = "x-folder-id"

_DUPLICATE_SLASHES = re.compile(r"/{2,}")


def join_url(base_url: str, path: str) -> str:
    """Join ``base_url`` and ``path`` collapsing repeated ``/`` in the path part."""

    url = httpx.URL(base_url)
    joined = f"{url.path}/{path}"
    return str(url.copy_with(path=_DUPLICATE_SLASHES.sub("/", joined)))


class RequestBuilder:
    """Produces authenticated requests for the OCR endpoints.

    A builder is a cheap handle over a shared store and refresher; token
    refresh is serialized inside the refresher.
    """

    def __init__(
        self,
        store: CredentialStore,
        refresher: TokenRefresher,
        http_client: httpx.AsyncClient,
    ) -> None:
        self.store = store
        self.refresher = refresher
        self._client = http_client

    async def build(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: Mapping[str, str] | None = None,
    ) -> httpx.Request:
        url = join_url(self.store.base_url, path)
        headers = await self.auth_headers()
        logger.debug("Built %s %s (mode=%s)", method.upper(), url, self.store.mode.value)
        return self._client.build_request(method.upper(), url, headers=headers, json=json, params=params)

    async def auth_headers(self) -> dict[str, str]:
        store = self.store
        headers = {DATA_LOGGING_HEADER: "true"}

        if store.mode is AuthMode.API_KEY:
            headers["Authorization"] = f"Api-Key {store.api_key}"
        elif store.mode is AuthMode.BEARER_TOKEN:
            await self.refresher.refresh()
            headers[FOLDER_HEADER] = str(store.folder_id)
            headers["Authorization"] = f"Bearer {store.token}"
        else:
            raise RuntimeError("Auth mode for Yandex OCR is not defined")

        return headers
