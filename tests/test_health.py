import pytest
from httpx import ASGITransport, AsyncClient

from yandex_ocr.main import app
from yandex_ocr.state import global_state


@pytest.mark.asyncio
async def test_health(monkeypatch) -> None:
    monkeypatch.setattr(global_state, "ocr_client", None)

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:
        response = await client.get("/api/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "auth_mode": None}
