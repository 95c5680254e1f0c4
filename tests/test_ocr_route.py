import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from yandex_ocr.main import app
from yandex_ocr.services.ocr.yandex import YandexOcrClient
from yandex_ocr.state import global_state

SUCCESS = {"result": {"textAnnotation": {"fullText": "hello", "markdown": "hello"}, "page": "0"}}


def _install_client(monkeypatch, poll_response: httpx.Response, submit_status: int = 200) -> list[httpx.Request]:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        if request.url.path.endswith("/recognizeTextAsync"):
            if submit_status != 200:
                return httpx.Response(submit_status, text="quota exceeded")
            return httpx.Response(200, json={"id": "job-1", "description": "", "done": False})
        return poll_response

    client = YandexOcrClient(
        api_key="KEY",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        max_attempts=2,
        poll_delay=0,
    )
    monkeypatch.setattr(global_state, "ocr_client", client)
    return seen


async def _post(files: dict, data: dict | None = None) -> httpx.Response:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:
        return await client.post("/api/ocr/recognize", files=files, data=data or {})


@pytest.mark.asyncio
async def test_recognize_returns_result(monkeypatch) -> None:
    seen = _install_client(monkeypatch, httpx.Response(200, json=SUCCESS))

    response = await _post(
        {"file": ("scan.jpg", b"fake-jpeg", "image/jpg")},
        {"model": "handwritten", "languages": "ru, en"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["full_text"] == "hello"
    assert body["markdown"] == "hello"
    assert body["result"]["textAnnotation"]["fullText"] == "hello"
    submit = seen[0].content
    assert b'"image/jpeg"' in submit
    assert b'"handwritten"' in submit
    assert b'"en"' in submit


@pytest.mark.asyncio
async def test_recognize_without_client_is_unavailable(monkeypatch) -> None:
    monkeypatch.setattr(global_state, "ocr_client", None)

    response = await _post({"file": ("scan.png", b"fake", "image/png")})

    assert response.status_code == 503


@pytest.mark.asyncio
async def test_recognize_rejects_unsupported_type(monkeypatch) -> None:
    seen = _install_client(monkeypatch, httpx.Response(200, json=SUCCESS))

    response = await _post({"file": ("notes.txt", b"text", "text/plain")})

    assert response.status_code == 415
    assert seen == []


@pytest.mark.asyncio
async def test_recognize_rejects_empty_upload(monkeypatch) -> None:
    _install_client(monkeypatch, httpx.Response(200, json=SUCCESS))

    response = await _post({"file": ("scan.png", b"", "image/png")})

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_provider_error_maps_to_bad_gateway(monkeypatch) -> None:
    _install_client(monkeypatch, httpx.Response(200, json=SUCCESS), submit_status=429)

    response = await _post({"file": ("scan.png", b"fake", "image/png")})

    assert response.status_code == 502
    assert "quota exceeded" in response.json()["detail"]


@pytest.mark.asyncio
async def test_exhausted_polling_maps_to_gateway_timeout(monkeypatch) -> None:
    seen = _install_client(monkeypatch, httpx.Response(404))

    response = await _post({"file": ("scan.png", b"fake", "image/png")})

    assert response.status_code == 504
    assert len(seen) == 3
