from fastapi import APIRouter

from yandex_ocr.schemas.common import HealthResponse
from yandex_ocr.state import global_state

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse, summary="Health check")
async def health() -> HealthResponse:
    client = global_state.ocr_client
    return HealthResponse(status="ok", auth_mode=client.store.mode.value if client else None)
