from fastapi import APIRouter

from app.core.health import live_payload

router = APIRouter(tags=["health"])


@router.get("/health", summary="Service liveness check")
async def health_live() -> dict:
    return await live_payload()
