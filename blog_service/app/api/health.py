from __future__ import annotations

from fastapi import APIRouter, Request


router = APIRouter()


@router.get("/health", summary="헬스 체크")
async def health(request: Request) -> dict[str, str]:
    return {"status": "ok", "storage": request.app.state.config.storage.backend}
