from __future__ import annotations

import os
from contextlib import asynccontextmanager

from fastapi import FastAPI

from common.logger import setup_logger
from common.middleware.request_trace import RequestTraceMiddleware
from common.mongo.client import close_client

from .api.errors import register_exception_handlers
from .api.health import router as health_router
from .api.v1 import api_router
from .config import STORAGE_BACKEND_MONGO, AppConfig, load_config
from .repositories.interfaces import PostStoreInterface
from .services.posts_service import PostsService, build_post_store


@asynccontextmanager
async def lifespan(app: FastAPI):  # pragma: no cover - framework hook
    try:
        yield
    finally:
        if app.state.config.storage.backend == STORAGE_BACKEND_MONGO:
            close_client()


def create_app(
    config: AppConfig | None = None,
    store: PostStoreInterface | None = None,
) -> FastAPI:
    """애플리케이션을 조립한다.

    저장소와 PostsService 는 여기서 한 번만 생성해 app.state 에 보관하고,
    모든 요청 핸들러는 get_posts_service 의존성으로 같은 인스턴스를 주입받는다.
    """

    setup_logger()
    if config is None:
        config = load_config()
    if store is None:
        store = build_post_store(config.storage)

    app = FastAPI(
        title="Blog Post Service",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.posts_service = PostsService(store)

    # 공통 Request/Span ID 로그 미들웨어
    app.add_middleware(RequestTraceMiddleware)
    register_exception_handlers(app)

    app.include_router(health_router, tags=["health"])
    app.include_router(api_router)

    return app


app = create_app()


def main() -> None:
    """명령행에서 실행할 수 있도록 uvicorn 런처를 제공한다."""

    import uvicorn

    port = int(os.getenv("BLOG_SERVICE_PORT", "8000"))
    uvicorn.run(
        "blog_service.app.main:app",
        host="0.0.0.0",
        port=port,
        reload=False,
        access_log=False,
    )


if __name__ == "__main__":  # pragma: no cover - CLI entrypoint
    main()
