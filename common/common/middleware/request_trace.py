import logging
import time
import uuid
from urllib.parse import parse_qs

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response


REQUEST_ID_HEADER = "X-Request-Id"
SPAN_ID_HEADER = "X-Span-Id"

# 로그에 남길 요청 바디의 최대 길이
MAX_LOGGED_BODY_LENGTH = 1024

# 노이즈를 줄이기 위해 로그에서 제외할 엔드포인트 경로 목록
IGNORED_LOG_PATHS: set[str] = {"/health"}

_BODY_METHODS = {"POST", "PUT", "PATCH", "DELETE"}


class RequestTraceMiddleware(BaseHTTPMiddleware):
    """Request/Span ID 를 전파하고 요청 단위 로그를 남기는 미들웨어.

    - X-Request-Id 가 없으면 새로 만들고, X-Span-Id 가 없으면 "0" 을 사용한다.
    - request.state 에 request_id, span_id 를 저장하고 응답 헤더에도 설정한다.
    - 응답 상태 코드에 따라 INFO(2xx/3xx), WARNING(4xx), ERROR(5xx) 레벨로 기록한다.
    """

    def __init__(self, app, logger: logging.Logger | None = None) -> None:  # type: ignore[override]
        super().__init__(app)
        self._logger = logger or logging.getLogger("request_trace")

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        span_id = request.headers.get(SPAN_ID_HEADER) or "0"

        request.state.request_id = request_id
        request.state.span_id = span_id
        request.state.request_body = await _read_body_snippet(request)

        should_log = request.url.path not in IGNORED_LOG_PATHS
        start = time.monotonic()

        try:
            response = await call_next(request)
        except Exception:
            if should_log:
                self._logger.exception(
                    "request failed",
                    extra=_build_log_extra(
                        request, duration=time.monotonic() - start
                    ),
                )
            raise

        response.headers.setdefault(REQUEST_ID_HEADER, request_id)
        response.headers.setdefault(SPAN_ID_HEADER, span_id)

        if should_log:
            self._logger.log(
                _level_for_status(response.status_code),
                "completed request",
                extra=_build_log_extra(
                    request,
                    status=response.status_code,
                    duration=time.monotonic() - start,
                ),
            )

        return response


async def _read_body_snippet(request: Request) -> str | None:
    # 바디를 미리 읽어 두어도 Starlette 가 캐시하므로 라우터에서 다시 읽을 수 있다.
    if request.method not in _BODY_METHODS:
        return None

    body_bytes = await request.body()
    if not body_bytes:
        return None
    return body_bytes.decode("utf-8", errors="replace")[:MAX_LOGGED_BODY_LENGTH]


def _level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


def _build_log_extra(
    request: Request,
    status: int | None = None,
    duration: float | None = None,
) -> dict[str, object]:
    extra: dict[str, object] = {
        "request_id": getattr(request.state, "request_id", None),
        "span_id": getattr(request.state, "span_id", None),
        "method": request.method,
        "path": request.url.path,
    }

    if request.url.query:
        parsed = parse_qs(request.url.query, keep_blank_values=True)
        if parsed:
            extra["query_params"] = {
                key: values[0] if len(values) == 1 else values
                for key, values in parsed.items()
            }

    body = getattr(request.state, "request_body", None)
    if body:
        extra["body"] = body

    if status is not None:
        extra["status"] = status

    if duration is not None:
        extra["duration"] = f"{duration * 1000:.3f}ms"

    return extra
