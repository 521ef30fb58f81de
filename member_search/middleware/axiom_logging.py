"""Axiom API 로깅 미들웨어.

Axiom API logging middleware.
Captures request/response data for every API call and ships one structured
event per request to Axiom. Without Axiom credentials the same event goes to
the local JSON logger. Sensitive query parameters are masked.
"""

import json
import re
import time
from typing import Any

from axiom_py import Client as AxiomClient
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from member_search.config import settings
from member_search.utils.logging import get_logger

logger = get_logger("member_search.access")

# 마스킹 대상 키 패턴 (Keys to mask in logged parameters)
_SENSITIVE_KEYS = re.compile(
    r"(password|passwd|secret|token|authorization|api_key|apikey|credential)",
    re.IGNORECASE,
)

# 로깅 제외 경로 (Paths excluded from logging)
_SKIP_PATHS = {"/health", "/docs", "/redoc", "/openapi.json"}

_MAX_ERROR_LEN = 500


def _mask_params(params: dict[str, Any]) -> dict[str, Any]:
    """민감 파라미터 마스킹 (Mask sensitive parameter values)."""
    return {k: "***" if _SENSITIVE_KEYS.search(k) else v for k, v in params.items()}


def _error_detail(body: bytes) -> str:
    """에러 응답 본문에서 사유를 추출합니다 (Extract ``detail`` from an error body)."""
    try:
        data = json.loads(body)
        detail: Any = data.get("detail", data) if isinstance(data, dict) else data
        text: str = detail if isinstance(detail, str) else json.dumps(detail, ensure_ascii=False)
    except (json.JSONDecodeError, UnicodeDecodeError):
        text = body.decode("utf-8", errors="replace")
    return text[:_MAX_ERROR_LEN]


class AxiomLoggingMiddleware(BaseHTTPMiddleware):
    """모든 API 요청/응답을 로깅하는 미들웨어.

    Middleware that logs method, path, query parameters, status code,
    duration and, for 4xx/5xx responses, the error detail.
    """

    def __init__(self, app: Any) -> None:
        super().__init__(app)
        self._client: AxiomClient | None = None
        self._dataset: str = settings.AXIOM_DATASET

        if settings.AXIOM_API_TOKEN and settings.AXIOM_DATASET:
            self._client = AxiomClient(token=settings.AXIOM_API_TOKEN)

    def _emit(self, event: dict[str, Any]) -> None:
        if self._client is None:
            level: str = "warning" if event["status_code"] >= 400 else "info"
            getattr(logger, level)("%s %s", event["method"], event["path"], extra={"event": event})
            return
        try:
            self._client.ingest_events(self._dataset, [event])
        except Exception:
            # 전송 실패 시 로컬 로거로 대체 (Fall back to the local logger)
            logger.exception("Axiom ingest failed", extra={"event": event})

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in _SKIP_PATHS:
            return await call_next(request)

        start_time = time.time()
        method = request.method
        path = request.url.path
        query_params = dict(request.query_params) if request.query_params else None

        error_detail: str | None = None
        status_code: int = 500
        try:
            response = await call_next(request)
            status_code = response.status_code

            # 에러 응답이면 본문을 읽어 사유 추출 후 다시 감쌈
            # Read the error body for its detail, then re-wrap it
            if status_code >= 400:
                resp_body = b""
                async for chunk in response.body_iterator:
                    resp_body += chunk if isinstance(chunk, bytes) else chunk.encode("utf-8")
                error_detail = _error_detail(resp_body)
                response = Response(
                    content=resp_body,
                    status_code=status_code,
                    headers=dict(response.headers),
                    media_type=response.media_type,
                )
        except Exception as exc:
            error_detail = f"{type(exc).__name__}: {str(exc)[:300]}"
            raise
        finally:
            event: dict[str, Any] = {
                "method": method,
                "path": path,
                "status_code": status_code,
                "duration_ms": round((time.time() - start_time) * 1000, 2),
            }
            if query_params:
                event["query_params"] = _mask_params(query_params)
            if error_detail:
                event["error"] = error_detail
            self._emit(event)

        return response
