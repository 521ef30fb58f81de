"""구조화된 JSON 로거 팩토리.

Structured JSON logger factory used when log events stay local
(no Axiom dataset configured) and by the seeder and services.
"""

import json
import logging
import sys
from datetime import datetime, timezone

from member_search.config import settings


class JSONFormatter(logging.Formatter):
    """한 줄 JSON 형식 포매터 (One JSON object per log line)."""

    def format(self, record: logging.LogRecord) -> str:
        log_obj: dict[str, object] = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        # extra={"event": {...}} 로 전달된 필드 병합 (Merge structured extras)
        event = getattr(record, "event", None)
        if isinstance(event, dict):
            log_obj.update(event)
        if record.exc_info and record.exc_info[1]:
            log_obj["exception"] = str(record.exc_info[1])
        return json.dumps(log_obj, default=str, ensure_ascii=False)


def get_logger(name: str = "member_search") -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JSONFormatter())
        logger.handlers = [handler]
        logger.setLevel(settings.LOG_LEVEL)
    return logger
