# exam_paper/core/logging.py
import logging
import json
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from exam_paper.core.settings import settings

logger = logging.getLogger("exam_paper")
logger.setLevel(settings.LOG_LEVEL)

SAFE_ATTR_BLOCKLIST = {
    "args","asctime","created","exc_info","exc_text","filename",
    "funcName","levelname","levelno","lineno","module","msecs",
    "message","msg","name","pathname","process","processName",
    "relativeCreated","stack_info","thread","threadName","taskName",
}

class JsonFormatter(logging.Formatter):
    """
    Standard JSON log line:
    {
      "ts": "2025-10-24T01:23:45.678Z",
      "ts_ms": 1698101025678,
      "level": "INFO",
      "logger": "exam_paper.services.paper_generator",
      "msg": "paper_generated",
      "paper_type": "mid1",
      "pool_version": 3,
      "elapsed_ms": 4,
      ... (extra)
    }
    """
    def format(self, record: logging.LogRecord) -> str:
        now = datetime.now(timezone.utc)
        payload: Dict[str, Any] = {
            "ts": now.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "ts_ms": int(now.timestamp() * 1000),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
            "service": settings.SERVICE_NAME,
        }

        # extra fields; the base keys above win
        for k, v in record.__dict__.items():
            if k in SAFE_ATTR_BLOCKLIST or k in payload:
                continue
            payload[k] = v

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        try:
            return json.dumps(payload, ensure_ascii=False, default=str)
        except TypeError:
            safe = {k: (str(v) if not isinstance(v, (str, int, float, bool, type(None), dict, list)) else v)
                    for k, v in payload.items()}
            return json.dumps(safe, ensure_ascii=False)

def configure_logging(level: Optional[str] = None) -> None:
    """
    - Swap the root logger's handlers for a single JSON stdout handler
    - level defaults to settings.LOG_LEVEL
    """
    level = level or settings.LOG_LEVEL
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter())

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level.upper())
    logger.setLevel(level.upper())

# convenience: one line per generate request
def log_generation(logger, paper_type, pool_version, attempt, elapsed_ms, result, error: Optional[str] = None):
    logger.info(
        f"[PAPER] paper_type={paper_type} pool_version={pool_version} "
        f"attempt={attempt} result={result} elapsed={elapsed_ms}ms error={error}"
    )
