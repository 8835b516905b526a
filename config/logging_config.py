# Logging setup for the campaign marketplace API
# JSON lines on stdout by default; LOG_FORMAT=text falls back to plain lines

import json
import logging
import socket
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from config.app_config import LOG_LEVEL, LOG_FORMAT, SERVICE_NAME

_RESERVED = {
    "name", "msg", "args", "levelname", "levelno", "pathname", "filename", "module",
    "exc_info", "exc_text", "stack_info", "lineno", "funcName", "created", "msecs",
    "relativeCreated", "thread", "threadName", "processName", "process", "message",
    "asctime", "taskName",
}

TEXT_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def _utc_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        base: Dict[str, Any] = {
            "ts": _utc_iso(),
            "level": record.levelname,
            "logger": record.name,
            "service": SERVICE_NAME,
            "host": socket.gethostname(),
            "msg": record.getMessage(),
        }

        request_id = getattr(record, "request_id", None)
        if request_id:
            base["request_id"] = request_id

        # Custom extras go under "props" to avoid collisions
        props: Dict[str, Any] = {}
        for k, v in record.__dict__.items():
            if k in _RESERVED or k.startswith("_") or k == "request_id":
                continue
            props[k] = v

        if props:
            base["props"] = props

        if record.exc_info:
            base["exc"] = self.formatException(record.exc_info)

        return json.dumps(base, ensure_ascii=False, default=str)


def configure_logging(level: str = LOG_LEVEL, fmt: str = LOG_FORMAT) -> None:
    """
    Install a single stdout handler on the root logger.
    Safe to call more than once (uvicorn reload, test sessions).
    """
    root = logging.getLogger()
    root.setLevel(level)

    for handler in root.handlers:
        if getattr(handler, "_platform_handler", False):
            return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter() if fmt == "json" else logging.Formatter(TEXT_FORMAT))
    handler._platform_handler = True
    root.addHandler(handler)


def get_logger(name: str, component: Optional[str] = None):
    configure_logging()
    logger = logging.getLogger(name)
    if component:
        return logging.LoggerAdapter(logger, {"component": component})
    return logger
