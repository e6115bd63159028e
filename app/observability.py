import json
import logging
from datetime import datetime, timezone

from rich.logging import RichHandler

# Extra attributes copied onto JSON log lines when a record carries them.
_EXTRA_FIELDS = (
    "method", "path", "status_code", "duration_ms",
    "client_ip", "user_agent", "error_kind",
)

_configured = False


class JSONFormatter(logging.Formatter):
    """One JSON object per log record."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "rich") -> None:
    """Attach a single root handler; repeated calls only adjust the level."""
    global _configured
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    if _configured:
        return

    if fmt == "json":
        handler: logging.Handler = logging.StreamHandler()
        handler.setFormatter(JSONFormatter())
    else:
        handler = RichHandler(rich_tracebacks=True, show_path=False)
    logging.root.addHandler(handler)
    _configured = True
