"""Structured Logging — JSON log lines carrying donor registry context.

Invariants:
    - Every line has timestamp, level, logger and message
    - Registry context (donor/district/taluk ids, import counts, error_code, path)
      is emitted only when the record carries it
    - setup_logging() is idempotent: re-running it swaps the registry handler,
      never stacks a second one
    - SQLAlchemy engine chatter stays at WARNING unless the app level is DEBUG

Design Decisions:
    - stdlib logging + a small formatter: services log with `extra=`, nothing else
      needs to know the output format
"""

import logging
import json
from datetime import datetime, timezone

CONTEXT_FIELDS = (
    "donor_id", "district_id", "taluk_id",
    "districts_created", "taluks_created", "donors_created",
    "error_code", "path",
)

_HANDLER_NAME = "donor_registry"


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log.update(
            (key, record.__dict__[key])
            for key in CONTEXT_FIELDS
            if record.__dict__.get(key) is not None
        )
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


def build_handler(fmt: str = "json") -> logging.Handler:
    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    return handler


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install the registry handler on the root logger, replacing an earlier one."""
    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)
    handler = build_handler(fmt)
    root.addHandler(handler)

    app_level = getattr(logging, level.upper(), logging.INFO)
    root.setLevel(app_level)
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if app_level <= logging.DEBUG else logging.WARNING,
    )
    return handler
