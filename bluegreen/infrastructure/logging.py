"""
Centralized Logging

Architectural Intent:
- One handler on the "bluegreen" logger, human-readable or JSON lines
- Rotation context (app, step index/kind, direction) travels as log record
  extras and becomes top-level JSON fields
- Domain events are audited on "bluegreen.audit" with the event attached
- SSH transport chatter from paramiko stays quiet unless debugging
"""

import json
import logging
import sys
from datetime import datetime, UTC
from bluegreen.domain.events.event_base import DomainEvent

audit_logger = logging.getLogger("bluegreen.audit")

CONTEXT_FIELDS = ("app", "step_index", "step_kind", "direction", "event")

HUMAN_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Loggers of the transport stack that are too chatty at INFO
TRANSPORT_LOGGERS = ("paramiko", "invoke", "fabric")


class JSONFormatter(logging.Formatter):
    """One JSON object per record, carrying any rotation context extras."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in CONTEXT_FIELDS:
            if hasattr(record, name):
                entry[name] = getattr(record, name)
        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def configure_logging(level: int = logging.INFO, json_format: bool = False) -> None:
    """Install the single bluegreen handler on stderr.

    Calling it again replaces the handler, so the CLI can reconfigure after
    reading the config file.
    """
    root = logging.getLogger("bluegreen")
    root.setLevel(level)
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(JSONFormatter() if json_format else logging.Formatter(HUMAN_FORMAT))
    root.addHandler(handler)

    transport_level = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for name in TRANSPORT_LOGGERS:
        logging.getLogger(name).setLevel(transport_level)


async def log_event(event: DomainEvent) -> None:
    """Event bus handler auditing each rotation event."""
    audit_logger.info(
        "%s %s",
        event.event_type,
        event.aggregate_id or "-",
        extra={"app": event.aggregate_id, "event": event.to_dict()},
    )
