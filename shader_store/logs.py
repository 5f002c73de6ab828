from __future__ import annotations

import json
import logging
import time
import uuid
import datetime as dt
from typing import Optional

OPS_LOGGER = "shader_store.ops"
_ops = logging.getLogger(OPS_LOGGER)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | int = "INFO"):
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)


class LogContext:
    """One operation-log record per boundary command, emitted through logging."""

    def __init__(self, action: str):
        self.action = action
        self.request_id = str(uuid.uuid4())
        self.start = time.perf_counter()
        self.payload = None
        self.entity_type = None
        self.entity_id = None

    def set_entity(self, etype: str, eid):
        self.entity_type = etype
        self.entity_id = None if eid is None else str(eid)

    def set_payload(self, obj): self.payload = obj

    def to_record(self, result: str = "OK", err: Optional[str] = None) -> dict:
        elapsed_ms = int((time.perf_counter() - self.start) * 1000)
        return {
            "ts": dt.datetime.now(dt.timezone.utc).isoformat(),
            "action": self.action,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "request_id": self.request_id,
            "payload_json": json.dumps(self.payload, ensure_ascii=False, default=str) if self.payload is not None else None,
            "result": result,
            "err_msg": err,
            "latency_ms": elapsed_ms,
        }

    def write(self, result: str = "OK", err: Optional[str] = None) -> dict:
        rec = self.to_record(result, err)
        level = logging.INFO if result == "OK" else logging.WARNING
        _ops.log(
            level,
            "%s %s %s/%s %sms%s",
            rec["action"], rec["result"], rec["entity_type"], rec["entity_id"],
            rec["latency_ms"], f" err={err}" if err else "",
            extra={"oplog": rec},
        )
        return rec
