import logging
import json
import math
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .config import config

SERVICE_NAME = "flipcheck"


def _clean(value: Any) -> Any:
    # money in cents, and NaN/inf would make the line invalid JSON
    if isinstance(value, float):
        return round(value, 2) if math.isfinite(value) else None
    return value


class JsonLogFormatter(logging.Formatter):
    def format(self, record):
        payload = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "service": SERVICE_NAME,
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        # contextual fields from extra={"context": {...}}
        ctx = getattr(record, "context", None)
        if isinstance(ctx, dict):
            payload.update({k: _clean(v) for k, v in ctx.items()})
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def deal_context(deal, metrics=None, **fields) -> Dict[str, Any]:
    """Standard log fields for one deal; pass as extra={"context": ...}."""
    ctx: Dict[str, Any] = {"address": getattr(deal, "address", "") or None}
    if metrics is not None:
        ctx.update(
            score=metrics.score,
            risk=metrics.risk,
            net_profit=metrics.net_profit,
            roi=metrics.roi,
        )
    ctx.update(fields)
    return ctx


def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JsonLogFormatter())
        logger.addHandler(handler)
        logger.setLevel((level or config.LOG_LEVEL).upper())
        logger.propagate = False
    return logger
