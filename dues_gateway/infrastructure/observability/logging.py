"""Structured JSON logging for debt reports and configuration changes"""

import logging
import sys
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Dict, Optional

from pythonjsonlogger import jsonlogger

from dues_gateway.config import settings

LOG_FORMAT = "%(timestamp)s %(level)s %(name)s %(message)s"


def _json_default(value: Any) -> Any:
    # amounts stay exact, dates stay calendar dates
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


class DuesJsonFormatter(jsonlogger.JsonFormatter):
    """Adds UTC timestamp, level and service name to every record"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO", stream=sys.stdout) -> None:
    """Route all loggers to one JSON handler on `stream`"""
    handler = logging.StreamHandler(stream)
    handler.setFormatter(DuesJsonFormatter(LOG_FORMAT, json_default=_json_default))

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers[:] = [handler]


def log_debt_report(
    request_id: str,
    member_id: Optional[str],
    sub_periods_owed: int,
    band: str,
    duration_ms: float,
) -> None:
    logging.info(
        "Debt report completed",
        extra={
            "request_id": request_id,
            "member_id": member_id,
            "step": "debt_report_complete",
            "sub_periods_owed": sub_periods_owed,
            "band": band,
            "duration_ms": duration_ms,
        },
    )


def log_debt_batch(request_id: str, member_count: int, delinquent_count: int, duration_ms: float) -> None:
    logging.info(
        "Debt batch completed",
        extra={
            "request_id": request_id,
            "step": "debt_batch_complete",
            "member_count": member_count,
            "delinquent_count": delinquent_count,
            "duration_ms": duration_ms,
        },
    )
