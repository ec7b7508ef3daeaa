from __future__ import annotations

import json
import logging
from datetime import date, datetime, timezone
from typing import Any, Literal, Optional

from .request_id import get_request_id

AuditAction = Literal[
    "reservation.created",
    "reservation.status_changed",
    "reservation.extended",
    "reservation.overbooked",
]
AuditInitiator = Literal["operator", "system"]


def _build_audit_logger(name: str = "kennel.audit") -> logging.Logger:
    """One JSON document per line on stderr, kept out of the application log."""
    audit = logging.getLogger(name)
    if not audit.handlers:
        stream = logging.StreamHandler()
        stream.setFormatter(logging.Formatter("%(message)s"))
        audit.addHandler(stream)
    audit.setLevel(logging.INFO)
    audit.propagate = False
    return audit


_audit_logger = _build_audit_logger()


def _to_jsonable(value: Any) -> Any:
    if value is None:
        return None
    if hasattr(value, "value"):
        return str(value.value)
    if isinstance(value, date):
        return value.isoformat()
    return value


def emit_audit_log(
    *,
    action: AuditAction,
    initiator: AuditInitiator,
    reservation_id: str,
    dog_name: Optional[str] = None,
    status_from: Any = None,
    status_to: Any = None,
    check_in: Optional[date] = None,
    check_out: Optional[date] = None,
    message: Optional[str] = None,
    extra: Optional[dict[str, Any]] = None,
) -> None:
    """Emit structured JSON audit log. Raises RuntimeError if logging fails."""
    payload: dict[str, Any] = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "level": "info",
        "action": action,
        "initiator": initiator,
        "request_id": get_request_id(),
        "reservation_id": reservation_id,
        "dog_name": dog_name,
        "status_from": _to_jsonable(status_from),
        "status_to": _to_jsonable(status_to),
        "check_in": _to_jsonable(check_in),
        "check_out": _to_jsonable(check_out),
    }
    if message is not None:
        payload["message"] = message
    if extra:
        payload.update({k: _to_jsonable(v) for k, v in extra.items()})

    line = json.dumps({k: v for k, v in payload.items() if v is not None}, ensure_ascii=True)
    try:
        _audit_logger.info(line)
    except Exception as exc:
        raise RuntimeError(f"audit log for reservation {reservation_id} was not written") from exc
