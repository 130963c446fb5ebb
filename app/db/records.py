# app/db/records.py

import uuid
from datetime import datetime, timezone
from typing import Any, Dict


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_identifier() -> str:
    return uuid.uuid4().hex


def new_record(id_field: str, **fields: Any) -> Dict[str, Any]:
    """Fresh record with a stable identifier and matching created/updated stamps."""
    now = utcnow()
    return {
        id_field: new_identifier(),
        **fields,
        "created_at": now,
        "updated_at": now,
    }
