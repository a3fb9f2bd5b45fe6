from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from app.core.settings import settings
from app.services.loan_store import get_loan_store
from app.services.staff_store import get_staff_store

APP_VERSION = "0.1.0"


def _check_stores() -> dict[str, Any]:
    try:
        return {"status": "ok", "staff": len(get_staff_store()), "loans": len(get_loan_store())}
    except Exception as exc:  # pragma: no cover - exercised in runtime
        return {"status": "error", "error": str(exc)}


async def live_payload() -> dict[str, Any]:
    stores = _check_stores()
    return {
        "status": stores["status"],
        "version": APP_VERSION,
        "environment": settings.environment,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "checks": {"stores": stores},
    }
