from __future__ import annotations

from typing import Any, Sequence


def success_envelope(message: str | None = None, data: Any = None, **extra: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {"status": "success"}
    if message is not None:
        payload["message"] = message
    payload.update(extra)
    if data is not None:
        payload["data"] = data
    return payload


def loans_envelope(loans: Sequence[dict[str, Any]]) -> dict[str, Any]:
    return success_envelope(results=len(loans), data={"loans": list(loans)})
