"""Read-only credential lookup backed by the staff JSON file."""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Iterable, Optional

from app.core.security import get_password_hash
from app.core.settings import settings
from app.schemas.users import StaffRecord

logger = logging.getLogger(__name__)


class StaffStore:
    def __init__(self, records: Iterable[StaffRecord]) -> None:
        self._by_email: dict[str, StaffRecord] = {}
        for record in records:
            # First entry wins on duplicate emails
            self._by_email.setdefault(record.email, record)

    def __len__(self) -> int:
        return len(self._by_email)

    def find_by_email(self, email: str) -> Optional[StaffRecord]:
        return self._by_email.get(email)

    @classmethod
    def from_raw(cls, entries: Iterable[dict]) -> "StaffStore":
        """Build a store from legacy entries carrying a plaintext ``password``.

        The plaintext is hashed immediately and never kept on the record.
        """
        records = []
        for entry in entries:
            data = {key: value for key, value in entry.items() if key != "password"}
            data["password_hash"] = get_password_hash(str(entry.get("password", "")))
            records.append(StaffRecord.model_validate(data))
        return cls(records)

    @classmethod
    def from_file(cls, path: str | Path) -> "StaffStore":
        with open(path, "r", encoding="utf-8") as data_file:
            entries = json.load(data_file)
        store = cls.from_raw(entries)
        logger.info("Loaded %d staff records from %s", len(store), path)
        return store


@lru_cache(maxsize=1)
def get_staff_store() -> StaffStore:
    return StaffStore.from_file(settings.staff_data_path)
