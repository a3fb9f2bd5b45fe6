"""Read-only loan collection with the predicates the API needs."""

from __future__ import annotations

import json
import logging
from datetime import datetime, time, timezone
from functools import lru_cache
from pathlib import Path
from typing import Iterable, Optional

from app.core.settings import settings
from app.schemas.loan import LoanRecord

logger = logging.getLogger(__name__)


def maturity_instant(loan: LoanRecord) -> datetime:
    return datetime.combine(loan.maturity_date, time.min, tzinfo=timezone.utc)


class LoanStore:
    def __init__(self, records: Iterable[LoanRecord]) -> None:
        self._records: tuple[LoanRecord, ...] = tuple(records)

    def __len__(self) -> int:
        return len(self._records)

    def all(self) -> list[LoanRecord]:
        return list(self._records)

    def filter_by_status(self, status: Optional[str]) -> list[LoanRecord]:
        if not status:
            return self.all()
        return [loan for loan in self._records if loan.status == status]

    def expired(self, as_of: Optional[datetime] = None) -> list[LoanRecord]:
        """Loans that matured strictly before ``as_of`` (defaults to now).

        A maturity date is the instant of midnight UTC on that day, so a loan
        maturing today is already expired for the rest of the day. Naive
        ``as_of`` values are read as UTC.
        """
        if as_of is None:
            as_of = datetime.now(timezone.utc)
        elif as_of.tzinfo is None:
            as_of = as_of.replace(tzinfo=timezone.utc)
        return [loan for loan in self._records if maturity_instant(loan) < as_of]

    def by_applicant_email(self, email: str) -> list[LoanRecord]:
        target = email.casefold()
        return [loan for loan in self._records if loan.applicant.email.casefold() == target]

    def get(self, loan_id: str) -> Optional[LoanRecord]:
        for loan in self._records:
            if loan.id == loan_id:
                return loan
        return None

    def exists(self, loan_id: str) -> bool:
        return self.get(loan_id) is not None

    @classmethod
    def from_raw(cls, entries: Iterable[dict]) -> "LoanStore":
        return cls(LoanRecord.model_validate(entry) for entry in entries)

    @classmethod
    def from_file(cls, path: str | Path) -> "LoanStore":
        with open(path, "r", encoding="utf-8") as data_file:
            entries = json.load(data_file)
        store = cls.from_raw(entries)
        logger.info("Loaded %d loan records from %s", len(store), path)
        return store


@lru_cache(maxsize=1)
def get_loan_store() -> LoanStore:
    return LoanStore.from_file(settings.loan_data_path)
