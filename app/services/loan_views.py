"""Role-dependent projection of loan records for API responses."""

from __future__ import annotations

from typing import Any, Iterable

from app.schemas.auth import Role
from app.schemas.loan import LoanRecord

# Applicant fields withheld per role; roles not listed see everything.
_HIDDEN_APPLICANT_FIELDS: dict[str, set[str]] = {
    Role.STAFF.value: {"total_loan"},
}


def shape_loan(loan: LoanRecord, role: str) -> dict[str, Any]:
    hidden = _HIDDEN_APPLICANT_FIELDS.get(role)
    exclude = {"applicant": hidden} if hidden else None
    # model_dump builds fresh containers so callers never alias store state
    return loan.model_dump(mode="json", by_alias=True, exclude_unset=True, exclude=exclude)


def shape_loans(loans: Iterable[LoanRecord], role: str) -> list[dict[str, Any]]:
    return [shape_loan(loan, role) for loan in loans]
