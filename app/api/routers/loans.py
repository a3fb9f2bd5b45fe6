import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.api import deps
from app.core.errors import NotFound
from app.core.logging import get_audit_logger
from app.core.response_envelope import loans_envelope, success_envelope
from app.schemas.auth import Identity, Role
from app.schemas.loan import LoanListResponse, MessageResponse
from app.services.loan_store import LoanStore, get_loan_store
from app.services.loan_views import shape_loans

logger = logging.getLogger(__name__)
audit_logger = get_audit_logger()

router = APIRouter(tags=["loans"])


@router.get("/loans", response_model=LoanListResponse, summary="List loans, optionally by status")
async def list_loans(
    status: Optional[str] = Query(default=None),
    identity: Identity = Depends(deps.get_current_identity),
    loan_store: LoanStore = Depends(get_loan_store),
) -> dict:
    loans = loan_store.filter_by_status(status)
    return loans_envelope(shape_loans(loans, identity.role))


@router.get("/expired-loans", response_model=LoanListResponse, summary="List loans past maturity")
async def list_expired_loans(
    identity: Identity = Depends(deps.get_current_identity),
    loan_store: LoanStore = Depends(get_loan_store),
) -> dict:
    return loans_envelope(shape_loans(loan_store.expired(), identity.role))


@router.get(
    "/user-loans/{user_email}",
    response_model=LoanListResponse,
    summary="List loans for an applicant email (case-insensitive)",
)
async def list_user_loans(
    user_email: str,
    identity: Identity = Depends(deps.get_current_identity),
    loan_store: LoanStore = Depends(get_loan_store),
) -> dict:
    loans = loan_store.by_applicant_email(user_email)
    return loans_envelope(shape_loans(loans, identity.role))


@router.delete("/loans/{loan_id}", response_model=MessageResponse, summary="Acknowledge deletion of a loan")
async def delete_loan(
    loan_id: str,
    identity: Identity = Depends(deps.require_roles(Role.SUPER_ADMIN)),
    loan_store: LoanStore = Depends(get_loan_store),
) -> dict:
    if not loan_store.exists(loan_id):
        raise NotFound("Loan not found")
    # Acknowledge only: the store is read-only for the process lifetime
    audit_logger.info("Loan %s delete acknowledged by staff id=%s", loan_id, identity.id)
    return success_envelope(message=f"Loan with ID {loan_id} has been deleted")
