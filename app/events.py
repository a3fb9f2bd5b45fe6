import logging

from fastapi import FastAPI

from app.services.loan_store import get_loan_store
from app.services.staff_store import get_staff_store

logger = logging.getLogger(__name__)


def register_event_handlers(app: FastAPI) -> None:
    @app.on_event("startup")
    async def on_startup() -> None:
        logger.info("Application startup")
        # Load both data files up front so a bad file fails the boot, not a request
        get_staff_store()
        get_loan_store()

    @app.on_event("shutdown")
    async def on_shutdown() -> None:
        logger.info("Application shutdown")
