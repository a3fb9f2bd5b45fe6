from fastapi import APIRouter

from app.api.routers import auth, loans

api_router = APIRouter()
api_router.include_router(auth.router)
api_router.include_router(loans.router)

__all__ = ["api_router"]
