from fastapi import APIRouter

from roster.interfaces.http.routers import accounts, auth


def create_api_router(prefix: str = "") -> APIRouter:
    router = APIRouter(prefix=prefix)
    router.include_router(auth.router, prefix="/auth", tags=["auth"])
    router.include_router(accounts.router, prefix="/accounts", tags=["accounts"])
    return router


__all__ = [
    "create_api_router",
]
