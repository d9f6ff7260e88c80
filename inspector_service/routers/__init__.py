from fastapi import APIRouter

from . import health, wbxml

api_router = APIRouter()

api_router.include_router(wbxml.router)

__all__ = ["api_router", "health"]
