from fastapi import APIRouter

from seller_finance.api.endpoints import sellers, system, vendors

api_router = APIRouter()
api_router.include_router(system.router, tags=["system"])
api_router.include_router(vendors.router, prefix="/vendors", tags=["vendors"])
api_router.include_router(sellers.router, prefix="/sellers", tags=["sellers"])
