"""Main API router — combines all endpoint routers."""

from fastapi import APIRouter

from problemdetail.api.accounts import router as accounts_router
from problemdetail.api.health import router as health_router

api_router = APIRouter()

# Health check
api_router.include_router(health_router, tags=["Health"])

# Accounts (problem detail examples)
api_router.include_router(accounts_router, tags=["Accounts"])
