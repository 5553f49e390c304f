"""API response models."""

from pydantic import BaseModel
from typing import Literal


class PurchaseResponse(BaseModel):
    """A completed purchase."""

    account_id: str
    item: str
    cost: int
    balance: int


class HealthResponse(BaseModel):
    """Service health check response."""

    status: Literal["healthy", "unhealthy", "degraded"]
    version: str = "1.0.0"
    uptime_seconds: float
    default_validation_level: str
