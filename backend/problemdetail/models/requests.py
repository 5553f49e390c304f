"""API request models."""

from pydantic import BaseModel, Field


class PurchaseRequest(BaseModel):
    """Request to charge an account for an item."""

    item: str = Field(..., min_length=1, max_length=200, examples=["/items/annual-plan"])
    cost: int = Field(..., gt=0, description="Price in credits", examples=[50])
