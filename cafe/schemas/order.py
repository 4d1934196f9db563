from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from datetime import datetime
import uuid

from cafe.models.order import OrderStatus
from cafe.schemas.response import Money


class OrderLine(BaseModel):
    """A menu item as ordered. Extra menu fields sent by the client are kept."""
    model_config = ConfigDict(extra="allow")

    id: int
    name: str
    price: Money = Field(..., ge=0)
    quantity: int = Field(..., gt=0)
    category: Optional[str] = None


class OrderRequest(BaseModel):
    """Schema for the order placement request body."""
    items: List[OrderLine]
    # When omitted the total is computed from the items
    total: Optional[Money] = Field(None, ge=0)


class OrderUpdate(BaseModel):
    """Partial update of an order. Only the fields that are set are written."""
    items: Optional[List[OrderLine]] = None
    total: Optional[Money] = Field(None, ge=0)
    status: Optional[OrderStatus] = None

    def is_empty(self) -> bool:
        return self.items is None and self.total is None and self.status is None


class OrderPlacementResponse(BaseModel):
    """Response schema for a newly placed order."""
    id: uuid.UUID
    order_number: str
    status: OrderStatus
    total: Money


class OrderDetailResponse(BaseModel):
    """Schema for fetching order information."""
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    order_number: str
    items: List[OrderLine]
    total: Money
    status: OrderStatus
    order_time: datetime
    updated_time: Optional[datetime] = None
