from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional
from datetime import datetime

from cafe.schemas.response import Money


class MenuItemRequest(BaseModel):
    name: str = Field(..., min_length=1, description="Name of the menu item (e.g., Masala Tea).")
    price: Money = Field(..., ge=0, description="Selling price of the item.")
    category: str = Field("", description="Free-text grouping shown on the menu.")
    is_available: bool = Field(True, description="Whether the item can be ordered.")
    position: Optional[int] = Field(None, ge=0, description="Sort key; appended to the end when omitted.")


class MenuItemUpdate(BaseModel):
    """Partial update of a menu item."""
    name: Optional[str] = Field(None, min_length=1)
    price: Optional[Money] = Field(None, ge=0)
    category: Optional[str] = None
    is_available: Optional[bool] = None
    position: Optional[int] = Field(None, ge=0)


class MenuItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    price: Money
    category: str
    is_available: bool
    position: Optional[int] = None
    stock_quantity: int = 0
    low_stock_threshold: int = 10
    unit_type: str = "pieces"
    ingredients: Optional[Dict[str, float]] = None
    supplier_info: Optional[str] = None
    last_restocked: Optional[datetime] = None


class MenuPositionEntry(BaseModel):
    """One row of the reordered menu. Other menu fields may be present and are ignored."""
    model_config = ConfigDict(extra="ignore")

    id: int
    position: Optional[int] = Field(None, ge=0)


class MenuPositionRequest(BaseModel):
    menu_items: List[MenuPositionEntry] = Field(..., alias="menuItems")
