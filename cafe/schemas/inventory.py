from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional
from datetime import datetime

from cafe.schemas.menu import MenuItemResponse


class StockAction(str, Enum):
    ADD = "add"
    SUBTRACT = "subtract"


class InventoryUpdate(BaseModel):
    """Inventory fields of one menu item; unset fields are left alone."""
    id: int
    stock_quantity: Optional[int] = Field(None, ge=0)
    low_stock_threshold: Optional[int] = Field(None, ge=0)
    unit_type: Optional[str] = None
    ingredients: Optional[Dict[str, float]] = None
    supplier_info: Optional[str] = None


class StockAdjustment(BaseModel):
    id: int
    quantity: int = Field(..., ge=0)
    action: StockAction


class RawMaterialSnapshot(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    unit_type: str
    current_stock: float
    min_stock_level: float


class DishRawMaterialResponse(BaseModel):
    id: int
    dish_id: int
    raw_material_id: int
    quantity_required: float
    raw_material: RawMaterialSnapshot


class InventoryItemResponse(MenuItemResponse):
    raw_materials: List[DishRawMaterialResponse] = []


class DishRawMaterialLink(BaseModel):
    raw_material_id: int
    quantity_required: float = Field(..., gt=0)


class RawMaterialRequest(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    unit_type: str = "kg"
    current_stock: float = Field(0, ge=0)
    min_stock_level: float = Field(5, ge=0)
    supplier_info: Optional[str] = None


class RawMaterialUpdate(BaseModel):
    id: int
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    unit_type: Optional[str] = None
    current_stock: Optional[float] = Field(None, ge=0)
    min_stock_level: Optional[float] = Field(None, ge=0)
    supplier_info: Optional[str] = None


class RawMaterialResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: Optional[str] = None
    unit_type: str
    current_stock: float
    min_stock_level: float
    supplier_info: Optional[str] = None
    is_low_stock: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
