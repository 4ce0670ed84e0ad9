"""
Request models for the package / add-on catalog.
current_price is never accepted from clients; unknown fields are ignored.
"""
from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel, Field

CategoryLiteral = Literal["standard", "specialty", "addon"]


class PackageCreate(BaseModel):
    """Request model for creating a package"""
    id: Optional[str] = Field(None, min_length=1, max_length=50)
    name: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    duration_minutes: int = Field(..., ge=5, le=480, description="Duration in minutes")
    base_price: Decimal = Field(..., ge=0)
    discount_percentage: Decimal = Field(default=Decimal("0"), ge=0, le=100)
    discount_label: Optional[str] = Field(None, max_length=100)
    category: CategoryLiteral = "standard"
    has_addons: bool = False
    is_active: bool = True
    sort_order: int = Field(default=999)


class PackageUpdate(BaseModel):
    """Request model for updating a package"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    duration_minutes: Optional[int] = Field(None, ge=5, le=480)
    base_price: Optional[Decimal] = Field(None, ge=0)
    discount_percentage: Optional[Decimal] = Field(None, ge=0, le=100)
    discount_label: Optional[str] = Field(None, max_length=100)
    category: Optional[CategoryLiteral] = None
    has_addons: Optional[bool] = None
    is_active: Optional[bool] = None
    sort_order: Optional[int] = None


class AddOnCreate(BaseModel):
    id: Optional[str] = Field(None, min_length=1, max_length=50)
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    price: Decimal = Field(..., ge=0)
    is_active: bool = True
    sort_order: int = Field(default=999)


class AddOnUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0)
    is_active: Optional[bool] = None
    sort_order: Optional[int] = None
