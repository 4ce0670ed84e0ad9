"""
Pydantic schemas for business settings validation
"""
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator


class BusinessSettingsUpdate(BaseModel):
    """
    Schema for updating business information.
    All fields are optional - only send what you want to update.
    """
    business_name: Optional[str] = Field(None, min_length=1, max_length=200)
    phone: Optional[str] = Field(None, min_length=7, max_length=30)
    email: Optional[str] = Field(None, max_length=255)
    address_street: Optional[str] = Field(None, max_length=255)
    address_city: Optional[str] = Field(None, max_length=100)
    address_state: Optional[str] = Field(None, max_length=50)
    address_zip: Optional[str] = Field(None, max_length=20)
    timezone: Optional[str] = Field(None, max_length=50)
    tax_rate: Optional[Decimal] = Field(None, ge=0, le=100)
    currency: Optional[str] = Field(None, min_length=3, max_length=3)

    @field_validator('email')
    @classmethod
    def validate_email(cls, v):
        if v is None:
            return v
        if "@" not in v or v.startswith("@") or v.endswith("@"):
            raise ValueError('Email must be a valid address')
        return v.strip().lower()

    @field_validator('currency')
    @classmethod
    def upper_currency(cls, v):
        return v.upper() if v else v


class SettingUpdate(BaseModel):
    """Schema for a key/value setting; the value is stored JSON-encoded"""
    value: Any
    category: str = Field(default="general", min_length=1, max_length=50)
