# massage_booking/models/catalog.py
"""
Catalog Models - Packages and add-on services
Source of truth for current prices; appointments keep their own snapshot.
"""
from decimal import Decimal, ROUND_HALF_UP
from sqlalchemy import Column, String, Numeric, Integer, Boolean, DateTime, Text
from sqlalchemy.sql import func
from massage_booking.models.base import Base

CENTS = Decimal("0.01")


def discounted_price(base_price: Decimal, discount_percentage: Decimal) -> Decimal:
    """current price = base price x (1 - discount / 100), rounded to cents"""
    base_price = Decimal(str(base_price))
    discount_percentage = Decimal(str(discount_percentage))
    price = base_price * (Decimal(1) - discount_percentage / Decimal(100))
    return price.quantize(CENTS, rounding=ROUND_HALF_UP)


class Package(Base):
    __tablename__ = "packages"

    id = Column(String(50), primary_key=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")

    duration_minutes = Column(Integer, nullable=False)

    # Pricing; current_price is derived and only written through reprice()
    base_price = Column(Numeric(10, 2), nullable=False)
    discount_percentage = Column(Numeric(5, 2), nullable=False, default=0)
    current_price = Column(Numeric(10, 2), nullable=False)
    discount_label = Column(String(100), nullable=True)  # e.g., "Holiday Special"

    category = Column(String(20), nullable=False, default="standard")  # standard, specialty, addon
    has_addons = Column(Boolean, nullable=False, default=False)

    # Status and ordering
    is_active = Column(Boolean, nullable=False, default=True, index=True)
    sort_order = Column(Integer, nullable=False, default=999)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<Package(id={self.id}, name={self.name})>"

    def reprice(self):
        self.current_price = discounted_price(self.base_price, self.discount_percentage or 0)

    def to_dict(self):
        """Convert to dictionary for API responses"""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "duration_minutes": self.duration_minutes,
            "formatted_duration": self.formatted_duration,
            "base_price": float(self.base_price),
            "discount_percentage": float(self.discount_percentage or 0),
            "current_price": float(self.current_price),
            "discount_label": self.discount_label,
            "category": self.category,
            "has_addons": self.has_addons,
            "is_active": self.is_active,
            "sort_order": self.sort_order,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    @property
    def formatted_duration(self) -> str:
        """Return human-readable duration string"""
        hours = self.duration_minutes // 60
        minutes = self.duration_minutes % 60

        if hours > 0 and minutes > 0:
            return f"{hours}h {minutes}m"
        elif hours > 0:
            return f"{hours}h"
        else:
            return f"{minutes}m"


class AddOn(Base):
    __tablename__ = "addons"

    id = Column(String(50), primary_key=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Numeric(10, 2), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    sort_order = Column(Integer, nullable=False, default=999)

    def __repr__(self):
        return f"<AddOn(id={self.id}, name={self.name})>"

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "price": float(self.price),
            "is_active": self.is_active,
            "sort_order": self.sort_order,
        }
