# massage_booking/models/business.py
"""
Business configuration models: the business profile singleton and a
generic key/value settings table.
"""
from sqlalchemy import Column, String, Integer, Numeric, DateTime, Text
from sqlalchemy.sql import func
from massage_booking.models.base import Base


class BusinessSettings(Base):
    __tablename__ = "business_settings"

    id = Column(Integer, primary_key=True, default=1)
    business_name = Column(String(200), nullable=False)
    phone = Column(String(30), nullable=False)
    email = Column(String(255), nullable=False)
    address_street = Column(String(255), nullable=True)
    address_city = Column(String(100), nullable=True)
    address_state = Column(String(50), nullable=True)
    address_zip = Column(String(20), nullable=True)

    timezone = Column(String(50), nullable=False, default="America/Chicago")
    tax_rate = Column(Numeric(5, 2), nullable=False, default=0)  # percent
    currency = Column(String(3), nullable=False, default="USD")

    updated_by = Column(String(100), nullable=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<BusinessSettings(name={self.business_name})>"

    @property
    def address_full(self) -> str:
        parts = [self.address_street, self.address_city]
        state_zip = " ".join(p for p in (self.address_state, self.address_zip) if p)
        if state_zip:
            parts.append(state_zip)
        return ", ".join(p for p in parts if p)

    def to_dict(self):
        """Convert to dictionary for API responses"""
        return {
            "business_name": self.business_name,
            "phone": self.phone,
            "email": self.email,
            "address_street": self.address_street,
            "address_city": self.address_city,
            "address_state": self.address_state,
            "address_zip": self.address_zip,
            "address_full": self.address_full,
            "timezone": self.timezone,
            "tax_rate": float(self.tax_rate or 0),
            "currency": self.currency,
            "updated_by": self.updated_by,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }


class Setting(Base):
    __tablename__ = "settings"

    key = Column(String(100), primary_key=True)
    value = Column(Text, nullable=False)
    category = Column(String(50), nullable=False, default="general", index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<Setting(key={self.key}, category={self.category})>"
