# massage_booking/services/business/settings_service.py
"""Service for business profile and key/value settings"""
import json
import logging
from decimal import Decimal
from typing import Any, List, Optional

from sqlalchemy.orm import Session

from massage_booking.models.business import BusinessSettings, Setting
from massage_booking.schemas.business import BusinessSettingsUpdate

logger = logging.getLogger(__name__)

BUSINESS_SETTINGS_ID = 1

# Served when the singleton row has not been seeded yet
FALLBACK_BUSINESS_SETTINGS = {
    "business_name": "Revitalizing Massage",
    "phone": "+1 785-250-4599",
    "email": "alannahsrevitalizingmassage@gmail.com",
    "address_street": "2900 SW Atwood",
    "address_city": "Topeka",
    "address_state": "KS",
    "address_zip": "66614",
    "timezone": "America/Chicago",
    "tax_rate": Decimal("0"),
    "currency": "USD",
}


class SettingsService:
    """Handles business configuration"""

    @staticmethod
    def get_business_settings(db: Session) -> Optional[BusinessSettings]:
        return db.get(BusinessSettings, BUSINESS_SETTINGS_ID)

    @staticmethod
    def get_business_settings_with_fallback(db: Session) -> BusinessSettings:
        """Stored settings, or an unsaved instance built from the fallback profile"""
        settings = SettingsService.get_business_settings(db)
        if settings:
            return settings

        logger.warning("Business settings not found, serving fallback profile")
        return BusinessSettings(id=BUSINESS_SETTINGS_ID, **FALLBACK_BUSINESS_SETTINGS)

    @staticmethod
    def update_business_settings(
            db: Session,
            updates: BusinessSettingsUpdate,
            updated_by: str
    ) -> BusinessSettings:
        """Patch the singleton row, creating it from the fallback profile on first write"""
        settings = SettingsService.get_business_settings(db)
        if not settings:
            settings = BusinessSettings(id=BUSINESS_SETTINGS_ID, **FALLBACK_BUSINESS_SETTINGS)
            db.add(settings)

        for field, value in updates.model_dump(exclude_unset=True).items():
            if value is None:
                continue
            setattr(settings, field, value)
        settings.updated_by = updated_by

        db.commit()
        db.refresh(settings)
        logger.info(f"Business settings updated by {updated_by}")
        return settings

    @staticmethod
    def get_tax_rate(db: Session) -> Decimal:
        return Decimal(str(SettingsService.get_business_settings_with_fallback(db).tax_rate or 0))

    # ------------------------------------------------------------------
    # Key/value settings
    # ------------------------------------------------------------------

    @staticmethod
    def list_settings(db: Session, category: Optional[str] = None) -> List[Setting]:
        query = db.query(Setting)
        if category:
            query = query.filter(Setting.category == category)
        return query.order_by(Setting.key.asc()).all()

    @staticmethod
    def get_setting(db: Session, key: str) -> Optional[Setting]:
        return db.get(Setting, key)

    @staticmethod
    def update_setting(db: Session, key: str, value: Any, category: str = "general") -> Setting:
        """Insert or replace a setting; every value is stored JSON-encoded"""
        string_value = json.dumps(value)

        setting = db.get(Setting, key)
        if setting:
            setting.value = string_value
            setting.category = category
        else:
            setting = Setting(key=key, value=string_value, category=category)
            db.add(setting)

        db.commit()
        db.refresh(setting)
        logger.info(f"Setting '{key}' updated in category '{category}'")
        return setting

    @staticmethod
    def decode_value(setting: Setting) -> Any:
        """Decode the stored JSON; rows written by hand as bare text come back unchanged"""
        try:
            return json.loads(setting.value)
        except ValueError:
            return setting.value

    @staticmethod
    def serialize_setting(setting: Setting) -> dict:
        return {
            "key": setting.key,
            "value": SettingsService.decode_value(setting),
            "category": setting.category,
            "updated_at": setting.updated_at.isoformat() if setting.updated_at else None,
        }
