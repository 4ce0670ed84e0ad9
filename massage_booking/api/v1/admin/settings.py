"""
Business settings routes: the business profile and key/value settings
"""
from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session
from typing import Optional

from massage_booking.config.database import get_db
from massage_booking.api.dependencies import Identity, require_admin
from massage_booking.core.exceptions import NotFound
from massage_booking.schemas.business import BusinessSettingsUpdate, SettingUpdate
from massage_booking.services.business.settings_service import SettingsService

router = APIRouter(prefix="/settings", tags=["admin-settings"])


@router.get("/business")
def get_business_settings(
        admin: Identity = Depends(require_admin),
        db: Session = Depends(get_db)
):
    """Business profile; falls back to the built-in profile when not yet saved"""
    return SettingsService.get_business_settings_with_fallback(db).to_dict()


@router.patch("/business")
def update_business_settings(
        updates: BusinessSettingsUpdate,
        admin: Identity = Depends(require_admin),
        db: Session = Depends(get_db)
):
    return SettingsService.update_business_settings(db, updates, updated_by=admin.user_id).to_dict()


@router.get("")
def list_settings(
        category: Optional[str] = Query(None),
        admin: Identity = Depends(require_admin),
        db: Session = Depends(get_db)
):
    return [SettingsService.serialize_setting(s) for s in SettingsService.list_settings(db, category)]


@router.get("/{key}")
def get_setting(
        key: str = Path(...),
        admin: Identity = Depends(require_admin),
        db: Session = Depends(get_db)
):
    setting = SettingsService.get_setting(db, key)
    if not setting:
        raise NotFound(f"Setting '{key}' not found")
    return SettingsService.serialize_setting(setting)


@router.put("/{key}")
def update_setting(
        data: SettingUpdate,
        key: str = Path(..., min_length=1, max_length=100),
        admin: Identity = Depends(require_admin),
        db: Session = Depends(get_db)
):
    setting = SettingsService.update_setting(db, key, data.value, data.category)
    return SettingsService.serialize_setting(setting)
