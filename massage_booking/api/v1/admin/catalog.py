# massage_booking/api/v1/admin/catalog.py
"""
Package / Add-on Management API Endpoints
Handles CRUD operations for the service catalog
"""
from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from massage_booking.config.database import get_db
from massage_booking.api.dependencies import Identity, require_admin
from massage_booking.schemas.catalog import AddOnCreate, AddOnUpdate, PackageCreate, PackageUpdate
from massage_booking.services.catalog.catalog_service import CatalogService

router = APIRouter(tags=["admin-catalog"])


# ============================================================================
# Packages
# ============================================================================

@router.get("/packages")
def list_packages(
        admin: Identity = Depends(require_admin),
        db: Session = Depends(get_db)
):
    """All packages including inactive ones"""
    packages = CatalogService.list_packages(db)
    return {"total": len(packages), "packages": [p.to_dict() for p in packages]}


@router.post("/packages", status_code=201)
def create_package(
        data: PackageCreate,
        admin: Identity = Depends(require_admin),
        db: Session = Depends(get_db)
):
    return CatalogService.create_package(db, data).to_dict()


@router.patch("/packages/{package_id}")
def update_package(
        updates: PackageUpdate,
        package_id: str = Path(...),
        admin: Identity = Depends(require_admin),
        db: Session = Depends(get_db)
):
    """Partial update; current_price is recomputed when price or discount change"""
    return CatalogService.update_package(db, package_id, updates).to_dict()


@router.delete("/packages/{package_id}")
def delete_package(
        package_id: str = Path(...),
        admin: Identity = Depends(require_admin),
        db: Session = Depends(get_db)
):
    return {"success": CatalogService.delete_package(db, package_id)}


# ============================================================================
# Add-ons
# ============================================================================

@router.get("/addons")
def list_addons(
        admin: Identity = Depends(require_admin),
        db: Session = Depends(get_db)
):
    addons = CatalogService.list_addons(db)
    return {"total": len(addons), "addons": [a.to_dict() for a in addons]}


@router.post("/addons", status_code=201)
def create_addon(
        data: AddOnCreate,
        admin: Identity = Depends(require_admin),
        db: Session = Depends(get_db)
):
    return CatalogService.create_addon(db, data).to_dict()


@router.patch("/addons/{addon_id}")
def update_addon(
        updates: AddOnUpdate,
        addon_id: str = Path(...),
        admin: Identity = Depends(require_admin),
        db: Session = Depends(get_db)
):
    return CatalogService.update_addon(db, addon_id, updates).to_dict()


@router.delete("/addons/{addon_id}")
def delete_addon(
        addon_id: str = Path(...),
        admin: Identity = Depends(require_admin),
        db: Session = Depends(get_db)
):
    return {"success": CatalogService.delete_addon(db, addon_id)}
