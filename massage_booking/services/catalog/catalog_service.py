# massage_booking/services/catalog/catalog_service.py
"""
Package and add-on catalog.
current_price is always derived from base_price and discount_percentage here,
never taken from the request.
"""
import logging
import uuid
from typing import Dict, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from massage_booking.core.exceptions import NotFound, ValidationError
from massage_booking.models.catalog import AddOn, Package, CENTS
from massage_booking.schemas.catalog import AddOnCreate, AddOnUpdate, PackageCreate, PackageUpdate

logger = logging.getLogger(__name__)


def _new_id(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


class CatalogService:
    """Handles package and add-on operations"""

    # ============================================================================
    # Packages
    # ============================================================================

    @staticmethod
    def list_packages(db: Session, active_only: bool = False) -> List[Package]:
        query = db.query(Package)
        if active_only:
            query = query.filter(Package.is_active == True)
        return query.order_by(Package.sort_order.asc(), Package.name.asc()).all()

    @staticmethod
    def get_package(db: Session, package_id: str) -> Package:
        package = db.get(Package, package_id)
        if not package:
            raise NotFound(f"Package {package_id} not found")
        return package

    @staticmethod
    def create_package(db: Session, data: PackageCreate) -> Package:
        package = Package(
            id=data.id or _new_id("pkg"),
            name=data.name,
            description=data.description,
            duration_minutes=data.duration_minutes,
            base_price=data.base_price.quantize(CENTS),
            discount_percentage=data.discount_percentage,
            discount_label=data.discount_label,
            category=data.category,
            has_addons=data.has_addons,
            is_active=data.is_active,
            sort_order=data.sort_order,
        )
        package.reprice()

        db.add(package)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise ValidationError.for_field("id", f"package '{package.id}' already exists")

        db.refresh(package)
        logger.info(f"Created package {package.id}: {package.name} at ${package.current_price}")
        return package

    @staticmethod
    def update_package(db: Session, package_id: str, updates: PackageUpdate) -> Package:
        package = CatalogService.get_package(db, package_id)
        patch = updates.model_dump(exclude_unset=True)

        for field in ("name", "duration_minutes", "base_price", "discount_percentage",
                      "category", "has_addons", "is_active", "sort_order"):
            if field in patch and patch[field] is None:
                raise ValidationError.for_field(field, "cannot be null")

        for field, value in patch.items():
            if field == "base_price":
                value = value.quantize(CENTS)
            setattr(package, field, value)

        if "base_price" in patch or "discount_percentage" in patch:
            package.reprice()

        db.commit()
        db.refresh(package)
        logger.info(f"Updated package {package.id}: {', '.join(patch) or 'no changes'}")
        return package

    @staticmethod
    def delete_package(db: Session, package_id: str) -> bool:
        """Unconditional delete; booked appointments keep their own snapshot"""
        package = CatalogService.get_package(db, package_id)
        db.delete(package)
        db.commit()
        logger.info(f"Deleted package {package_id}")
        return True

    # ============================================================================
    # Add-ons
    # ============================================================================

    @staticmethod
    def list_addons(db: Session, active_only: bool = False) -> List[AddOn]:
        query = db.query(AddOn)
        if active_only:
            query = query.filter(AddOn.is_active == True)
        return query.order_by(AddOn.sort_order.asc(), AddOn.name.asc()).all()

    @staticmethod
    def get_addon(db: Session, addon_id: str) -> AddOn:
        addon = db.get(AddOn, addon_id)
        if not addon:
            raise NotFound(f"Add-on {addon_id} not found")
        return addon

    @staticmethod
    def create_addon(db: Session, data: AddOnCreate) -> AddOn:
        addon = AddOn(
            id=data.id or _new_id("addon"),
            name=data.name,
            description=data.description,
            price=data.price.quantize(CENTS),
            is_active=data.is_active,
            sort_order=data.sort_order,
        )
        db.add(addon)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise ValidationError.for_field("id", f"add-on '{addon.id}' already exists")

        db.refresh(addon)
        logger.info(f"Created add-on {addon.id}: {addon.name}")
        return addon

    @staticmethod
    def update_addon(db: Session, addon_id: str, updates: AddOnUpdate) -> AddOn:
        addon = CatalogService.get_addon(db, addon_id)
        patch = updates.model_dump(exclude_unset=True)

        for field in ("name", "price", "is_active", "sort_order"):
            if field in patch and patch[field] is None:
                raise ValidationError.for_field(field, "cannot be null")

        for field, value in patch.items():
            if field == "price":
                value = value.quantize(CENTS)
            setattr(addon, field, value)

        db.commit()
        db.refresh(addon)
        logger.info(f"Updated add-on {addon.id}")
        return addon

    @staticmethod
    def delete_addon(db: Session, addon_id: str) -> bool:
        addon = CatalogService.get_addon(db, addon_id)
        db.delete(addon)
        db.commit()
        logger.info(f"Deleted add-on {addon_id}")
        return True

    # ============================================================================
    # Public
    # ============================================================================

    @staticmethod
    def get_public_catalog(db: Session) -> Dict[str, list]:
        return {
            "packages": [p.to_dict() for p in CatalogService.list_packages(db, active_only=True)],
            "addons": [a.to_dict() for a in CatalogService.list_addons(db, active_only=True)],
        }

    @staticmethod
    def resolve_addons(db: Session, addon_ids: List[str]) -> List[AddOn]:
        """Active add-ons in the requested order; unknown or inactive ids are rejected"""
        addons = []
        for addon_id in addon_ids:
            addon = db.get(AddOn, addon_id)
            if not addon or not addon.is_active:
                raise ValidationError.for_field("addon_ids", f"add-on '{addon_id}' is not available")
            addons.append(addon)
        return addons

    @staticmethod
    def find_active_package(db: Session, package_id: str) -> Optional[Package]:
        package = db.get(Package, package_id)
        return package if package and package.is_active else None
