from contextlib import contextmanager
from typing import List, Optional, Tuple
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError
from loguru import logger

from EventHub.database import (
    User, Vendor, VendorService as DBVendorService, VendorReview, RoleEnum, NotificationTypeEnum
)
from EventHub.domain_events import event_bus, VendorProfileCreated, VendorProfileDeleted
from EventHub.errors import ConflictError, ForbiddenError, NotFoundError, ValidationError
from EventHub.pagination import build_pagination, page_window
from EventHub.schemas.vendor import (
    VendorCreate, VendorUpdate, VendorResponse, ServiceCreate, ServiceUpdate, ReviewCreate
)
from EventHub.scoring import calculate_average_rating
from EventHub.services import role_service  # noqa: F401  registers role handlers on the bus
from EventHub.services.notification_service import NotificationService
from EventHub.utils_time import get_utc_time


class VendorService:
    """Service for vendor profile business logic."""

    def __init__(self, db: Session, bus=event_bus):
        self.db = db
        self.bus = bus

    # --- helpers -----------------------------------------------------------

    def _get_vendor(self, vendor_id: str) -> Vendor:
        vendor = self.db.query(Vendor).filter(Vendor.vendor_id == vendor_id).first()
        if not vendor:
            raise NotFoundError("Vendor not found")
        return vendor

    @staticmethod
    def _is_admin(current_user: dict) -> bool:
        return current_user.get("role") == RoleEnum.admin.value

    def _ensure_owner_or_admin(self, vendor: Vendor, current_user: dict, action: str):
        if vendor.user_id != current_user.get("user_id") and not self._is_admin(current_user):
            raise ForbiddenError(f"Not authorized to {action} this vendor profile")

    @staticmethod
    def _ensure_owner(vendor: Vendor, current_user: dict):
        # Catalog edits are owner-only; admins are not exempt here
        if vendor.user_id != current_user.get("user_id"):
            raise ForbiddenError("Not authorized to update this vendor profile")

    @staticmethod
    def _find_service(vendor: Vendor, service_id: str) -> DBVendorService:
        for service in vendor.services:
            if service.service_id == service_id:
                return service
        raise NotFoundError("Service not found")

    @contextmanager
    def _versioned_write(self):
        """Turn a lost optimistic-lock race on a vendor row into a 409."""
        try:
            yield
        except StaleDataError:
            self.db.rollback()
            raise ConflictError("Vendor was modified concurrently, please retry")

    def _commit(self):
        with self._versioned_write():
            self.db.commit()

    @staticmethod
    def to_response(vendor: Vendor) -> VendorResponse:
        return VendorResponse.model_validate(vendor)

    # --- profile lifecycle -------------------------------------------------

    def create_vendor(self, data: VendorCreate, current_user: dict) -> VendorResponse:
        """Create a vendor profile for the caller; one profile per user."""
        user_id = current_user.get("user_id")
        existing = self.db.query(Vendor).filter(Vendor.user_id == user_id).first()
        if existing:
            raise ConflictError("Vendor profile already exists for this user")

        user = self.db.query(User).filter(User.user_id == user_id).first()
        contact_email = data.contact_email or (user.email if user else None) or current_user.get("email")
        contact_phone = data.contact_phone or (user.phone_number if user else None)
        if not contact_email:
            raise ValidationError("contact_email is required")
        if not contact_phone:
            raise ValidationError("contact_phone is required")

        vendor = Vendor(
            user_id=user_id,
            business_name=data.business_name,
            business_description=data.business_description,
            service_type=data.service_type,
            contact_email=contact_email,
            contact_phone=contact_phone,
            business_address=data.business_address.model_dump() if data.business_address else {},
            business_logo=data.business_logo or "",
            gallery=list(data.gallery),
            social_media=dict(data.social_media),
            average_rating=0.0,
            is_verified=False,
            services=[
                DBVendorService(
                    name=s.name, description=s.description, price=s.price, price_unit=s.price_unit
                )
                for s in data.services
            ],
        )
        self.db.add(vendor)
        self.db.flush()
        self.bus.publish(VendorProfileCreated(vendor_id=vendor.vendor_id, user_id=user_id), self.db)
        self.db.commit()
        self.db.refresh(vendor)
        logger.info(f"Vendor profile {vendor.vendor_id} created for user {user_id}")
        return self.to_response(vendor)

    def list_vendors(
        self,
        service_type: Optional[str] = None,
        is_verified: Optional[bool] = None,
        min_rating: Optional[float] = None,
        search: Optional[str] = None,
        page: int = 1,
        limit: int = 10,
    ) -> Tuple[List[VendorResponse], dict]:
        """Filter, sort by rating and paginate vendors. Returns (vendors, pagination)."""
        query = self.db.query(Vendor)
        if service_type:
            query = query.filter(Vendor.service_type == service_type)
        if is_verified is not None:
            query = query.filter(Vendor.is_verified == is_verified)
        if min_rating is not None:
            query = query.filter(Vendor.average_rating >= min_rating)
        if search:
            query = query.filter(Vendor.business_name.icontains(search, autoescape=True))

        total = query.count()
        start_index, _ = page_window(page, limit)
        vendors = (
            query.order_by(Vendor.average_rating.desc(), Vendor.created_at.asc())
            .offset(start_index)
            .limit(limit)
            .all()
        )
        return [self.to_response(v) for v in vendors], build_pagination(total, page, limit)

    def get_vendor(self, vendor_id: str) -> VendorResponse:
        return self.to_response(self._get_vendor(vendor_id))

    def update_vendor(self, vendor_id: str, update: VendorUpdate, current_user: dict) -> VendorResponse:
        vendor = self._get_vendor(vendor_id)
        self._ensure_owner_or_admin(vendor, current_user, "update")

        update_data = update.model_dump(exclude_unset=True)
        if "is_verified" in update_data and not self._is_admin(current_user):
            raise ForbiddenError("Only administrators can change verification status")
        for field, value in update_data.items():
            if value is None and field in ("business_name", "business_description", "service_type",
                                           "contact_email", "contact_phone", "is_verified"):
                raise ValidationError(f"{field} cannot be null")
            if field in ("business_address", "social_media"):
                value = value or {}
            elif field == "gallery":
                value = value or []
            setattr(vendor, field, value)

        self._commit()
        self.db.refresh(vendor)
        return self.to_response(vendor)

    def delete_vendor(self, vendor_id: str, current_user: dict) -> None:
        vendor = self._get_vendor(vendor_id)
        self._ensure_owner_or_admin(vendor, current_user, "delete")

        owner_id = vendor.user_id
        self.db.delete(vendor)
        with self._versioned_write():
            self.db.flush()
        self.bus.publish(VendorProfileDeleted(vendor_id=vendor_id, user_id=owner_id), self.db)
        self._commit()
        logger.info(f"Vendor profile {vendor_id} deleted by {current_user.get('user_id')}")

    # --- catalog services --------------------------------------------------

    def add_service(self, vendor_id: str, data: ServiceCreate, current_user: dict) -> VendorResponse:
        vendor = self._get_vendor(vendor_id)
        self._ensure_owner(vendor, current_user)
        vendor.services.append(DBVendorService(
            name=data.name, description=data.description, price=data.price, price_unit=data.price_unit
        ))
        self._commit()
        self.db.refresh(vendor)
        return self.to_response(vendor)

    def update_service(self, vendor_id: str, service_id: str, data: ServiceUpdate, current_user: dict) -> VendorResponse:
        vendor = self._get_vendor(vendor_id)
        self._ensure_owner(vendor, current_user)
        service = self._find_service(vendor, service_id)
        for field, value in data.model_dump(exclude_unset=True).items():
            if value is None and field != "description":
                raise ValidationError(f"{field} cannot be null")
            setattr(service, field, value)
        self._commit()
        self.db.refresh(vendor)
        return self.to_response(vendor)

    def delete_service(self, vendor_id: str, service_id: str, current_user: dict) -> VendorResponse:
        vendor = self._get_vendor(vendor_id)
        self._ensure_owner(vendor, current_user)
        service = self._find_service(vendor, service_id)
        vendor.services.remove(service)
        self._commit()
        self.db.refresh(vendor)
        return self.to_response(vendor)

    # --- reviews -----------------------------------------------------------

    def recalculate_average_rating(self, vendor: Vendor) -> float:
        vendor.average_rating = calculate_average_rating(r.rating for r in vendor.reviews)
        return vendor.average_rating

    def add_review(self, vendor_id: str, data: ReviewCreate, current_user: dict) -> VendorResponse:
        """Append a review and recompute the vendor's average rating."""
        vendor = self._get_vendor(vendor_id)
        user_id = current_user.get("user_id")
        if vendor.user_id == user_id:
            raise ForbiddenError("Vendors cannot review their own profile")
        if any(r.user_id == user_id for r in vendor.reviews):
            raise ConflictError("You have already reviewed this vendor")

        vendor.reviews.append(VendorReview(user_id=user_id, rating=data.rating, comment=data.comment))
        self.recalculate_average_rating(vendor)
        # Always bump the row so the version check runs even when the mean is unchanged
        vendor.updated_at = get_utc_time()
        NotificationService(self.db).notify(
            recipient_id=vendor.user_id,
            sender_id=user_id,
            type=NotificationTypeEnum.review_received,
            title="New review received",
            message=f"{vendor.business_name} received a {data.rating}-star review.",
            related_model="Vendor",
            related_id=vendor.vendor_id,
        )
        try:
            self._commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError("You have already reviewed this vendor")
        self.db.refresh(vendor)
        logger.info(f"Review added to vendor {vendor_id} by {user_id}; average_rating={vendor.average_rating}")
        return self.to_response(vendor)
