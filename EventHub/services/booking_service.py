from typing import List, Optional
from sqlalchemy import or_
from sqlalchemy.orm import Session
from loguru import logger

from EventHub.database import Booking, Vendor, RoleEnum, BookingStatusEnum, NotificationTypeEnum
from EventHub.errors import ForbiddenError, NotFoundError, ValidationError
from EventHub.schemas.booking import BookingCreate, BookingUpdate, BookingResponse
from EventHub.services.notification_service import NotificationService

BOOKER_FIELDS = {"status", "special_requirements", "notes"}
PROVIDER_FIELDS = {"status", "payment_status"}

STATUS_NOTIFICATIONS = {
    BookingStatusEnum.confirmed: (NotificationTypeEnum.booking_confirmed, "Booking confirmed"),
    BookingStatusEnum.cancelled: (NotificationTypeEnum.booking_cancelled, "Booking cancelled"),
}


class BookingService:
    """Service for vendor bookings. Entity ids on a booking are stored as given."""

    def __init__(self, db: Session):
        self.db = db
        self.notifications = NotificationService(db)

    def _vendor(self, vendor_id: str) -> Optional[Vendor]:
        return self.db.query(Vendor).filter(Vendor.vendor_id == vendor_id).first()

    def _is_provider(self, booking: Booking, current_user: dict) -> bool:
        """True for admins and the owner of the booked vendor."""
        if current_user.get("role") == RoleEnum.admin.value:
            return True
        vendor = self._vendor(booking.vendor_id)
        return vendor is not None and vendor.user_id == current_user.get("user_id")

    def _get_authorized(self, booking_id: str, current_user: dict, action: str) -> Booking:
        booking = self.db.query(Booking).filter(Booking.booking_id == booking_id).first()
        if not booking:
            raise NotFoundError("Booking not found")
        if booking.user_id != current_user.get("user_id") and not self._is_provider(booking, current_user):
            raise ForbiddenError(f"Not authorized to {action} this booking")
        return booking

    def _notify_booker(self, booking: Booking, status: BookingStatusEnum, sender_id: str):
        if status not in STATUS_NOTIFICATIONS or booking.user_id == sender_id:
            return
        notification_type, title = STATUS_NOTIFICATIONS[status]
        self.notifications.notify(
            recipient_id=booking.user_id,
            sender_id=sender_id,
            type=notification_type,
            title=title,
            message=f"Your booking {booking.booking_id} is now {status.value}.",
            related_model="Booking",
            related_id=booking.booking_id,
        )

    def create_booking(self, data: BookingCreate, current_user: dict) -> BookingResponse:
        user_id = current_user.get("user_id")
        booking = Booking(user_id=user_id, **data.model_dump())
        self.db.add(booking)
        self.db.flush()

        vendor = self._vendor(data.vendor_id)
        if vendor is not None:
            self.notifications.notify(
                recipient_id=vendor.user_id,
                sender_id=user_id,
                type=NotificationTypeEnum.booking_request,
                title="New booking request",
                message=f"{vendor.business_name} has a new booking request.",
                related_model="Booking",
                related_id=booking.booking_id,
            )
        self.db.commit()
        self.db.refresh(booking)
        logger.info(f"Booking {booking.booking_id} created by {user_id} for vendor {data.vendor_id}")
        return BookingResponse.model_validate(booking)

    def list_bookings(self, current_user: dict) -> List[BookingResponse]:
        user_id = current_user.get("user_id")
        role = current_user.get("role")
        query = self.db.query(Booking)
        if role == RoleEnum.vendor.value:
            vendor_ids = [v.vendor_id for v in self.db.query(Vendor).filter(Vendor.user_id == user_id).all()]
            query = query.filter(or_(Booking.user_id == user_id, Booking.vendor_id.in_(vendor_ids)))
        elif role != RoleEnum.admin.value:
            query = query.filter(Booking.user_id == user_id)
        bookings = query.order_by(Booking.booking_date.desc()).all()
        return [BookingResponse.model_validate(b) for b in bookings]

    def get_booking(self, booking_id: str, current_user: dict) -> BookingResponse:
        return BookingResponse.model_validate(self._get_authorized(booking_id, current_user, "access"))

    def update_booking(self, booking_id: str, update: BookingUpdate, current_user: dict) -> BookingResponse:
        """
        Apply a booking update with per-party field permissions.

        The booker may cancel and edit special_requirements/notes; the vendor owner
        and admins may move status and payment_status. A caller holding both
        roles gets the union.
        """
        booking = self._get_authorized(booking_id, current_user, "update")
        user_id = current_user.get("user_id")
        is_booker = booking.user_id == user_id
        is_provider = self._is_provider(booking, current_user)

        allowed = set()
        if is_booker:
            allowed |= BOOKER_FIELDS
        if is_provider:
            allowed |= PROVIDER_FIELDS

        update_data = update.model_dump(exclude_unset=True)
        denied = sorted(set(update_data) - allowed)
        if denied:
            raise ForbiddenError(f"Not authorized to change: {', '.join(denied)}")

        new_status = update_data.get("status")
        if "status" in update_data:
            if new_status is None:
                raise ValidationError("status cannot be null")
            if not is_provider and new_status != BookingStatusEnum.cancelled:
                raise ForbiddenError("Bookers may only cancel a booking")
        if "payment_status" in update_data and update_data["payment_status"] is None:
            raise ValidationError("payment_status cannot be null")

        previous_status = booking.status
        for field, value in update_data.items():
            setattr(booking, field, value)

        if new_status is not None and new_status != previous_status:
            self._notify_booker(booking, new_status, user_id)
            logger.info(f"Booking {booking_id} status {previous_status.value} -> {new_status.value} by {user_id}")

        self.db.commit()
        self.db.refresh(booking)
        return BookingResponse.model_validate(booking)

    def cancel_booking(self, booking_id: str, current_user: dict) -> BookingResponse:
        booking = self._get_authorized(booking_id, current_user, "cancel")
        if booking.status != BookingStatusEnum.cancelled:
            booking.status = BookingStatusEnum.cancelled
            self._notify_booker(booking, BookingStatusEnum.cancelled, current_user.get("user_id"))
            logger.info(f"Booking {booking_id} cancelled by {current_user.get('user_id')}")
        self.db.commit()
        self.db.refresh(booking)
        return BookingResponse.model_validate(booking)
