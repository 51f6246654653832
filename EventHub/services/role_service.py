from sqlalchemy.orm import Session
from loguru import logger

from EventHub.database import User, Vendor, RoleEnum
from EventHub.domain_events import event_bus, VendorProfileCreated, VendorProfileDeleted


class RoleService:
    """Keeps User.role in step with vendor profile ownership."""

    def __init__(self, db: Session):
        self.db = db

    def set_role(self, user_id: str, role: str) -> User:
        user = self.db.query(User).filter(User.user_id == user_id).first()
        if not user:
            raise ValueError(f"User '{user_id}' not found")
        if user.role != role:
            logger.info(f"Role change for user {user_id}: {user.role} -> {role}")
            user.role = role
        return user

    def on_vendor_profile_created(self, event: VendorProfileCreated):
        user = self.db.query(User).filter(User.user_id == event.user_id).first()
        if not user:
            logger.warning(f"VendorProfileCreated for unknown user {event.user_id}")
            return
        # Admins keep their role when they also run a vendor profile
        if user.role == RoleEnum.admin.value:
            return
        self.set_role(event.user_id, RoleEnum.vendor.value)

    def on_vendor_profile_deleted(self, event: VendorProfileDeleted):
        user = self.db.query(User).filter(User.user_id == event.user_id).first()
        if not user:
            logger.warning(f"VendorProfileDeleted for unknown user {event.user_id}")
            return
        remaining = self.db.query(Vendor).filter(Vendor.user_id == event.user_id).count()
        if remaining == 0 and user.role == RoleEnum.vendor.value:
            self.set_role(event.user_id, RoleEnum.user.value)


def _handle_created(event: VendorProfileCreated, db: Session):
    RoleService(db).on_vendor_profile_created(event)


def _handle_deleted(event: VendorProfileDeleted, db: Session):
    RoleService(db).on_vendor_profile_deleted(event)


def register_handlers(bus=event_bus):
    bus.subscribe(VendorProfileCreated, _handle_created)
    bus.subscribe(VendorProfileDeleted, _handle_deleted)


register_handlers()
