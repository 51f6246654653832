"""
SQLAlchemy database setup and ORM models for EventHub.
"""

import enum
import uuid

import sqlalchemy as sa
from sqlalchemy import (
    create_engine, Column, String, Integer, Float, Boolean, DateTime, Text, Enum, ForeignKey, JSON
)
from sqlalchemy.orm import declarative_base, sessionmaker, relationship

from EventHub.config import settings
from EventHub.utils_time import get_utc_time

DATABASE_URL = settings.DATABASE_URL


def _engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_pre_ping": True,      # Checks connection before use, auto-reconnects
        "pool_size": 10,            # Number of connections to keep in pool
        "max_overflow": 20,         # Extra connections allowed above pool_size
        "pool_recycle": 1800        # Recycle connections every 30 min
    }


engine = create_engine(DATABASE_URL, **_engine_options(DATABASE_URL))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def new_id() -> str:
    return str(uuid.uuid4())


# Enums
class RoleEnum(str, enum.Enum):
    user = "user"
    vendor = "vendor"
    admin = "admin"


class ServiceTypeEnum(str, enum.Enum):
    catering = "catering"
    decoration = "decoration"
    photography = "photography"
    venue = "venue"
    entertainment = "entertainment"
    transportation = "transportation"
    technology = "technology"
    other = "other"


class PriceUnitEnum(str, enum.Enum):
    flat = "flat"
    per_hour = "per_hour"
    per_person = "per_person"
    per_day = "per_day"


class EventTypeEnum(str, enum.Enum):
    wedding = "wedding"
    corporate = "corporate"
    birthday = "birthday"
    conference = "conference"
    other = "other"


class EventServiceEnum(str, enum.Enum):
    venue = "venue"
    catering = "catering"
    decoration = "decoration"
    photography = "photography"
    music = "music"
    transportation = "transportation"


class EventStatusEnum(str, enum.Enum):
    planning = "planning"
    upcoming = "upcoming"
    ongoing = "ongoing"
    completed = "completed"
    cancelled = "cancelled"


class BookingStatusEnum(str, enum.Enum):
    pending = "pending"
    confirmed = "confirmed"
    cancelled = "cancelled"
    completed = "completed"


class PaymentStatusEnum(str, enum.Enum):
    pending = "pending"
    partial = "partial"
    completed = "completed"
    refunded = "refunded"


class NotificationTypeEnum(str, enum.Enum):
    booking_request = "booking_request"
    booking_confirmed = "booking_confirmed"
    booking_cancelled = "booking_cancelled"
    payment_received = "payment_received"
    payment_pending = "payment_pending"
    message_received = "message_received"
    review_received = "review_received"
    event_reminder = "event_reminder"
    system_notification = "system_notification"
    ai_recommendation = "ai_recommendation"


# Tables
class User(Base):
    __tablename__ = "user"
    user_id = Column(String, primary_key=True, default=new_id)
    name = Column(String)
    email = Column(String, unique=True)
    phone_number = Column(String)
    role = Column(String, nullable=False, default=RoleEnum.user.value)  # 'user', 'vendor', 'admin'
    created_at = Column(DateTime(timezone=True), default=get_utc_time)
    vendors = relationship("Vendor", back_populates="owner")
    events = relationship("Event", back_populates="owner")


class Vendor(Base):
    __tablename__ = "vendors"
    vendor_id = Column(String, primary_key=True, default=new_id)
    user_id = Column(String, ForeignKey("user.user_id"), nullable=False, index=True)
    business_name = Column(String, nullable=False)
    business_description = Column(Text, nullable=False)
    service_type = Column(Enum(ServiceTypeEnum), nullable=False, index=True)
    contact_email = Column(String, nullable=False)
    contact_phone = Column(String, nullable=False)
    business_address = Column(JSON, default=dict)  # street, city, state, zip_code, country
    business_logo = Column(String, default="")
    gallery = Column(JSON, default=list)
    social_media = Column(JSON, default=dict)
    average_rating = Column(Float, nullable=False, default=0.0)
    is_verified = Column(Boolean, nullable=False, default=False)
    version = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime(timezone=True), default=get_utc_time)
    updated_at = Column(DateTime(timezone=True), default=get_utc_time, onupdate=get_utc_time)
    owner = relationship("User", back_populates="vendors")
    services = relationship(
        "VendorService", back_populates="vendor", cascade="all, delete-orphan",
        order_by="VendorService.created_at"
    )
    reviews = relationship(
        "VendorReview", back_populates="vendor", cascade="all, delete-orphan",
        order_by="VendorReview.created_at"
    )

    # Concurrent writers fail with StaleDataError instead of overwriting each other
    __mapper_args__ = {"version_id_col": version}


class VendorService(Base):
    __tablename__ = "vendor_services"
    service_id = Column(String, primary_key=True, default=new_id)
    vendor_id = Column(String, ForeignKey("vendors.vendor_id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)
    description = Column(Text)
    price = Column(Float, nullable=False)
    price_unit = Column(Enum(PriceUnitEnum), nullable=False, default=PriceUnitEnum.flat)
    created_at = Column(DateTime(timezone=True), default=get_utc_time)
    vendor = relationship("Vendor", back_populates="services")


class VendorReview(Base):
    __tablename__ = "vendor_reviews"
    __table_args__ = (
        sa.UniqueConstraint("vendor_id", "user_id", name="uq_review_vendor_user"),
        sa.CheckConstraint("rating >= 1 AND rating <= 5", name="ck_review_rating_range"),
    )
    review_id = Column(String, primary_key=True, default=new_id)
    vendor_id = Column(String, ForeignKey("vendors.vendor_id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String, ForeignKey("user.user_id"), nullable=False)
    rating = Column(Integer, nullable=False)
    comment = Column(Text)
    created_at = Column(DateTime(timezone=True), default=get_utc_time)
    vendor = relationship("Vendor", back_populates="reviews")


class Event(Base):
    __tablename__ = "events"
    event_id = Column(String, primary_key=True, default=new_id)
    user_id = Column(String, ForeignKey("user.user_id"), nullable=False, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    date = Column(DateTime(timezone=True), nullable=False)
    time = Column(String, nullable=False)
    location = Column(String, nullable=False)
    event_type = Column(Enum(EventTypeEnum), nullable=False)
    expected_attendees = Column(Integer, nullable=False)
    budget = Column(Float, nullable=False)
    services = Column(JSON, default=list)
    status = Column(Enum(EventStatusEnum), nullable=False, default=EventStatusEnum.planning)
    created_at = Column(DateTime(timezone=True), default=get_utc_time)
    updated_at = Column(DateTime(timezone=True), default=get_utc_time, onupdate=get_utc_time)
    owner = relationship("User", back_populates="events")


class Booking(Base):
    # user/event/vendor/service ids are advisory references: nothing is enforced at write time
    __tablename__ = "bookings"
    booking_id = Column(String, primary_key=True, default=new_id)
    user_id = Column(String, nullable=False, index=True)
    event_id = Column(String, nullable=False)
    vendor_id = Column(String, nullable=False, index=True)
    service_id = Column(String, nullable=False)
    booking_date = Column(DateTime(timezone=True), nullable=False)
    start_time = Column(String, nullable=False)
    end_time = Column(String, nullable=False)
    status = Column(Enum(BookingStatusEnum), nullable=False, default=BookingStatusEnum.pending)
    amount = Column(Float, nullable=False)
    payment_status = Column(Enum(PaymentStatusEnum), nullable=False, default=PaymentStatusEnum.pending)
    special_requirements = Column(Text)
    notes = Column(Text)
    created_at = Column(DateTime(timezone=True), default=get_utc_time)
    updated_at = Column(DateTime(timezone=True), default=get_utc_time, onupdate=get_utc_time)


class ChatParticipant(Base):
    __tablename__ = "chat_participants"
    chat_id = Column(String, ForeignKey("chats.chat_id", ondelete="CASCADE"), primary_key=True)
    user_id = Column(String, ForeignKey("user.user_id"), primary_key=True)


class Chat(Base):
    __tablename__ = "chats"
    chat_id = Column(String, primary_key=True, default=new_id)
    event_id = Column(String)
    booking_id = Column(String)
    last_message = Column(JSON)  # content, sender, timestamp
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime(timezone=True), default=get_utc_time)
    updated_at = Column(DateTime(timezone=True), default=get_utc_time, onupdate=get_utc_time)
    participants = relationship("ChatParticipant", cascade="all, delete-orphan")
    messages = relationship(
        "ChatMessage", back_populates="chat", cascade="all, delete-orphan",
        order_by="ChatMessage.timestamp"
    )

    @property
    def participant_ids(self):
        return [p.user_id for p in self.participants]


class ChatMessage(Base):
    __tablename__ = "chat_messages"
    message_id = Column(String, primary_key=True, default=new_id)
    chat_id = Column(String, ForeignKey("chats.chat_id", ondelete="CASCADE"), nullable=False, index=True)
    sender_id = Column(String, ForeignKey("user.user_id"), nullable=False)
    content = Column(Text, nullable=False)
    attachments = Column(JSON, default=list)
    is_read = Column(Boolean, default=False)
    timestamp = Column(DateTime(timezone=True), default=get_utc_time)
    chat = relationship("Chat", back_populates="messages")


class Notification(Base):
    __tablename__ = "notifications"
    notification_id = Column(String, primary_key=True, default=new_id)
    recipient_id = Column(String, ForeignKey("user.user_id"), nullable=False, index=True)
    sender_id = Column(String, ForeignKey("user.user_id"))
    type = Column(Enum(NotificationTypeEnum), nullable=False)
    title = Column(String, nullable=False)
    message = Column(Text, nullable=False)
    is_read = Column(Boolean, default=False)
    related_model = Column(String)  # 'Event', 'Booking', 'Chat', 'User', 'Vendor'
    related_id = Column(String)
    action_url = Column(String)
    created_at = Column(DateTime(timezone=True), default=get_utc_time)
    expires_at = Column(DateTime(timezone=True))


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None):
    Base.metadata.create_all(bind=bind or engine)
