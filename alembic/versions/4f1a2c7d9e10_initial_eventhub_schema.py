"""initial_eventhub_schema

Revision ID: 4f1a2c7d9e10
Revises:
Create Date: 2026-10-19 10:12:45.118204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4f1a2c7d9e10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

service_type_enum = sa.Enum(
    'catering', 'decoration', 'photography', 'venue', 'entertainment', 'transportation', 'technology', 'other',
    name='servicetypeenum'
)
price_unit_enum = sa.Enum('flat', 'per_hour', 'per_person', 'per_day', name='priceunitenum')
event_type_enum = sa.Enum('wedding', 'corporate', 'birthday', 'conference', 'other', name='eventtypeenum')
event_status_enum = sa.Enum('planning', 'upcoming', 'ongoing', 'completed', 'cancelled', name='eventstatusenum')
booking_status_enum = sa.Enum('pending', 'confirmed', 'cancelled', 'completed', name='bookingstatusenum')
payment_status_enum = sa.Enum('pending', 'partial', 'completed', 'refunded', name='paymentstatusenum')
notification_type_enum = sa.Enum(
    'booking_request', 'booking_confirmed', 'booking_cancelled', 'payment_received', 'payment_pending',
    'message_received', 'review_received', 'event_reminder', 'system_notification', 'ai_recommendation',
    name='notificationtypeenum'
)


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'user',
        sa.Column('user_id', sa.String(), primary_key=True),
        sa.Column('name', sa.String()),
        sa.Column('email', sa.String(), unique=True),
        sa.Column('phone_number', sa.String()),
        sa.Column('role', sa.String(), nullable=False, server_default='user'),
        sa.Column('created_at', sa.DateTime(timezone=True)),
    )

    op.create_table(
        'vendors',
        sa.Column('vendor_id', sa.String(), primary_key=True),
        sa.Column('user_id', sa.String(), sa.ForeignKey('user.user_id'), nullable=False),
        sa.Column('business_name', sa.String(), nullable=False),
        sa.Column('business_description', sa.Text(), nullable=False),
        sa.Column('service_type', service_type_enum, nullable=False),
        sa.Column('contact_email', sa.String(), nullable=False),
        sa.Column('contact_phone', sa.String(), nullable=False),
        sa.Column('business_address', sa.JSON()),
        sa.Column('business_logo', sa.String()),
        sa.Column('gallery', sa.JSON()),
        sa.Column('social_media', sa.JSON()),
        sa.Column('average_rating', sa.Float(), nullable=False, server_default='0'),
        sa.Column('is_verified', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('version', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('created_at', sa.DateTime(timezone=True)),
        sa.Column('updated_at', sa.DateTime(timezone=True)),
    )
    op.create_index('ix_vendors_user_id', 'vendors', ['user_id'])
    op.create_index('ix_vendors_service_type', 'vendors', ['service_type'])

    op.create_table(
        'vendor_services',
        sa.Column('service_id', sa.String(), primary_key=True),
        sa.Column('vendor_id', sa.String(), sa.ForeignKey('vendors.vendor_id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('description', sa.Text()),
        sa.Column('price', sa.Float(), nullable=False),
        sa.Column('price_unit', price_unit_enum, nullable=False, server_default='flat'),
        sa.Column('created_at', sa.DateTime(timezone=True)),
    )
    op.create_index('ix_vendor_services_vendor_id', 'vendor_services', ['vendor_id'])

    op.create_table(
        'vendor_reviews',
        sa.Column('review_id', sa.String(), primary_key=True),
        sa.Column('vendor_id', sa.String(), sa.ForeignKey('vendors.vendor_id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.String(), sa.ForeignKey('user.user_id'), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('comment', sa.Text()),
        sa.Column('created_at', sa.DateTime(timezone=True)),
        sa.UniqueConstraint('vendor_id', 'user_id', name='uq_review_vendor_user'),
        sa.CheckConstraint('rating >= 1 AND rating <= 5', name='ck_review_rating_range'),
    )
    op.create_index('ix_vendor_reviews_vendor_id', 'vendor_reviews', ['vendor_id'])

    op.create_table(
        'events',
        sa.Column('event_id', sa.String(), primary_key=True),
        sa.Column('user_id', sa.String(), sa.ForeignKey('user.user_id'), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('time', sa.String(), nullable=False),
        sa.Column('location', sa.String(), nullable=False),
        sa.Column('event_type', event_type_enum, nullable=False),
        sa.Column('expected_attendees', sa.Integer(), nullable=False),
        sa.Column('budget', sa.Float(), nullable=False),
        sa.Column('services', sa.JSON()),
        sa.Column('status', event_status_enum, nullable=False, server_default='planning'),
        sa.Column('created_at', sa.DateTime(timezone=True)),
        sa.Column('updated_at', sa.DateTime(timezone=True)),
    )
    op.create_index('ix_events_user_id', 'events', ['user_id'])

    # Entity ids on bookings are stored without foreign keys
    op.create_table(
        'bookings',
        sa.Column('booking_id', sa.String(), primary_key=True),
        sa.Column('user_id', sa.String(), nullable=False),
        sa.Column('event_id', sa.String(), nullable=False),
        sa.Column('vendor_id', sa.String(), nullable=False),
        sa.Column('service_id', sa.String(), nullable=False),
        sa.Column('booking_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('start_time', sa.String(), nullable=False),
        sa.Column('end_time', sa.String(), nullable=False),
        sa.Column('status', booking_status_enum, nullable=False, server_default='pending'),
        sa.Column('amount', sa.Float(), nullable=False),
        sa.Column('payment_status', payment_status_enum, nullable=False, server_default='pending'),
        sa.Column('special_requirements', sa.Text()),
        sa.Column('notes', sa.Text()),
        sa.Column('created_at', sa.DateTime(timezone=True)),
        sa.Column('updated_at', sa.DateTime(timezone=True)),
    )
    op.create_index('ix_bookings_user_id', 'bookings', ['user_id'])
    op.create_index('ix_bookings_vendor_id', 'bookings', ['vendor_id'])

    op.create_table(
        'chats',
        sa.Column('chat_id', sa.String(), primary_key=True),
        sa.Column('event_id', sa.String()),
        sa.Column('booking_id', sa.String()),
        sa.Column('last_message', sa.JSON()),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True)),
        sa.Column('updated_at', sa.DateTime(timezone=True)),
    )

    op.create_table(
        'chat_participants',
        sa.Column('chat_id', sa.String(), sa.ForeignKey('chats.chat_id', ondelete='CASCADE'), primary_key=True),
        sa.Column('user_id', sa.String(), sa.ForeignKey('user.user_id'), primary_key=True),
    )

    op.create_table(
        'chat_messages',
        sa.Column('message_id', sa.String(), primary_key=True),
        sa.Column('chat_id', sa.String(), sa.ForeignKey('chats.chat_id', ondelete='CASCADE'), nullable=False),
        sa.Column('sender_id', sa.String(), sa.ForeignKey('user.user_id'), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('attachments', sa.JSON()),
        sa.Column('is_read', sa.Boolean(), server_default=sa.false()),
        sa.Column('timestamp', sa.DateTime(timezone=True)),
    )
    op.create_index('ix_chat_messages_chat_id', 'chat_messages', ['chat_id'])

    op.create_table(
        'notifications',
        sa.Column('notification_id', sa.String(), primary_key=True),
        sa.Column('recipient_id', sa.String(), sa.ForeignKey('user.user_id'), nullable=False),
        sa.Column('sender_id', sa.String(), sa.ForeignKey('user.user_id')),
        sa.Column('type', notification_type_enum, nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('is_read', sa.Boolean(), server_default=sa.false()),
        sa.Column('related_model', sa.String()),
        sa.Column('related_id', sa.String()),
        sa.Column('action_url', sa.String()),
        sa.Column('created_at', sa.DateTime(timezone=True)),
        sa.Column('expires_at', sa.DateTime(timezone=True)),
    )
    op.create_index('ix_notifications_recipient_id', 'notifications', ['recipient_id'])


def downgrade() -> None:
    """Downgrade schema."""
    for table in (
        'notifications', 'chat_messages', 'chat_participants', 'chats', 'bookings',
        'events', 'vendor_reviews', 'vendor_services', 'vendors', 'user',
    ):
        op.drop_table(table)

    bind = op.get_bind()
    for enum_type in (
        notification_type_enum, payment_status_enum, booking_status_enum, event_status_enum,
        event_type_enum, price_unit_enum, service_type_enum,
    ):
        enum_type.drop(bind, checkfirst=True)
