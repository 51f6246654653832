from typing import List, Optional
from sqlalchemy.orm import Session
from loguru import logger

from EventHub.database import Notification, NotificationTypeEnum
from EventHub.errors import NotFoundError, ForbiddenError
from EventHub.schemas.notification import NotificationResponse


class NotificationService:
    """Service for user notifications."""

    def __init__(self, db: Session):
        self.db = db

    def notify(
        self,
        recipient_id: str,
        type: NotificationTypeEnum,
        title: str,
        message: str,
        sender_id: Optional[str] = None,
        related_model: Optional[str] = None,
        related_id: Optional[str] = None,
        action_url: Optional[str] = None,
    ) -> Notification:
        """Queue a notification on the current session. The caller commits."""
        notification = Notification(
            recipient_id=recipient_id,
            sender_id=sender_id,
            type=type,
            title=title,
            message=message,
            related_model=related_model,
            related_id=related_id,
            action_url=action_url,
        )
        self.db.add(notification)
        logger.debug(f"Notification {type.value} queued for {recipient_id}")
        return notification

    def list_notifications(self, user_id: str, unread_only: bool = False) -> List[NotificationResponse]:
        query = self.db.query(Notification).filter(Notification.recipient_id == user_id)
        if unread_only:
            query = query.filter(Notification.is_read == False)  # noqa: E712
        notifications = query.order_by(Notification.created_at.desc()).all()
        return [NotificationResponse.model_validate(n) for n in notifications]

    def _get_owned(self, notification_id: str, user_id: str) -> Notification:
        notification = self.db.query(Notification).filter(
            Notification.notification_id == notification_id
        ).first()
        if not notification:
            raise NotFoundError("Notification not found")
        if notification.recipient_id != user_id:
            raise ForbiddenError("Not authorized to access this notification")
        return notification

    def mark_read(self, notification_id: str, user_id: str) -> NotificationResponse:
        notification = self._get_owned(notification_id, user_id)
        notification.is_read = True
        self.db.commit()
        self.db.refresh(notification)
        return NotificationResponse.model_validate(notification)

    def delete_notification(self, notification_id: str, user_id: str) -> None:
        notification = self._get_owned(notification_id, user_id)
        self.db.delete(notification)
        self.db.commit()
