from fastapi import Depends
from sqlalchemy.orm import Session

from EventHub.database import get_db
from EventHub.routers.base import api_router
from EventHub.routers.auth import get_current_user
from EventHub.schemas.common import ApiResponse
from EventHub.services.notification_service import NotificationService


@api_router.get("/notifications", response_model=ApiResponse)
def list_notifications(
    unread: bool = False,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user)
):
    result = NotificationService(db).list_notifications(current_user["user_id"], unread_only=unread)
    return ApiResponse(success=True, data=result)


@api_router.put("/notifications/{notification_id}/read", response_model=ApiResponse)
def mark_notification_read(
    notification_id: str,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user)
):
    result = NotificationService(db).mark_read(notification_id, current_user["user_id"])
    return ApiResponse(success=True, message="Notification marked as read.", data=result)


@api_router.delete("/notifications/{notification_id}", response_model=ApiResponse)
def delete_notification(
    notification_id: str,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user)
):
    NotificationService(db).delete_notification(notification_id, current_user["user_id"])
    return ApiResponse(success=True, message="Notification deleted.", data={})
