import pytest

from EventHub.database import Notification, NotificationTypeEnum
from EventHub.services.notification_service import NotificationService

from conftest import auth_headers


@pytest.fixture
def notifications(db, user):
    service = NotificationService(db)
    first = service.notify(user.user_id, NotificationTypeEnum.system_notification, "Welcome", "Hello")
    second = service.notify(user.user_id, NotificationTypeEnum.event_reminder, "Reminder", "Tomorrow")
    db.commit()
    return first, second


class TestNotifications:

    def test_notify_does_not_commit(self, db, user):
        NotificationService(db).notify(user.user_id, NotificationTypeEnum.system_notification, "Queued", "x")
        assert db.new
        db.rollback()
        assert db.query(Notification).count() == 0

    def test_list_and_unread_filter(self, client, user, notifications):
        headers = auth_headers(user)
        first, _ = notifications

        client.put(f"/api/notifications/{first.notification_id}/read", headers=headers)

        everything = client.get("/api/notifications", headers=headers).json()["data"]
        unread = client.get("/api/notifications", params={"unread": "true"}, headers=headers).json()["data"]
        assert len(everything) == 2
        assert [n["title"] for n in unread] == ["Reminder"]

    def test_only_recipient_can_touch(self, client, other_user, notifications):
        first, _ = notifications
        headers = auth_headers(other_user)

        assert client.get("/api/notifications", headers=headers).json()["data"] == []
        assert client.put(f"/api/notifications/{first.notification_id}/read", headers=headers).status_code == 403
        assert client.delete(f"/api/notifications/{first.notification_id}", headers=headers).status_code == 403

    def test_delete(self, client, db, user, notifications):
        first, _ = notifications

        response = client.delete(f"/api/notifications/{first.notification_id}", headers=auth_headers(user))

        assert response.status_code == 200
        assert db.query(Notification).count() == 1

    def test_missing_notification_is_404(self, client, user):
        assert client.put("/api/notifications/missing/read", headers=auth_headers(user)).status_code == 404
