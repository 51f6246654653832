from datetime import timedelta

from EventHub.token_utils import create_access_token, decode_token

from conftest import auth_headers, make_vendor


class TestUsers:

    def test_me(self, client, user):
        data = client.get("/api/users/me", headers=auth_headers(user)).json()["data"]

        assert data["user_id"] == user.user_id
        assert data["role"] == "user"
        assert data["vendor_id"] is None
        assert data["token_expires_at"].endswith("UTC")

    def test_me_includes_vendor_profile(self, client, db, user):
        vendor = make_vendor(db, user)
        assert client.get("/api/users/me", headers=auth_headers(user)).json()["data"]["vendor_id"] == vendor.vendor_id

    def test_role_comes_from_database_not_token(self, client, db, user):
        headers = auth_headers(user)
        user.role = "admin"
        db.commit()

        assert client.get("/api/users", headers=headers).status_code == 200

    def test_list_is_admin_only(self, client, user, admin):
        assert client.get("/api/users", headers=auth_headers(user)).status_code == 403
        assert len(client.get("/api/users", headers=auth_headers(admin)).json()["data"]) == 2

    def test_get_self_or_admin(self, client, user, other_user, admin):
        url = f"/api/users/{user.user_id}"
        assert client.get(url, headers=auth_headers(user)).status_code == 200
        assert client.get(url, headers=auth_headers(admin)).status_code == 200
        assert client.get(url, headers=auth_headers(other_user)).status_code == 403

    def test_token_for_unknown_user_is_401(self, client):
        token = create_access_token({"user_id": "ghost", "role": "admin", "email": "ghost@example.com"})
        response = client.get("/api/users/me", headers={"Authorization": f"Bearer {token['token']}"})
        assert response.status_code == 401

    def test_expired_token_is_401(self, client, user):
        token = create_access_token(
            {"user_id": user.user_id, "role": user.role, "email": user.email}, expires_delta=timedelta(minutes=-1)
        )
        response = client.get("/api/users/me", headers={"Authorization": f"Bearer {token['token']}"})
        assert response.status_code == 401
        assert response.json()["message"] == "Token expired"


def test_token_round_trip_claims():
    token = create_access_token({"user_id": "u1", "role": "vendor", "email": "v@example.com"})
    claims = decode_token(token["token"])
    assert claims["user_id"] == "u1"
    assert claims["role"] == "vendor"
    assert "exp" in claims


def test_root_and_health(client):
    assert client.get("/").json()["success"] is True
    assert client.get("/health").json() == {"success": True, "message": "ok", "data": None}


def test_unknown_route_uses_envelope(client):
    response = client.get("/api/not-a-route")
    assert response.status_code == 404
    assert response.json()["success"] is False
