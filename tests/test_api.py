"""Auth API endpoint tests."""


def test_health_check(client):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_register_user(client):
    """Test user registration."""
    response = client.post(
        "/register",
        json={"email": "newuser@example.com", "password": "password123"},
    )
    assert response.status_code == 200
    assert response.json()["message"] == "Successfully registered!"


def test_register_lowercases_email(client, db):
    """Test registration stores the email lowercased."""
    from src.models.user import User

    client.post("/register", json={"email": "Mixed.Case@Example.com", "password": "password123"})

    user = db.query(User).one()
    assert user.email == "mixed.case@example.com"
    assert user.password_hash != "password123"


def test_register_duplicate_email(client, auth_headers):
    """Test registration with duplicate email fails."""
    response = client.post(
        "/register",
        json={"email": auth_headers.email.upper(), "password": "password123"},
    )
    assert response.status_code == 400
    assert "already registered" in response.json()["detail"]


def test_register_store_failure_is_reported(client, monkeypatch):
    """Test that a database failure during registration returns an error response."""
    from sqlalchemy.exc import OperationalError
    from sqlalchemy.orm import Session

    def fail_commit(self):
        raise OperationalError("INSERT", {}, Exception("database is down"))

    monkeypatch.setattr(Session, "commit", fail_commit)
    response = client.post(
        "/register",
        json={"email": "down@example.com", "password": "password123"},
    )
    assert response.status_code == 500
    assert response.json()["detail"] == "Internal Server Error"


def test_login(client, auth_headers):
    """Test user login."""
    response = client.post(
        "/login", json={"email": auth_headers.email, "password": "testpass123"}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Login successful"
    assert data["access_token"]
    assert data["id"] == auth_headers.user_id
    assert data["email"] == auth_headers.email


def test_login_any_letter_case(client, auth_headers):
    """Test login matches the email case-insensitively."""
    response = client.post(
        "/login", json={"email": "ADMIN@Example.COM", "password": "testpass123"}
    )
    assert response.status_code == 200
    assert response.json()["id"] == auth_headers.user_id


def test_login_sets_session_cookie(client, auth_headers):
    """Test login sets an HTTP-only, secure, 10 minute session cookie."""
    response = client.post(
        "/login", json={"email": auth_headers.email, "password": "testpass123"}
    )
    cookie = response.headers["set-cookie"]
    assert cookie.startswith("access_token=")
    assert "HttpOnly" in cookie
    assert "Secure" in cookie
    assert "Max-Age=600" in cookie


def test_login_wrong_password(client, auth_headers):
    """Test login with wrong password."""
    response = client.post(
        "/login", json={"email": auth_headers.email, "password": "wrongpass"}
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Incorrect password"


def test_login_unknown_email(client):
    """Test login with an email nobody registered."""
    response = client.post(
        "/login", json={"email": "nobody@example.com", "password": "password123"}
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "User not found"


def test_get_current_user(client, auth_headers):
    """Test getting current user info with the bearer token."""
    response = client.get("/me", headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == {"id": auth_headers.user_id, "email": auth_headers.email}


def test_get_current_user_from_cookie(client, auth_headers):
    """Test the session cookie authenticates the same user as the token."""
    response = client.get("/me", headers={"Cookie": f"access_token={auth_headers.token}"})
    assert response.status_code == 200
    assert response.json()["id"] == auth_headers.user_id


def test_invalid_token_rejected(client, auth_headers):
    """Test that a tampered token is rejected."""
    response = client.get("/me", headers={"Authorization": f"Bearer {auth_headers.token}x"})
    assert response.status_code == 401


def test_unauthorized_access(client):
    """Test that write endpoints require authentication."""
    assert client.get("/me").status_code == 401
    assert client.post("/project", data={"name": "Alpha"}).status_code == 401
    assert client.delete("/events/1").status_code == 401
    assert client.post("/edit-email", json={"id": 1, "email": "x@example.com"}).status_code == 401


def test_logout_clears_cookie(client):
    """Test logout expires the session cookie."""
    response = client.post("/logout")
    assert response.status_code == 200
    cookie = response.headers["set-cookie"]
    assert cookie.startswith("access_token=")
    assert "Max-Age=0" in cookie


def test_edit_email(client, auth_headers):
    """Test changing the email address, then logging in with the new one."""
    response = client.post(
        "/edit-email",
        headers=auth_headers,
        json={"id": auth_headers.user_id, "email": "New.Admin@example.com"},
    )
    assert response.status_code == 200
    assert response.json()["email"] == "new.admin@example.com"

    response = client.post(
        "/login", json={"email": "new.admin@example.com", "password": "testpass123"}
    )
    assert response.status_code == 200


def test_edit_email_accepts_underscore_id(client, auth_headers):
    """Test the original ``_id`` field name is still accepted."""
    response = client.post(
        "/edit-email",
        headers=auth_headers,
        json={"_id": auth_headers.user_id, "email": "other@example.com"},
    )
    assert response.status_code == 200
    assert response.json()["id"] == auth_headers.user_id


def test_edit_email_unknown_user(client, auth_headers):
    """Test changing the email of a missing user."""
    response = client.post(
        "/edit-email",
        headers=auth_headers,
        json={"id": auth_headers.user_id + 100, "email": "other@example.com"},
    )
    assert response.status_code == 404


def test_change_password(client, auth_headers):
    """Test changing the password, then logging in with the new one."""
    response = client.post(
        "/change-password",
        headers=auth_headers,
        json={
            "id": auth_headers.user_id,
            "oldPassword": "testpass123",
            "newPassword": "newpass4567",
            "confirmNewPassword": "newpass4567",
        },
    )
    assert response.status_code == 200
    assert response.json()["message"] == "Password updated successfully"

    old = client.post("/login", json={"email": auth_headers.email, "password": "testpass123"})
    new = client.post("/login", json={"email": auth_headers.email, "password": "newpass4567"})
    assert old.status_code == 400
    assert new.status_code == 200


def test_change_password_wrong_old_password(client, auth_headers):
    """Test changing the password with an incorrect old password."""
    response = client.post(
        "/change-password",
        headers=auth_headers,
        json={
            "id": auth_headers.user_id,
            "oldPassword": "not-my-password",
            "newPassword": "newpass4567",
            "confirmNewPassword": "newpass4567",
        },
    )
    assert response.status_code == 404
    assert response.json()["detail"] == "Incorrect old password"


def test_change_password_confirmation_mismatch(client, auth_headers):
    """Test changing the password when the confirmation differs."""
    response = client.post(
        "/change-password",
        headers=auth_headers,
        json={
            "id": auth_headers.user_id,
            "oldPassword": "testpass123",
            "newPassword": "newpass4567",
            "confirmNewPassword": "newpass4568",
        },
    )
    assert response.status_code == 404
    assert response.json()["detail"] == "New passwords do not match"


def test_change_password_unknown_user(client, auth_headers):
    """Test changing the password of a missing user."""
    response = client.post(
        "/change-password",
        headers=auth_headers,
        json={
            "id": auth_headers.user_id + 100,
            "oldPassword": "testpass123",
            "newPassword": "newpass4567",
            "confirmNewPassword": "newpass4567",
        },
    )
    assert response.status_code == 404
