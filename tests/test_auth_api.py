import uuid

from tool_directory.core.security import create_access_token
from tool_directory.models import Profile
from tool_directory.schemas.enums import Role


def register(client, **overrides):
    payload = {
        "email": "new@example.com",
        "password": "secret123",
        "full_name": "New Person",
        "role": "vendor",
    }
    payload.update(overrides)
    return client.post("/api/auth/register", json=payload)


def login(client, email="new@example.com", password="secret123"):
    return client.post("/api/auth/login", json={"email": email, "password": password})


def test_register_and_login(client):
    response = register(client, company_name="TechCorp AI")
    assert response.status_code == 200
    profile = response.json()["data"]
    assert profile["role"] == "vendor"
    assert profile["company_name"] == "TechCorp AI"

    response = login(client)
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["token_type"] == "bearer"
    assert data["profile"]["id"] == profile["id"]

    headers = {"Authorization": f"Bearer {data['access_token']}"}
    response = client.get("/api/auth/profile", headers=headers)
    assert response.json()["data"]["email"] == "new@example.com"


def test_register_rejects_admin_role(client):
    response = register(client, role="admin")
    assert response.status_code == 400
    assert "role" in response.json()["details"]["field_errors"]


def test_register_validates_fields(client):
    response = register(client, email="not-an-email", password="123", full_name="X")
    assert response.status_code == 400
    field_errors = response.json()["details"]["field_errors"]
    assert {"email", "password", "full_name"} <= set(field_errors)


def test_register_duplicate_email(client):
    register(client)
    response = register(client)
    assert response.status_code == 400
    assert response.json()["error"] == "Email already registered"


def test_login_wrong_password(client):
    register(client)
    response = login(client, password="wrong-password")
    assert response.status_code == 401
    assert response.json()["success"] is False


def test_profile_requires_session(client):
    assert client.get("/api/auth/profile").status_code == 401
    response = client.get("/api/auth/profile", headers={"Authorization": "Bearer garbage"})
    assert response.status_code == 401


def test_update_profile(client, vendor, auth_headers):
    response = client.put(
        "/api/auth/profile",
        json={"full_name": "Vera V.", "company_name": "Acme", "avatar_url": "https://cdn.example.com/a.png"},
        headers=auth_headers(vendor),
    )
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Profile updated successfully"
    assert body["data"]["full_name"] == "Vera V."
    assert body["data"]["avatar_url"].startswith("https://cdn.example.com/a.png")
    # Role cannot be changed through the profile endpoint
    assert body["data"]["role"] == "vendor"


def test_update_profile_clears_avatar(client, vendor, auth_headers):
    headers = auth_headers(vendor)
    client.put("/api/auth/profile", json={"avatar_url": "https://cdn.example.com/a.png"}, headers=headers)
    response = client.put("/api/auth/profile", json={"avatar_url": ""}, headers=headers)
    assert response.json()["data"]["avatar_url"] is None


def test_update_profile_invalid_input(client, vendor, auth_headers):
    response = client.put(
        "/api/auth/profile", json={"full_name": "V", "avatar_url": "not a url"}, headers=auth_headers(vendor)
    )
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid input"


def test_update_role_as_admin(client, db, admin, vendor, auth_headers):
    response = client.put(
        "/api/auth/update-role",
        json={"user_id": vendor.id, "role": "admin"},
        headers=auth_headers(admin),
    )
    assert response.status_code == 200
    assert response.json()["message"] == "User role updated to admin"
    db.expire_all()
    assert db.get(Profile, vendor.id).role == "admin"


def test_update_role_as_non_admin_is_forbidden(client, db, vendor, make_account, auth_headers):
    target = make_account("target@example.com", role=Role.USER)
    response = client.put(
        "/api/auth/update-role",
        json={"user_id": target.id, "role": "admin"},
        headers=auth_headers(vendor),
    )
    assert response.status_code == 403
    assert response.json()["error"] == "Admin access required"
    db.expire_all()
    assert db.get(Profile, target.id).role == "user"


def test_update_role_rechecks_caller_role(client, db, admin, vendor, auth_headers):
    headers = auth_headers(admin)
    # Demote the admin after the token was issued
    db.get(Profile, admin.id).role = "user"
    db.commit()

    response = client.put("/api/auth/update-role", json={"user_id": vendor.id, "role": "user"}, headers=headers)
    assert response.status_code == 403
    db.expire_all()
    assert db.get(Profile, vendor.id).role == "vendor"


def test_update_role_unknown_target(client, admin, auth_headers):
    response = client.put(
        "/api/auth/update-role",
        json={"user_id": str(uuid.uuid4()), "role": "vendor"},
        headers=auth_headers(admin),
    )
    assert response.status_code == 404


def test_update_role_validates_input(client, admin, auth_headers):
    response = client.put(
        "/api/auth/update-role",
        json={"user_id": "not-a-uuid", "role": "owner"},
        headers=auth_headers(admin),
    )
    assert response.status_code == 400
    assert {"user_id", "role"} <= set(response.json()["details"]["field_errors"])


def test_update_role_requires_session(client, vendor):
    response = client.put("/api/auth/update-role", json={"user_id": vendor.id, "role": "admin"})
    assert response.status_code == 401


def test_validate_session_without_token(client):
    for method in (client.get, client.post):
        response = method("/api/auth/validate-session")
        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "data": {"user": None, "profile": None, "is_valid": False},
        }


def test_validate_session_with_token(client, vendor, auth_headers):
    response = client.get("/api/auth/validate-session", headers=auth_headers(vendor))
    data = response.json()["data"]
    assert data["is_valid"] is True
    assert data["user"]["id"] == vendor.id
    assert data["user"]["email_confirmed"] is False
    assert data["profile"]["role"] == "vendor"


def test_token_for_deleted_account_is_invalid(client):
    token = create_access_token({"sub": str(uuid.uuid4())})
    response = client.get("/api/auth/validate-session", headers={"Authorization": f"Bearer {token}"})
    assert response.json()["data"]["is_valid"] is False


def test_logout(client, vendor, auth_headers):
    response = client.post("/api/auth/logout", headers=auth_headers(vendor))
    assert response.json() == {"success": True, "message": "Logged out successfully"}
