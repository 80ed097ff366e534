from datetime import timedelta

import jwt

from auth import create_access_token, decode_access_token, hash_password, verify_password
from conftest import signup


def test_password_hash_round_trip():
    hashed = hash_password("hunter2")
    assert hashed != "hunter2"
    assert verify_password("hunter2", hashed)
    assert not verify_password("hunter3", hashed)


def test_token_carries_id_and_role():
    payload = decode_access_token(create_access_token(42, "user"))
    assert payload["id"] == "42"
    assert payload["role"] == "user"
    assert "exp" in payload


def test_signup_returns_token(client):
    response = client.post(
        "/api/signup",
        json={
            "firstName": "Jane",
            "lastName": "Doe",
            "email": "Jane@Example.com",
            "password": "secret123",
            "budgetLimit": 500,
        },
    )
    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "User created successfully"
    assert body["redirect"] == "/dashboard"
    assert body["token"]


def test_signup_rejects_duplicate_email(client):
    signup(client)
    response = client.post(
        "/api/signup",
        json={
            "firstName": "Other",
            "lastName": "Person",
            "email": "jane@example.com",
            "password": "x",
            "budgetLimit": 10,
        },
    )
    assert response.status_code == 400
    assert response.json() == {"message": "An account already exists with this email"}


def test_signup_rejects_negative_budget(client):
    response = client.post(
        "/api/signup",
        json={
            "firstName": "Jane",
            "lastName": "Doe",
            "email": "jane@example.com",
            "password": "x",
            "budgetLimit": -1,
        },
    )
    assert response.status_code == 400
    assert "message" in response.json()


def test_login(client):
    signup(client)
    response = client.post(
        "/api/login", json={"email": "jane@example.com", "password": "secret123"}
    )
    assert response.status_code == 200
    assert response.json()["message"] == "Login successful"


def test_login_with_wrong_password(client):
    signup(client)
    response = client.post(
        "/api/login", json={"email": "jane@example.com", "password": "nope"}
    )
    assert response.status_code == 400
    assert response.json() == {"message": "Invalid credentials"}


def test_protected_route_without_token(client):
    response = client.get("/api/entries")
    assert response.status_code == 401
    assert response.json() == {"message": "Not authorized, no token"}


def test_protected_route_with_bad_token(client):
    response = client.get(
        "/api/entries", headers={"Authorization": "Bearer not-a-jwt"}
    )
    assert response.status_code == 401
    assert response.json() == {"message": "Not authorized, token failed"}


def test_expired_token_is_rejected(client):
    signup(client)
    token = create_access_token(1, "user", expires_delta=timedelta(seconds=-5))
    response = client.get("/api/entries", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.json() == {"message": "Not authorized, token failed"}


def test_token_for_missing_user(client):
    token = create_access_token(999, "user")
    response = client.get("/api/entries", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.json() == {"message": "Not authorized, user not found"}


def test_token_signed_with_other_secret(client):
    signup(client)
    token = jwt.encode({"id": "1", "role": "user"}, "a-different-secret-that-is-long-enough", algorithm="HS256")
    response = client.get("/api/entries", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_long_passphrase_signup_and_login(client):
    passphrase = "x" * 80
    signup(client, password=passphrase)

    response = client.post(
        "/api/login", json={"email": "jane@example.com", "password": passphrase}
    )
    assert response.status_code == 200
    assert response.json()["message"] == "Login successful"


def test_long_password_hash_uses_first_72_bytes():
    hashed = hash_password("y" * 80)
    assert verify_password("y" * 80, hashed)
    assert verify_password("y" * 72, hashed)
    assert not verify_password("y" * 71, hashed)


def test_signup_rejects_infinite_budget(client):
    response = client.post(
        "/api/signup",
        json={
            "firstName": "Jane",
            "lastName": "Doe",
            "email": "jane@example.com",
            "password": "x",
            "budgetLimit": "Infinity",
        },
    )
    assert response.status_code == 400
    assert response.json() == {"message": "Invalid value for budgetLimit"}


def test_email_is_stored_as_sent(client):
    signup(client, email="Jane@Example.com")
    response = client.post(
        "/api/login", json={"email": "Jane@Example.com", "password": "secret123"}
    )
    assert response.status_code == 200
