from jose import jwt

from shop.auth import get_password_hash, verify_password
from shop.config import ALGORITHM, SECRET_KEY


def register(client, email="carol@example.com", password="password123"):
    return client.post(
        "/api/auth/register",
        json={"email": email, "full_name": "Carol", "password": password},
    )


def test_password_hash_roundtrip():
    hashed = get_password_hash("password123")
    assert verify_password("password123", hashed)
    assert not verify_password("wrong-password", hashed)


def test_verify_password_with_garbage_hash():
    assert verify_password("password123", "not-a-hash") is False


def test_register_and_duplicate(client):
    r = register(client)
    assert r.status_code == 201
    assert r.json()["email"] == "carol@example.com"
    assert "password_hash" not in r.json()

    r = register(client)
    assert r.status_code == 400


def test_register_rejects_short_password(client):
    r = register(client, password="short")
    assert r.status_code == 400


def test_login_issues_token_for_email(client):
    register(client)
    r = client.post("/api/auth/login", json={"email": "carol@example.com", "password": "password123"})
    assert r.status_code == 200
    token = r.json()["access_token"]
    assert jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])["sub"] == "carol@example.com"

    r = client.get("/cart", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 200
    assert r.json() == []


def test_login_with_wrong_password(client):
    register(client)
    r = client.post("/api/auth/login", json={"email": "carol@example.com", "password": "nope-nope"})
    assert r.status_code == 401


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}
