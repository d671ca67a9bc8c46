from datetime import datetime, timedelta, timezone
from fastapi.testclient import TestClient
from traininglog.main import app
from traininglog.db import SessionLocal
from traininglog.repositories.user_repo import UserRepository
from traininglog.routers import auth as auth_router
from traininglog.security import generate_reset_token
import pytest, uuid

client = TestClient(app)
PWD = "StrongPassw0rd!"
NEW_PWD = "BrandNewPassw0rd!"
SAME_MESSAGE = "If an account exists with that email, you'll receive a reset link."

def unique_email():
    return f"u_{uuid.uuid4().hex[:10]}@example.com"

def signup(email):
    r = client.post("/api/auth/signup", json={
        "name": "Reset", "email": email, "password": PWD, "confirmPassword": PWD,
    })
    assert r.status_code == 200

def reset(token, password=NEW_PWD):
    return client.post("/api/auth/reset-password", json={
        "token": token, "password": password, "confirmPassword": password,
    })

def can_login(email, password):
    r = client.post("/api/auth/login", json={"email": email, "password": password})
    client.cookies.clear()
    return r.status_code == 200

@pytest.fixture
def outbox(monkeypatch):
    sent = []
    monkeypatch.setattr(auth_router, "send_password_reset_email", lambda to, url: sent.append((to, url)))
    return sent

def test_forgot_password_same_answer_for_known_and_unknown(outbox):
    email = unique_email()
    signup(email)
    known = client.post("/api/auth/forgot-password", json={"email": email})
    unknown = client.post("/api/auth/forgot-password", json={"email": unique_email()})
    assert known.status_code == unknown.status_code == 200
    assert known.json() == unknown.json() == {"message": SAME_MESSAGE}
    # only the real account got mail
    assert [to for to, _ in outbox] == [email]
    assert outbox[0][1].startswith("http://localhost:3000/reset-password/")

def test_forgot_password_email_failure_still_200(monkeypatch):
    def boom(to, url):
        raise RuntimeError("mail provider down")
    monkeypatch.setattr(auth_router, "send_password_reset_email", boom)
    email = unique_email()
    signup(email)
    r = client.post("/api/auth/forgot-password", json={"email": email})
    assert r.status_code == 200
    assert r.json() == {"message": SAME_MESSAGE}

def test_forgot_password_malformed_email():
    r = client.post("/api/auth/forgot-password", json={"email": "nope"})
    assert r.status_code == 400
    assert "email" in r.json()["error"]

def test_reset_token_is_single_use(outbox):
    email = unique_email()
    signup(email)
    client.post("/api/auth/forgot-password", json={"email": email})
    token = outbox[0][1].rsplit("/", 1)[-1]

    r = reset(token)
    assert r.status_code == 200
    assert r.json() == {"message": "Password reset successfully"}
    assert can_login(email, NEW_PWD)
    assert not can_login(email, PWD)

    again = reset(token, "AnotherPassw0rd!")
    assert again.status_code == 400
    assert again.json() == {"error": "Invalid or expired reset link"}

def test_reset_with_expired_token():
    email = unique_email()
    signup(email)
    raw, token_hash = generate_reset_token()
    db = SessionLocal()
    repo = UserRepository(db)
    repo.set_reset_token(
        repo.get_by_email(email),
        token_hash=token_hash,
        expires_at=datetime.now(timezone.utc) - timedelta(minutes=1),
    )
    db.close()
    r = reset(raw)
    assert r.status_code == 400
    assert can_login(email, PWD)

def test_reset_with_unknown_token():
    assert reset("deadbeef").status_code == 400

def test_reset_password_mismatch():
    r = client.post("/api/auth/reset-password", json={
        "token": "x", "password": NEW_PWD, "confirmPassword": "different1",
    })
    assert r.status_code == 400
    assert r.json()["error"] == {"confirmPassword": ["Passwords don't match"]}
