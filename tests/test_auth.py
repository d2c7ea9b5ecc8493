"""
Authentication and role-check tests for the admin routes.
"""

from datetime import timedelta

from bson import ObjectId
from jose import jwt

from app.config import settings
from app.security import create_access_token, decode_token
from test_fixtures import auth_headers

BASE = "/api/admin/meals"


def test_token_round_trip():
    user_id = str(ObjectId())
    claims = decode_token(create_access_token(user_id))
    assert claims["sub"] == user_id
    assert claims["type"] == "access"


def test_missing_header(client):
    r = client.get(BASE)
    assert r.status_code == 401
    assert r.json() == {"error": "Unauthorized", "message": "User not authenticated"}


def test_malformed_token(client):
    r = client.get(BASE, headers={"Authorization": "Bearer not.a.jwt"})
    assert r.status_code == 401
    assert r.json()["message"] == "Invalid or expired token"


def test_expired_token(client, admin):
    token = create_access_token(admin.id, expires_delta=timedelta(seconds=-30))
    r = client.get(BASE, headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 401


def test_token_signed_with_other_secret(client, admin):
    token = jwt.encode(
        {"sub": admin.id, "type": "access"}, "another-secret", algorithm=settings.jwt_algorithm
    )
    r = client.get(BASE, headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 401


def test_refresh_token_rejected(client, admin):
    token = jwt.encode(
        {"sub": admin.id, "type": "refresh"}, settings.jwt_secret, algorithm=settings.jwt_algorithm
    )
    r = client.get(BASE, headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 401


def test_unknown_subject(client):
    r = client.get(BASE, headers=auth_headers(str(ObjectId())))
    assert r.status_code == 401
    assert r.json()["message"] == "User not found"


def test_admin_is_admitted(client, admin_headers):
    r = client.get(BASE, headers=admin_headers)
    assert r.status_code == 200


def test_non_admin_is_forbidden(client, regular_user):
    r = client.get(BASE, headers=auth_headers(regular_user.id))
    assert r.status_code == 403
    assert r.json()["error"] == "Forbidden"
