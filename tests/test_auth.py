"""
Note Nexus Backend — Token & Capability Tests
===============================================

What:  Tests for token issuing/decoding and the per-route capability checks.
How:   Tokens are minted with the test secret; protected routes are called
       through the HTTPX test client against the in-memory database.

What we test:
    ✅ POST /jwt returns a token carrying the email claim
    ✅ Missing Authorization header → 403 "Unauthorized Access"
    ✅ Expired, tampered or email-less tokens → 401
    ✅ Role capabilities read the stored role on every request
"""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from notenexus.auth.tokens import create_access_token, decode_access_token
from notenexus.config import settings
from notenexus.models import Role


class TestTokens:

    def test_round_trip_carries_email(self):
        token = create_access_token("ada@x.com")
        claims = decode_access_token(token)

        assert claims["email"] == "ada@x.com"
        assert claims["exp"] > claims["iat"]

    def test_default_lifetime_is_two_hours(self):
        claims = decode_access_token(create_access_token("ada@x.com"))
        assert claims["exp"] - claims["iat"] == 120 * 60

    def test_expired_token_is_rejected(self):
        token = create_access_token("ada@x.com", expires_minutes=-1)
        with pytest.raises(jwt.ExpiredSignatureError):
            decode_access_token(token)

    def test_foreign_signature_is_rejected(self):
        token = jwt.encode(
            {"email": "ada@x.com", "exp": datetime.now(timezone.utc) + timedelta(hours=1)},
            "some-other-secret",
            algorithm="HS256",
        )
        with pytest.raises(jwt.InvalidSignatureError):
            decode_access_token(token)

    def test_token_without_expiry_is_rejected(self):
        token = jwt.encode({"email": "ada@x.com"}, settings.access_token_secret, algorithm="HS256")
        with pytest.raises(jwt.MissingRequiredClaimError):
            decode_access_token(token)


class TestTokenRoute:

    @pytest.mark.asyncio
    async def test_jwt_issues_usable_token(self, test_client):
        response = await test_client.post(
            "/jwt", json={"email": "ada@x.com", "name": "Ada", "photo": "p.png"}
        )

        assert response.status_code == 200
        token = response.json()["token"]
        assert decode_access_token(token)["email"] == "ada@x.com"

    @pytest.mark.asyncio
    async def test_jwt_requires_email(self, test_client):
        response = await test_client.post("/jwt", json={"name": "Ada"})
        assert response.status_code == 422


class TestAuthenticatedCapability:
    """GET /selected-classes only needs a valid token."""

    @pytest.mark.asyncio
    async def test_missing_header_is_403(self, test_client):
        response = await test_client.get("/selected-classes")

        assert response.status_code == 403
        body = response.json()
        assert body["error"] is True
        assert body["message"] == "Unauthorized Access"

    @pytest.mark.asyncio
    async def test_garbage_token_is_401(self, test_client):
        response = await test_client.get(
            "/selected-classes", headers={"Authorization": "Bearer not.a.token"}
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Unauthorized Access"

    @pytest.mark.asyncio
    async def test_expired_token_is_401(self, test_client):
        token = create_access_token("ada@x.com", expires_minutes=-5)
        response = await test_client.get(
            "/selected-classes", headers={"Authorization": f"Bearer {token}"}
        )
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_token_without_email_claim_is_401(self, test_client):
        token = jwt.encode(
            {"sub": "ada", "exp": datetime.now(timezone.utc) + timedelta(hours=1)},
            settings.access_token_secret,
            algorithm=settings.token_algorithm,
        )
        response = await test_client.get(
            "/selected-classes", headers={"Authorization": f"Bearer {token}"}
        )
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_valid_token_passes(self, test_client, auth_headers):
        response = await test_client.get("/selected-classes", headers=auth_headers("ada@x.com"))

        assert response.status_code == 200
        assert response.json() == []


class TestRoleCapabilities:

    @pytest.mark.asyncio
    async def test_student_cannot_use_admin_route(self, test_client, seed_user, auth_headers):
        await seed_user("ada@x.com", role=Role.STUDENT)

        response = await test_client.get("/classes", headers=auth_headers("ada@x.com"))

        assert response.status_code == 403
        assert response.json()["message"] == "Unauthorized Access"

    @pytest.mark.asyncio
    async def test_unknown_user_cannot_use_instructor_route(self, test_client, auth_headers):
        """A valid token for an email with no user row has no role at all."""
        response = await test_client.get(
            "/my-classes/ghost@x.com", headers=auth_headers("ghost@x.com")
        )
        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_admin_passes_admin_route(self, test_client, seed_user, auth_headers):
        await seed_user("root@x.com", role=Role.ADMIN)

        response = await test_client.get("/classes", headers=auth_headers("root@x.com"))

        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_role_change_takes_effect_immediately(
        self, test_client, seed_user, auth_headers
    ):
        """The role is read per request, so an old token sees a new role."""
        admin = await seed_user("root@x.com", role=Role.ADMIN)
        student = await seed_user("ada@x.com", role=Role.STUDENT)
        student_headers = auth_headers("ada@x.com")

        assert (await test_client.get("/my-classes/ada@x.com", headers=student_headers)).status_code == 403

        promoted = await test_client.put(
            f"/set-role/{student.id}",
            json={"role": "Instructor"},
            headers=auth_headers(admin.email),
        )
        assert promoted.status_code == 200

        response = await test_client.get("/my-classes/ada@x.com", headers=student_headers)
        assert response.status_code == 200
        assert response.json() == []
