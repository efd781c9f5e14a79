from __future__ import annotations

import uuid

import jwt
import pytest

from classroom_service.infrastructure.auth.claims import principal_from_claims
from classroom_service.infrastructure.auth.hs256_verifier import HS256Verifier

SECRET = "unit-test-secret-with-enough-length-for-hs256"


def test_roles_from_top_level_claim():
    user_id = uuid.uuid4()

    principal = principal_from_claims({"sub": str(user_id), "roles": ["student", "superuser"]})

    assert principal.user_id == user_id
    assert principal.roles == ["student"]
    assert principal.is_student is True


def test_roles_from_app_metadata():
    principal = principal_from_claims(
        {"sub": str(uuid.uuid4()), "app_metadata": {"roles": ["teacher"]}}
    )

    assert principal.is_teacher is True
    assert principal.is_admin is False


def test_no_roles():
    principal = principal_from_claims({"sub": str(uuid.uuid4())})

    assert principal.roles == []


@pytest.mark.asyncio
async def test_hs256_round_trip():
    user_id = uuid.uuid4()
    token = jwt.encode({"sub": str(user_id), "roles": ["admin"]}, SECRET, algorithm="HS256")

    principal = await HS256Verifier(SECRET).verify(token)

    assert principal.user_id == user_id
    assert principal.is_admin is True


@pytest.mark.asyncio
async def test_hs256_checks_audience_when_configured():
    token = jwt.encode({"sub": str(uuid.uuid4()), "aud": "other"}, SECRET, algorithm="HS256")

    with pytest.raises(jwt.InvalidAudienceError):
        await HS256Verifier(SECRET, audience="classroom").verify(token)


@pytest.mark.asyncio
async def test_hs256_rejects_wrong_secret():
    token = jwt.encode({"sub": str(uuid.uuid4())}, SECRET, algorithm="HS256")

    with pytest.raises(jwt.InvalidSignatureError):
        await HS256Verifier(SECRET + "x").verify(token)
