"""Access token round trip and claim validation."""

from datetime import timedelta

import pytest

from eduhub.domain.enums import UserRole
from eduhub.infrastructure.security.jwt import (
    access_token_claims,
    create_access_token,
    generate_refresh_token,
    principal_from_claims,
    verify_token,
)
from eduhub.infrastructure.security.password import check_password, get_password_hash


def test_token_carries_principal() -> None:
    token = create_access_token(access_token_claims(4, "TEACHER", 2, "t@example.com"))
    principal = principal_from_claims(verify_token(token))
    assert principal.id == 4
    assert principal.role is UserRole.TEACHER
    assert principal.business_id == 2
    assert principal.email == "t@example.com"


def test_expired_token_is_rejected() -> None:
    token = create_access_token(
        access_token_claims(4, "ADMIN", 1, "a@example.com"), expires_delta=timedelta(seconds=-5)
    )
    with pytest.raises(ValueError):
        verify_token(token)


def test_tampered_token_is_rejected() -> None:
    token = create_access_token(access_token_claims(4, "ADMIN", 1, "a@example.com"))
    with pytest.raises(ValueError):
        verify_token(token[:-2] + ("AA" if token[-2:] != "AA" else "BB"))


def test_unknown_role_claim_is_rejected() -> None:
    with pytest.raises(ValueError):
        principal_from_claims({"sub": "1", "id": 1, "role": "PRINCIPAL"})


def test_principal_without_business() -> None:
    principal = principal_from_claims({"sub": "9", "role": "USER", "business_id": None})
    assert principal.id == 9
    assert principal.business_id is None


def test_refresh_tokens_are_unique() -> None:
    assert generate_refresh_token() != generate_refresh_token()


async def test_password_hash_and_check() -> None:
    hashed = get_password_hash("correct horse battery staple" * 4)
    assert await check_password("correct horse battery staple" * 4, hashed)
    assert not await check_password("wrong", hashed)
    assert not await check_password("anything", None)
