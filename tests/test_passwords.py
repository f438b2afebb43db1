"""
Test Password Hashing
"""
import pytest
from folio.modules.users.auth.passwords import (
    PasswordHasher,
    hash_password,
    verify_password,
    password_fits,
    MAX_PASSWORD_BYTES,
)
from folio.modules.users.exceptions import HashingFailed, InvalidHashFormat


def test_hash_then_verify():
    hashed = hash_password("pw", rounds=4)
    assert hashed != "pw"
    assert hashed.startswith("$2")
    assert verify_password("pw", hashed) is True


def test_wrong_password_is_false_not_error():
    hashed = hash_password("correct horse", rounds=4)
    assert verify_password("battery staple", hashed) is False


def test_same_password_gets_different_salts():
    assert hash_password("pw", rounds=4) != hash_password("pw", rounds=4)


def test_malformed_hash_raises():
    with pytest.raises(InvalidHashFormat):
        verify_password("pw", "not-a-bcrypt-hash")


def test_non_ascii_hash_raises():
    with pytest.raises(InvalidHashFormat):
        verify_password("pw", "$2b$04$héllo")


def test_overlong_password():
    too_long = "a" * (MAX_PASSWORD_BYTES + 1)
    assert password_fits("a" * MAX_PASSWORD_BYTES)
    assert not password_fits(too_long)

    with pytest.raises(HashingFailed):
        hash_password(too_long, rounds=4)

    # Never matches, but the stored hash is still validated.
    hashed = hash_password("a" * MAX_PASSWORD_BYTES, rounds=4)
    assert verify_password(too_long, hashed) is False
    with pytest.raises(InvalidHashFormat):
        verify_password(too_long, "garbage")


@pytest.mark.asyncio
async def test_async_hasher():
    hasher = PasswordHasher(rounds=4)
    hashed = await hasher.hash("s3cret")
    assert await hasher.verify("s3cret", hashed) is True
    assert await hasher.verify("other", hashed) is False
