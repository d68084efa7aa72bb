import pytest

from taskboard.core.security import MAX_PASSWORD_BYTES, hash_password, password_fits, verify_password

pytestmark = pytest.mark.unit


def test_hash_and_verify():
    hashed = hash_password("correct horse")
    assert hashed.startswith("$2b$04$")
    assert verify_password("correct horse", hashed)
    assert not verify_password("wrong horse", hashed)


def test_explicit_rounds_override_setting():
    assert hash_password("correct horse", rounds=5).startswith("$2b$05$")


def test_long_passwords_are_refused_not_truncated():
    prefix = "a" * MAX_PASSWORD_BYTES
    hashed = hash_password(prefix)
    assert password_fits(prefix)
    assert not password_fits(prefix + "b")
    # Multi-byte characters count by their encoded size
    assert not password_fits("é" * 40)

    with pytest.raises(ValueError):
        hash_password(prefix + "b")
    assert not verify_password(prefix + "b", hashed)


@pytest.mark.parametrize("stored", ["", "not-a-bcrypt-hash", "ünicode"])
def test_verify_against_unusable_hash(stored):
    assert verify_password("correct horse", stored) is False


def test_verify_empty_password():
    assert verify_password("", hash_password("correct horse")) is False
