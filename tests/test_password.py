import pytest

from rth_backend.fastapi.models.admin import Admin
from rth_backend.security.password import hash_password, verify_password


def test_hash_is_salted_and_verifies():
    first = hash_password("rahasia123")
    second = hash_password("rahasia123")

    assert first != second
    assert first != "rahasia123"
    assert verify_password("rahasia123", first)
    assert verify_password("rahasia123", second)


def test_wrong_password_does_not_verify():
    hashed = hash_password("rahasia123")
    assert verify_password("rahasia124", hashed) is False


def test_unreadable_hash_does_not_verify():
    assert verify_password("rahasia123", "not-a-hash") is False
    assert verify_password("rahasia123", "") is False
    assert verify_password("", hash_password("rahasia123")) is False


def test_long_password_verifies_with_prefix_semantics():
    long_password = "x" * 100
    hashed = hash_password(long_password)
    assert verify_password(long_password, hashed)


def test_admin_password_assignment_stores_only_a_hash():
    admin = Admin(username="admin")
    admin.password = "rahasia123"

    assert admin.password_hash != "rahasia123"
    assert verify_password("rahasia123", admin.password_hash)

    old_hash = admin.password_hash
    admin.password = "baru12345"
    assert admin.password_hash != old_hash
    assert verify_password("baru12345", admin.password_hash)


def test_admin_password_is_write_only():
    admin = Admin(username="admin")
    admin.password = "rahasia123"
    with pytest.raises(AttributeError):
        admin.password
