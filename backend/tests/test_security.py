from datetime import timedelta
from uuid import uuid4

import pytest

from app.core.security import (
    create_access_token,
    create_token,
    get_password_hash,
    verify_password,
    verify_token,
)


def test_access_token_round_trip():
    user_id = uuid4()
    payload = verify_token(create_access_token(user_id))
    assert payload["sub"] == str(user_id)
    assert payload["type"] == "access"
    assert payload["exp"] - payload["iat"] == 60 * 60


def test_tokens_issued_together_differ():
    user_id = uuid4()
    assert create_access_token(user_id) != create_access_token(user_id)


def test_expired_token_is_rejected():
    token = create_token(uuid4(), timedelta(seconds=-1), "access")
    with pytest.raises(ValueError):
        verify_token(token)


def test_wrong_token_type_is_rejected():
    token = create_token(uuid4(), timedelta(minutes=5), "refresh")
    with pytest.raises(ValueError):
        verify_token(token, token_type="access")


def test_password_hashing():
    hashed = get_password_hash("secret123")
    assert hashed != "secret123"
    assert verify_password("secret123", hashed)
    assert not verify_password("secret124", hashed)


def test_malformed_hash_does_not_verify():
    assert not verify_password("secret123", "not-a-bcrypt-hash")
