import pytest
from jose import JWTError

from storefront.core.security import create_token, decode_token, hash_password, verify_password
from storefront.core.sessions import SessionStore


def test_password_hash_round_trip():
    hashed = hash_password("secret123")
    assert hashed != "secret123"
    assert verify_password("secret123", hashed)
    assert not verify_password("secret124", hashed)


def test_token_carries_user_and_session():
    payload = decode_token(create_token("user-1", "sid-1"))
    assert payload["sub"] == "user-1"
    assert payload["sid"] == "sid-1"


def test_expired_token_is_rejected():
    token = create_token("user-1", "sid-1", expires_minutes=-1)
    with pytest.raises(JWTError):
        decode_token(token)


def test_session_store_lifecycle():
    store = SessionStore()
    sid = store.create("user-1")
    assert store.get_user_id(sid) == "user-1"
    assert store.get_user_id("other") is None
    store.destroy(sid)
    assert store.get_user_id(sid) is None
    assert len(store) == 0


def test_expired_sessions_are_dropped():
    store = SessionStore(expire_minutes=-1)
    sid = store.create("user-1")
    assert store.get_user_id(sid) is None
    assert len(store) == 0


def test_creating_a_session_purges_expired_ones():
    store = SessionStore(expire_minutes=-1)
    for _ in range(5):
        store.create("user-1")
    assert len(store) == 1
