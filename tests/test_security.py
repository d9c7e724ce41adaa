import time

import jwt
import pytest

from productapi.security import (
    check_password_hash,
    generate_jwt,
    get_secret_key,
    hash_password,
)


def test_hash_password_verifies():
    password = "password"
    hashed = hash_password(password)
    assert hashed != password
    assert check_password_hash(password, hashed) is True


def test_hash_password_uses_default_cost():
    hashed = hash_password("password")
    assert hashed.startswith("$2")
    assert hashed.split("$")[2] == "10"


def test_hash_password_is_salted():
    first = hash_password("password")
    second = hash_password("password")
    assert len({first, second}) == 2
    assert check_password_hash("password", first) is True
    assert check_password_hash("password", second) is True


def test_wrong_password_does_not_match():
    hashed = hash_password("password")
    assert check_password_hash("secret", hashed) is False


def test_malformed_hash_does_not_match():
    assert check_password_hash("password", "placeholder") is False


def test_overlong_password_is_rejected():
    with pytest.raises(ValueError):
        hash_password("password" * 10)


def test_get_secret_key_reads_environment(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "secret")
    assert get_secret_key() == b"secret"


def test_get_secret_key_empty_when_unset(monkeypatch):
    monkeypatch.delenv("JWT_SECRET", raising=False)
    assert get_secret_key() == b""


def test_generate_jwt_claims():
    encoded = generate_jwt(7, "alice", "admin", b"secret")
    claims = jwt.decode(encoded, b"secret", algorithms=["HS256"])
    assert claims["id"] == 7
    assert claims["username"] == "alice"
    assert claims["role"] == "admin"
    assert claims["exp"] - claims["iat"] == 72 * 3600
    assert abs(claims["iat"] - time.time()) < 60


def test_generate_jwt_header_algorithm():
    encoded = generate_jwt(1, "bob", "user", "secret")
    assert jwt.get_unverified_header(encoded)["alg"] == "HS256"


def test_generate_jwt_defaults_to_environment_secret(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "secret")
    encoded = generate_jwt(3, "carol", "user")
    assert jwt.decode(encoded, "secret", algorithms=["HS256"])["id"] == 3


def test_generate_jwt_rejects_other_key():
    encoded = generate_jwt(1, "bob", "user", "secret")
    with pytest.raises(jwt.InvalidSignatureError):
        jwt.decode(encoded, "placeholder", algorithms=["HS256"])