"""
Unit tests for token verification against HS256 secrets and RS256 JWKS.
"""
import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from jose import jwk, jwt

from mototrip.core import security
from mototrip.core.config import settings
from mototrip.tests.conftest import TEST_AUDIENCE, TEST_DOMAIN, make_token


@pytest.fixture
def rsa_key():
    private_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    private_pem = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption()
    ).decode()
    public_pem = private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo
    ).decode()
    public_jwk = jwk.construct(public_pem, "RS256").to_dict()
    public_jwk["kid"] = "key-1"
    public_jwk["use"] = "sig"
    return private_pem, public_jwk


@pytest.fixture
def rs256(monkeypatch, rsa_key):
    """Switch verification to RS256 with a JWKS served from memory."""
    _, public_jwk = rsa_key
    fetches = []

    def fake_fetch():
        fetches.append(1)
        return {"keys": [public_jwk]}

    monkeypatch.setattr(settings, "AUTH0_ALGORITHMS", ["RS256"])
    monkeypatch.setattr(security, "_fetch_jwks", fake_fetch)
    security.clear_jwks_cache()
    yield fetches
    security.clear_jwks_cache()


def _rs256_token(private_pem: str, kid: str = "key-1", **claims) -> str:
    payload = {
        "sub": "auth0|rs-user",
        "aud": TEST_AUDIENCE,
        "iss": f"https://{TEST_DOMAIN}/",
    }
    payload.update(claims)
    return jwt.encode(payload, private_pem, algorithm="RS256", headers={"kid": kid})


def test_hs256_token_is_accepted():
    claims = security.decode_access_token(make_token("auth0|hs-user"))
    assert claims is not None
    assert claims["sub"] == "auth0|hs-user"


def test_hs256_token_with_wrong_secret_is_rejected():
    token = jwt.encode(
        {"sub": "auth0|x", "aud": TEST_AUDIENCE, "iss": f"https://{TEST_DOMAIN}/"},
        "some-other-secret",
        algorithm="HS256"
    )
    assert security.decode_access_token(token) is None


def test_token_without_subject_is_rejected():
    token = jwt.encode(
        {"aud": TEST_AUDIENCE, "iss": f"https://{TEST_DOMAIN}/"},
        settings.AUTH0_CLIENT_SECRET,
        algorithm="HS256"
    )
    assert security.decode_access_token(token) is None


def test_rs256_token_verified_with_jwks(rs256, rsa_key):
    private_pem, _ = rsa_key
    claims = security.decode_access_token(_rs256_token(private_pem))
    assert claims["sub"] == "auth0|rs-user"


def test_jwks_is_cached_between_requests(rs256, rsa_key):
    private_pem, _ = rsa_key
    security.decode_access_token(_rs256_token(private_pem))
    security.decode_access_token(_rs256_token(private_pem))
    assert len(rs256) == 1


def test_unknown_kid_forces_one_refresh(rs256, rsa_key):
    private_pem, _ = rsa_key
    assert security.decode_access_token(_rs256_token(private_pem, kid="rotated")) is None
    assert len(rs256) == 2


def test_disallowed_algorithm_is_rejected(rs256):
    # HS256 is not in the allowed list once RS256 is configured
    assert security.decode_access_token(make_token("auth0|hs-user")) is None
