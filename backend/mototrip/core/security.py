"""
Auth0 bearer token verification.

Tokens signed with RS256 are checked against the tenant's JWKS document,
which is fetched with httpx and cached for ``JWKS_CACHE_SECONDS``. Tokens
signed with HS256 are checked against ``AUTH0_CLIENT_SECRET``.
"""
import logging
import time
from typing import Optional

import httpx
from jose import JWTError, jwt
from mototrip.core.config import settings

logger = logging.getLogger(__name__)

_jwks_cache = {"keys": None, "fetched_at": 0.0}


def _fetch_jwks() -> dict:
    """Download the tenant's JSON Web Key Set."""
    logger.info(f"Fetching JWKS from {settings.jwks_url}")
    response = httpx.get(settings.jwks_url, timeout=10.0)
    response.raise_for_status()
    return response.json()


def get_jwks(force_refresh: bool = False) -> dict:
    """Return the cached JWKS, refreshing it when stale."""
    age = time.time() - _jwks_cache["fetched_at"]
    if force_refresh or _jwks_cache["keys"] is None or age > settings.JWKS_CACHE_SECONDS:
        _jwks_cache["keys"] = _fetch_jwks()
        _jwks_cache["fetched_at"] = time.time()
    return _jwks_cache["keys"]


def clear_jwks_cache() -> None:
    _jwks_cache["keys"] = None
    _jwks_cache["fetched_at"] = 0.0


def _find_key(jwks: dict, kid: Optional[str]) -> Optional[dict]:
    for key in jwks.get("keys", []):
        if key.get("kid") == kid:
            return key
    return None


def get_signing_key(token: str):
    """Pick the key that verifies this token based on its header."""
    header = jwt.get_unverified_header(token)
    algorithm = header.get("alg")
    if algorithm not in settings.AUTH0_ALGORITHMS:
        raise JWTError(f"Algorithm '{algorithm}' is not allowed")

    if algorithm.startswith("HS"):
        if not settings.AUTH0_CLIENT_SECRET:
            raise JWTError("AUTH0_CLIENT_SECRET is not configured")
        return settings.AUTH0_CLIENT_SECRET

    kid = header.get("kid")
    key = _find_key(get_jwks(), kid)
    if key is None:
        # Keys may have been rotated since the last fetch
        key = _find_key(get_jwks(force_refresh=True), kid)
    if key is None:
        raise JWTError(f"No signing key found for kid '{kid}'")
    return key


def decode_access_token(token: str) -> Optional[dict]:
    """Verify a bearer token and return its claims, or None when invalid."""
    try:
        key = get_signing_key(token)
        issuer = settings.auth0_issuer if (settings.AUTH0_DOMAIN or settings.AUTH0_ISSUER) else None
        payload = jwt.decode(
            token,
            key,
            algorithms=settings.AUTH0_ALGORITHMS,
            audience=settings.AUTH0_AUDIENCE or None,
            issuer=issuer,
            options={"verify_aud": bool(settings.AUTH0_AUDIENCE)},
        )
    except JWTError as e:
        logger.warning(f"Rejected bearer token: {e}")
        return None
    except httpx.HTTPError as e:
        logger.error(f"Could not load signing keys: {e}")
        return None

    if not payload.get("sub"):
        logger.warning("Rejected bearer token without 'sub' claim")
        return None
    return payload
