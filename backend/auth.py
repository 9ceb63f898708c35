"""
Authentication for the session API: API keys and Clerk JWTs.
Provides FastAPI dependencies for securing endpoints.

- API keys: "key" or "key:user_id", checked against the API_KEYS setting
- Clerk JWTs: RS256, validated via the Clerk domain's JWKS
"""
import logging
from typing import Optional

import jwt
from fastapi import HTTPException, Header

from backend.settings import get_settings

logger = logging.getLogger(__name__)

DEFAULT_API_KEY_USER = "admin"

_jwks_clients: dict = {}


def get_jwks_client(clerk_domain: str) -> Optional[jwt.PyJWKClient]:
    """Get or create the JWKS client for a Clerk domain."""
    if not clerk_domain:
        return None
    if clerk_domain not in _jwks_clients:
        _jwks_clients[clerk_domain] = jwt.PyJWKClient(
            f"https://{clerk_domain}/.well-known/jwks.json"
        )
    return _jwks_clients[clerk_domain]


async def get_current_user(
    authorization: Optional[str] = Header(None),
    x_api_key: Optional[str] = Header(None, alias="X-API-Key"),
) -> str:
    """
    Authenticate via API key OR Clerk JWT.
    Returns user_id string.

    Usage:
        @app.get("/protected")
        async def protected_route(user_id: str = Depends(get_current_user)):
            return {"user_id": user_id}
    """
    if x_api_key:
        return validate_api_key(x_api_key)

    if authorization:
        return validate_jwt(authorization)

    raise HTTPException(
        status_code=401,
        detail="Missing authentication. Provide Authorization header or X-API-Key."
    )


def validate_api_key(api_key: str) -> str:
    """
    Validate API key and return user_id.

    API key format options:
    - Simple: "sk_test_abc123" -> returns "admin"
    - With user: "sk_test_abc123:user_12345" -> returns "user_12345"
    """
    valid_keys = get_settings().api_keys_list

    if not valid_keys:
        logger.warning("No API keys configured (API_KEYS env var empty)")
        raise HTTPException(status_code=401, detail="API key authentication not configured")

    key_part, _, user_id = api_key.partition(":")

    if key_part not in valid_keys:
        raise HTTPException(status_code=401, detail="Invalid API key")

    return user_id or DEFAULT_API_KEY_USER


def validate_jwt(authorization: str) -> str:
    """Validate a Clerk bearer token (RS256 via JWKS) and return user_id."""
    if not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Invalid authorization header format")

    token = authorization.split(" ", 1)[1]
    jwks_client = get_jwks_client(get_settings().clerk_domain)

    if not jwks_client:
        raise HTTPException(
            status_code=500,
            detail="JWT validation not configured (missing CLERK_DOMAIN)"
        )

    try:
        signing_key = jwks_client.get_signing_key_from_jwt(token)
        payload = jwt.decode(
            token,
            signing_key.key,
            algorithms=["RS256"],
            options={"verify_aud": False}
        )
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Token expired")
    except jwt.InvalidTokenError as e:
        logger.warning(f"Invalid JWT: {e}")
        raise HTTPException(status_code=401, detail=f"Invalid token: {str(e)}")

    user_id = payload.get("sub")
    if not user_id:
        raise HTTPException(status_code=401, detail="Token missing user ID")
    return user_id
