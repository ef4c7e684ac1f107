"""
Security Utilities
Password hashing and JWT issuance/verification
"""

import logging
from datetime import datetime, timedelta
from typing import Any, Optional

from jose import JWTError
from jose import jwt as jose_jwt
from passlib.context import CryptContext

from .config import (
    ACCESS_TOKEN_EXPIRE_MINUTES,
    BCRYPT_ROUNDS,
    JWT_ALGORITHM,
    REFRESH_SECRET_KEY,
    REFRESH_TOKEN_EXPIRE_DAYS,
    SECRET_KEY,
)

logger = logging.getLogger(__name__)

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=BCRYPT_ROUNDS)


# ============================================================================
# PASSWORD SECURITY
# ============================================================================


def hash_password_bcrypt(password: str) -> str:
    """Hash password using bcrypt"""
    return pwd_context.hash(password)


def verify_password_bcrypt(plain_password: str, hashed_password: str) -> bool:
    """Verify password against bcrypt hash"""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError) as e:
        logger.error(f"Password verification error: {e}")
        return False


# ============================================================================
# JWT TOKENS
# ============================================================================


def create_jwt_token(
    data: dict[str, Any],
    expires_delta: Optional[timedelta] = None,
    secret_key: str = SECRET_KEY,
) -> str:
    """
    Create a JWT token

    Args:
        data: Data to encode in the token
        expires_delta: Token expiration time (default 15 minutes)
        secret_key: Signing key
    """
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.utcnow() + expires_delta
    else:
        expire = datetime.utcnow() + timedelta(minutes=15)

    to_encode.update({"exp": expire})
    encoded_jwt = jose_jwt.encode(to_encode, secret_key, algorithm=JWT_ALGORITHM)
    return encoded_jwt


def verify_jwt_token(token: str, secret_key: str = SECRET_KEY) -> Optional[dict[str, Any]]:
    """
    Verify and decode a JWT token

    Returns:
        Decoded payload if valid, None if invalid or expired
    """
    try:
        payload = jose_jwt.decode(token, secret_key, algorithms=[JWT_ALGORITHM])
        return payload
    except JWTError as e:
        logger.warning(f"JWT verification failed: {e}")
        return None


def generate_tokens(user_id: str, email: str, role: str) -> dict[str, str]:
    """Issue an access/refresh token pair for a user"""
    claims = {"sub": user_id, "email": email, "role": role}

    access_token = create_jwt_token(
        {**claims, "type": ACCESS_TOKEN_TYPE},
        expires_delta=timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES),
    )
    refresh_token = create_jwt_token(
        {**claims, "type": REFRESH_TOKEN_TYPE},
        expires_delta=timedelta(days=REFRESH_TOKEN_EXPIRE_DAYS),
        secret_key=REFRESH_SECRET_KEY,
    )

    return {"accessToken": access_token, "refreshToken": refresh_token}


def decode_refresh_token(token: str) -> Optional[dict[str, Any]]:
    """Decode a refresh token, rejecting access tokens presented in its place"""
    payload = verify_jwt_token(token, secret_key=REFRESH_SECRET_KEY)
    if not payload or payload.get("type") != REFRESH_TOKEN_TYPE:
        return None
    return payload
