import logging

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from .database import get_db
from .models import User
from .security_utils import ACCESS_TOKEN_TYPE, verify_jwt_token

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    """Get current user from the bearer access token"""

    if not credentials:
        logger.debug("❌ No credentials provided")
        raise HTTPException(
            status_code=401,
            detail="Not authenticated. Please provide a valid Bearer token in the Authorization header.",
        )

    token = credentials.credentials

    # Basic token format validation before processing
    token_parts = token.split(".")
    if len(token_parts) != 3:
        logger.warning(
            f"⚠️ Malformed token received: {len(token_parts)} parts, token length: {len(token)}"
        )
        raise HTTPException(
            status_code=401, detail="Invalid token format. Expected a valid JWT token."
        )

    payload = verify_jwt_token(token)
    if not payload:
        raise HTTPException(
            status_code=401,
            detail="Token is invalid or has expired. Please sign in again.",
            headers={"X-Token-Expired": "true"},
        )

    if payload.get("type") != ACCESS_TOKEN_TYPE:
        logger.warning("⚠️ Non-access token presented as bearer credentials")
        raise HTTPException(status_code=401, detail="Invalid token type")

    user_id = payload.get("sub")
    if not user_id:
        logger.error(f"❌ Token missing user ID claim. Available claims: {list(payload.keys())}")
        raise HTTPException(status_code=401, detail="Invalid token claims")

    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise HTTPException(status_code=401, detail="User not found")

    if user.is_blocked:
        logger.warning(f"🚫 Blocked user {user.email} attempted to authenticate")
        raise HTTPException(status_code=401, detail="User is blocked")

    logger.debug(f"✅ User authenticated: {user.email}")
    return user
