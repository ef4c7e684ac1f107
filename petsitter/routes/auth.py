import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..auth import get_current_user
from ..database import get_db
from ..models import User
from ..schemas import (
    AuthResponse,
    AuthUser,
    LoginRequest,
    RefreshRequest,
    RegisterRequest,
    UpdateMeRequest,
    UserResponse,
    user_response,
)
from ..security_utils import (
    decode_refresh_token,
    generate_tokens,
    hash_password_bcrypt,
    verify_password_bcrypt,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])

INVALID_CREDENTIALS = "Invalid email or password"


def build_auth_response(user: User) -> AuthResponse:
    tokens = generate_tokens(user.id, user.email, user.role)
    return AuthResponse(
        user=AuthUser(
            id=user.id,
            email=user.email,
            name=user.name,
            role=user.role,
            phone=user.phone,
            address=user.address,
            avatar=user.avatar,
            isEmailVerified=user.is_email_verified,
        ),
        **tokens,
    )


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(data: RegisterRequest, db: Session = Depends(get_db)):
    """Create an account and sign it in"""
    existing_user = db.query(User).filter(User.email == data.email).first()
    if existing_user:
        raise HTTPException(status_code=409, detail="This email is already registered")

    user = User(
        email=data.email,
        password_hash=hash_password_bcrypt(data.password),
        name=data.name.strip(),
        phone=data.phone,
        role=data.role.value,
    )
    db.add(user)
    try:
        db.commit()
        db.refresh(user)
    except IntegrityError as e:
        db.rollback()
        # Email was taken between check and insert
        logger.error(f"❌ Email {data.email} was taken by another account (race condition)")
        raise HTTPException(status_code=409, detail="This email is already registered") from e

    logger.info(f"🆕 New user registered: {user.email} ({user.role})")
    return build_auth_response(user)


@router.post("/login", response_model=AuthResponse)
async def login(data: LoginRequest, db: Session = Depends(get_db)):
    """Exchange email and password for a token pair"""
    user = db.query(User).filter(User.email == data.email).first()
    if not user or not verify_password_bcrypt(data.password, user.password_hash):
        logger.warning(f"⚠️ Failed login attempt for {data.email}")
        raise HTTPException(status_code=401, detail=INVALID_CREDENTIALS)

    if user.is_blocked:
        raise HTTPException(status_code=401, detail="User is blocked")

    logger.info(f"✅ User logged in: {user.email}")
    return build_auth_response(user)


@router.post("/refresh", response_model=AuthResponse)
async def refresh(data: RefreshRequest, db: Session = Depends(get_db)):
    """Issue a new token pair from a valid refresh token"""
    payload = decode_refresh_token(data.refreshToken)
    if not payload:
        raise HTTPException(status_code=401, detail="Invalid refresh token")

    user = db.query(User).filter(User.id == payload.get("sub")).first()
    if not user or user.is_blocked:
        raise HTTPException(status_code=401, detail="Invalid refresh token")

    return build_auth_response(user)


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: User = Depends(get_current_user)):
    return user_response(current_user)


@router.patch("/me", response_model=UserResponse)
async def update_me(
    data: UpdateMeRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Update the signed-in user's contact details"""
    updates = data.model_dump(exclude_unset=True)
    for key, value in updates.items():
        if key == "name" and value is None:
            continue
        setattr(current_user, key, value.strip() if isinstance(value, str) else value)

    db.commit()
    db.refresh(current_user)
    logger.info(f"✅ Profile updated for {current_user.email}: {list(updates.keys())}")
    return user_response(current_user)
