from datetime import timedelta

from petsitter.security_utils import (
    ACCESS_TOKEN_TYPE,
    create_jwt_token,
    decode_refresh_token,
    generate_tokens,
    hash_password_bcrypt,
    verify_jwt_token,
    verify_password_bcrypt,
)


def test_password_hash_round_trip() -> None:
    hashed = hash_password_bcrypt("secret-password")

    assert hashed != "secret-password"
    assert verify_password_bcrypt("secret-password", hashed)
    assert not verify_password_bcrypt("wrong-password", hashed)
    assert not verify_password_bcrypt("secret-password", "not-a-hash")


def test_generated_tokens_carry_user_claims() -> None:
    tokens = generate_tokens("user-1", "a@example.com", "OWNER")

    access = verify_jwt_token(tokens["accessToken"])
    assert access["sub"] == "user-1"
    assert access["role"] == "OWNER"
    assert access["type"] == ACCESS_TOKEN_TYPE

    refresh = decode_refresh_token(tokens["refreshToken"])
    assert refresh["sub"] == "user-1"


def test_access_token_is_not_a_refresh_token() -> None:
    tokens = generate_tokens("user-1", "a@example.com", "OWNER")

    assert decode_refresh_token(tokens["accessToken"]) is None
    assert verify_jwt_token(tokens["refreshToken"]) is None


def test_expired_token_is_rejected() -> None:
    token = create_jwt_token({"sub": "user-1"}, expires_delta=timedelta(minutes=-1))

    assert verify_jwt_token(token) is None
