"""Authentication utilities for JWT and password hashing."""

import os
import logging
from typing import Optional
from datetime import datetime
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Header, Request
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Configure logging
logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# JWT configuration
JWT_SECRET = os.getenv("JWT_SECRET")
if not JWT_SECRET:
    raise ValueError("JWT_SECRET must be set in .env file")

ALGORITHM = "HS256"
BEARER_PREFIX = "bearer "


class NotAuthenticatedError(Exception):
    """Raised when a request carries no verifiable token."""


def _truncate(password: str) -> str:
    # Bcrypt has a 72-byte limit
    password_bytes = password.encode('utf-8')[:72]
    return password_bytes.decode('utf-8', errors='ignore')


def hash_password(password: str) -> str:
    """Return the salted bcrypt hash stored as ``User.password_hash`` at signup."""
    return pwd_context.hash(_truncate(password))


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Check a signin password against the stored hash.

    Both sides go through the same 72-byte truncation as at signup, and
    passlib compares the digests in constant time.

    Args:
        plain_password: Password from the signin body
        hashed_password: ``User.password_hash`` of the looked up account

    Returns:
        bool: True when the signin should be accepted
    """
    return pwd_context.verify(_truncate(plain_password), hashed_password)


def create_access_token(user_id: int) -> str:
    """
    Create a JWT carrying the user id. The token never expires.

    Args:
        user_id: Store identifier of the user

    Returns:
        str: Encoded JWT token
    """
    to_encode = {"id": user_id, "iat": datetime.utcnow()}

    logger.info(f"Creating access token for user: {user_id}")
    return jwt.encode(to_encode, JWT_SECRET, algorithm=ALGORITHM)


def decode_token(token: str) -> Optional[dict]:
    """Return the claims of a token signed with ``JWT_SECRET``, or None when it does not verify."""
    try:
        return jwt.decode(token, JWT_SECRET, algorithms=[ALGORITHM])
    except JWTError as e:
        logger.warning(f"Rejected token: {e}")
        return None


def extract_token(header_value: str) -> str:
    """Return the token from an authorization header, with or without a Bearer prefix."""
    value = header_value.strip()
    if value.lower().startswith(BEARER_PREFIX):
        return value[len(BEARER_PREFIX):].strip()
    return value


def get_current_user_id(request: Request, authorization: str = Header(default="")) -> int:
    """
    Dependency guarding the blog routes.

    Verifies the token from the authorization header and stores the user id
    on ``request.state.user_id``.

    Args:
        request: Incoming request
        authorization: Raw authorization header, empty when absent

    Returns:
        int: The authenticated user id

    Raises:
        NotAuthenticatedError: If the token is missing, invalid, or has no usable id
    """
    payload = decode_token(extract_token(authorization))
    if payload is None:
        logger.warning(f"Rejected unauthenticated request: {request.method} {request.url.path}")
        raise NotAuthenticatedError()

    try:
        user_id = int(payload.get("id"))
    except (TypeError, ValueError):
        logger.warning("Token missing id claim")
        raise NotAuthenticatedError()

    request.state.user_id = user_id
    logger.debug(f"User authenticated: {user_id}")
    return user_id
