"""User router for signup and signin."""

import logging
from fastapi import APIRouter, Depends, status
from fastapi.responses import PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from blog_api.database import get_db
from blog_api.models import User
from blog_api.schemas import UserSignup, UserSignin
from blog_api.auth import hash_password, verify_password, create_access_token

# Configure logging
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/user", tags=["User"])


@router.post("/signup", response_class=PlainTextResponse)
def signup(user_data: UserSignup, db: Session = Depends(get_db)):
    """
    Create an account and return its access token as plain text.

    Args:
        user_data: Signup data (username, password, name)
        db: Database session

    Returns:
        PlainTextResponse: The JWT, or 411 if the account could not be created
    """
    logger.info(f"Signup attempt for username: {user_data.username}")

    new_user = User(
        username=user_data.username,
        password_hash=hash_password(user_data.password),
        name=user_data.name
    )

    try:
        db.add(new_user)
        db.commit()
        db.refresh(new_user)
    except SQLAlchemyError as e:
        logger.warning(f"Signup failed for {user_data.username}: {e}")
        db.rollback()
        return PlainTextResponse("User already exists", status_code=status.HTTP_411_LENGTH_REQUIRED)

    access_token = create_access_token(new_user.id)

    logger.info(f"User signed up: {new_user.id}")
    return PlainTextResponse(access_token)


@router.post("/signin", response_class=PlainTextResponse)
def signin(user_data: UserSignin, db: Session = Depends(get_db)):
    """
    Check credentials and return an access token as plain text.

    Args:
        user_data: Signin data (username, password)
        db: Database session

    Returns:
        PlainTextResponse: The JWT, or 403 on bad credentials or lookup failure
    """
    logger.info(f"Signin attempt for username: {user_data.username}")

    try:
        user = db.query(User).filter(User.username == user_data.username).first()
    except SQLAlchemyError as e:
        logger.error(f"Signin lookup failed for {user_data.username}: {e}")
        return PlainTextResponse("Error while signing in", status_code=status.HTTP_403_FORBIDDEN)

    if not user or not verify_password(user_data.password, user.password_hash):
        logger.warning(f"Signin failed: invalid credentials - {user_data.username}")
        return PlainTextResponse(
            "Invalid (User does not exist !!!)",
            status_code=status.HTTP_403_FORBIDDEN
        )

    access_token = create_access_token(user.id)

    logger.info(f"User signed in: {user.id}")
    return PlainTextResponse(access_token)
