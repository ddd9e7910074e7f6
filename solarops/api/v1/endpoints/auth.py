"""
Authentication Endpoints Module

This module provides authentication endpoints for user registration, login, and logout.
Login returns a JWT bearer token and also sets it as an HTTP-only cookie for
browser clients.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status, Response
from fastapi.security import OAuth2PasswordRequestForm
from sqlmodel import Session, select
from datetime import timedelta

from solarops.db.session import get_db
from solarops.models.user import User, UserRole
from solarops.core.security import verify_password, get_password_hash, create_access_token
from solarops.core.config import settings
from solarops.schemas.auth import Token, UserRegister
from solarops.schemas.user import UserRead

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/register", response_model=UserRead)
def register_user(user_in: UserRegister, db: Session = Depends(get_db)):
    """
    Register a new user account.

    New users get the USER role and no project assignment, so they can log in
    but open no module until an admin assigns one.

    Raises:
        HTTPException 400: If a user with this email already exists
    """
    user = db.exec(select(User).where(User.email == user_in.email)).first()
    if user:
        raise HTTPException(
            status_code=400,
            detail="User with this email already exists."
        )

    db_user = User(
        email=user_in.email,
        password=get_password_hash(user_in.password),
        full_name=user_in.full_name,
        roles=[UserRole.USER]
    )
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    logger.info("Registered user %s", db_user.email)
    return db_user


@router.post("/login", response_model=Token)
def login(response: Response, db: Session = Depends(get_db), form_data: OAuth2PasswordRequestForm = Depends()):
    """
    Authenticate a user and issue an access token.

    Note: OAuth2PasswordRequestForm uses the 'username' field; it carries the email.

    Raises:
        HTTPException 401: If credentials are invalid
    """
    user = db.exec(select(User).where(User.email == form_data.username)).first()

    if not user or not verify_password(form_data.password, user.password):
        logger.info("Failed login for %s", form_data.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    access_token_expires = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    access_token = create_access_token(
        subject=user.email, expires_delta=access_token_expires
    )

    response.set_cookie(
        key="access_token",
        value=f"Bearer {access_token}",
        httponly=True,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        samesite="lax"
    )

    return {"access_token": access_token, "token_type": "bearer"}


@router.post("/logout")
def logout(response: Response):
    """
    Clear the authentication cookie. API clients can simply discard their token.
    """
    response.delete_cookie("access_token")
    return {"status": "success", "detail": "Logged out"}
