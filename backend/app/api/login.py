"""Login and current-account endpoints for Courtside staff."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from backend.app.core.security import create_access_token, verify_password
from backend.app.core.time import utc_now
from backend.app.db.session import get_db
from backend.app.dependencies.auth import get_current_user
from backend.app.models.enums import UserRole
from backend.app.models.user import User
from backend.app.schemas.user import LoginRequest, Token, UserRead

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

INVALID_CREDENTIALS = "Invalid credentials"


@router.post("/login", response_model=Token)
def login(credentials: LoginRequest, db: Session = Depends(get_db)):
    user = db.query(User).filter(User.email == credentials.email).first()
    if user is None or not user.hashed_password or not verify_password(credentials.password, user.hashed_password):
        logger.warning("Failed login for %s", credentials.email)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_CREDENTIALS)
    if not user.is_active:
        logger.warning("Login refused for inactive user %s", user.id)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User is inactive")

    user.last_login = utc_now()
    db.commit()
    role = UserRole(user.role)
    return Token(access_token=create_access_token(user_id=user.id, role=role.value), role=role)


@router.get("/me", response_model=UserRead)
def read_me(current_user: User = Depends(get_current_user)):
    return current_user
