"""Self-service account registration for Courtside staff."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from backend.app.core.cache import invalidate
from backend.app.core.security import get_password_hash
from backend.app.db.session import get_db
from backend.app.models.coach import Coach
from backend.app.models.enums import UserRole
from backend.app.models.user import User
from backend.app.schemas.user import UserCreate, UserRead

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def _initial_role(db: Session) -> UserRole:
    # The first account bootstraps the organization and becomes its admin.
    return UserRole.admin if db.query(User.id).first() is None else UserRole.coach


@router.post("/register", response_model=UserRead)
def register_user(user_in: UserCreate, db: Session = Depends(get_db)):
    if db.query(User).filter(User.email == user_in.email).first():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already registered")

    role = _initial_role(db)
    user = User(
        email=user_in.email,
        full_name=user_in.full_name,
        hashed_password=get_password_hash(user_in.password),
        role=role.value,
    )
    db.add(user)

    # A coach profile the admin already created under this email gets this login.
    coach = db.query(Coach).filter(Coach.email == user_in.email, Coach.auth_id.is_(None)).first()
    if coach is not None:
        coach.user = user
    db.commit()
    db.refresh(user)
    if coach is not None:
        invalidate("coaches")
        logger.info("Linked new user %s to coach %s", user.id, coach.id)
    logger.info("Registered user %s with role %s", user.id, user.role)
    return user
