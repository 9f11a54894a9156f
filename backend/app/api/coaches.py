"""Coach endpoints."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session, selectinload

from backend.app.core.cache import invalidate
from backend.app.core.security import get_password_hash
from backend.app.db.session import get_db
from backend.app.dependencies.auth import get_current_admin, get_current_user
from backend.app.models.coach import Coach, CoachAvailability
from backend.app.models.enums import DayOfWeek
from backend.app.models.user import User
from backend.app.schemas.coach import CoachCreate, CoachRead, CoachUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/coaches", tags=["coaches"])


def _get_coach(db: Session, coach_id: int) -> Coach:
    coach = db.query(Coach).filter(Coach.id == coach_id).first()
    if not coach:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Coach not found")
    return coach


def _ensure_unique_email(db: Session, email: str, exclude_id: Optional[int] = None) -> None:
    query = db.query(Coach).filter(Coach.email == email)
    if exclude_id is not None:
        query = query.filter(Coach.id != exclude_id)
    if query.first():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Coach email already exists")


def _resolve_auth_user(db: Session, auth_id: int, coach_id: Optional[int] = None) -> User:
    user = db.get(User, auth_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    linked = db.query(Coach).filter(Coach.auth_id == auth_id).first()
    if linked is not None and linked.id != coach_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User is already linked to another coach")
    return user


def _set_availability(coach: Coach, days: list[DayOfWeek]) -> None:
    wanted = list(dict.fromkeys(days))
    for slot in list(coach.availability):
        if slot.day_of_week not in wanted:
            coach.availability.remove(slot)
    current = {slot.day_of_week for slot in coach.availability}
    for day in wanted:
        if day not in current:
            coach.availability.append(CoachAvailability(day_of_week=day))


@router.get("/", response_model=list[CoachRead])
async def list_coaches(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return db.query(Coach).options(selectinload(Coach.availability)).order_by(Coach.name.asc()).all()


@router.post("/", response_model=CoachRead, status_code=status.HTTP_201_CREATED)
async def create_coach(coach_in: CoachCreate, db: Session = Depends(get_db), current_admin: User = Depends(get_current_admin)):
    _ensure_unique_email(db, coach_in.email)
    if coach_in.auth_id is not None and coach_in.password:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Provide either auth_id or password, not both")

    coach = Coach(
        name=coach_in.name,
        email=coach_in.email,
        phone=coach_in.phone,
        role=coach_in.role.value,
        package_type=coach_in.package_type,
    )
    if coach_in.auth_id is not None:
        coach.auth_id = _resolve_auth_user(db, coach_in.auth_id).id
    elif coach_in.password:
        if db.query(User).filter(User.email == coach_in.email).first():
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already registered")
        coach.user = User(
            email=coach_in.email,
            full_name=coach_in.name,
            hashed_password=get_password_hash(coach_in.password),
            role=coach_in.role.value,
        )
    _set_availability(coach, coach_in.available_days)
    db.add(coach)
    db.commit()
    db.refresh(coach)
    invalidate("coaches")
    logger.info("Created coach %s (login linked: %s)", coach.id, coach.auth_id is not None)
    return coach


@router.get("/{coach_id}", response_model=CoachRead)
async def get_coach(coach_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return _get_coach(db, coach_id)


@router.put("/{coach_id}", response_model=CoachRead)
async def update_coach(
    coach_id: int,
    coach_in: CoachUpdate,
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_current_admin),
):
    coach = _get_coach(db, coach_id)
    if coach_in.email is not None:
        _ensure_unique_email(db, coach_in.email, exclude_id=coach.id)
    if coach_in.auth_id is not None:
        coach.auth_id = _resolve_auth_user(db, coach_in.auth_id, coach_id=coach.id).id
    update_fields = {
        "name": coach_in.name,
        "email": coach_in.email,
        "phone": coach_in.phone,
        "role": coach_in.role.value if coach_in.role is not None else None,
        "package_type": coach_in.package_type,
    }
    for field, value in update_fields.items():
        if value is not None:
            setattr(coach, field, value)
    if coach_in.available_days is not None:
        _set_availability(coach, coach_in.available_days)
    db.commit()
    db.refresh(coach)
    invalidate("coaches")
    return coach


@router.delete("/{coach_id}")
async def delete_coach(coach_id: int, db: Session = Depends(get_db), current_admin: User = Depends(get_current_admin)):
    coach = _get_coach(db, coach_id)
    db.delete(coach)
    db.commit()
    invalidate("coaches", "sessions")
    return {"status": "deleted", "id": coach_id}
