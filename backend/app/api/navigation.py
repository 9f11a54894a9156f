"""Navigation shell endpoints: menu, sidebar state and route gating."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from backend.app.db.session import get_db
from backend.app.dependencies.auth import get_current_user
from backend.app.models.user import User
from backend.app.schemas.navigation import NavigationRead, SidebarUpdate
from backend.app.services.navigation import build_navigation, can_access, find_route, normalize_path
from backend.app.services.preferences import get_or_create_preferences

router = APIRouter(prefix="/navigation", tags=["navigation"])


@router.get("/", response_model=NavigationRead)
async def get_navigation(
    path: Optional[str] = "/", db: Session = Depends(get_db), current_user: User = Depends(get_current_user)
):
    prefs = get_or_create_preferences(db, current_user)
    return build_navigation(current_user.role, path, sidebar_open=prefs.sidebar_open)


@router.put("/sidebar", response_model=NavigationRead)
async def set_sidebar(
    update: SidebarUpdate,
    path: Optional[str] = "/",
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    prefs = get_or_create_preferences(db, current_user)
    prefs.sidebar_open = update.sidebar_open
    db.commit()
    db.refresh(prefs)
    return build_navigation(current_user.role, path, sidebar_open=prefs.sidebar_open)


@router.get("/access")
async def check_access(path: str, current_user: User = Depends(get_current_user)):
    if find_route(path) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Page not found")
    if not can_access(current_user.role, path):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not allowed to view this page")
    return {"path": normalize_path(path), "allowed": True}
