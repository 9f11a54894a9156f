"""Session-credit package endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from backend.app.db.session import get_db
from backend.app.dependencies.auth import get_current_admin, get_current_user
from backend.app.models.package import Package
from backend.app.models.user import User
from backend.app.schemas.package import PackageCreate, PackageRead, PackageUpdate

router = APIRouter(prefix="/packages", tags=["packages"])


def _get_package(db: Session, package_id: int) -> Package:
    package = db.query(Package).filter(Package.id == package_id).first()
    if not package:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Package not found")
    return package


def _ensure_unique_name(db: Session, name: str, exclude_id: int | None = None) -> None:
    query = db.query(Package).filter(Package.name == name)
    if exclude_id is not None:
        query = query.filter(Package.id != exclude_id)
    if query.first():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Package name already exists")


@router.get("/", response_model=list[PackageRead])
async def list_packages(
    active_only: bool = False, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)
):
    query = db.query(Package)
    if active_only:
        query = query.filter(Package.is_active.is_(True))
    return query.order_by(Package.name.asc()).all()


@router.post("/", response_model=PackageRead, status_code=status.HTTP_201_CREATED)
async def create_package(package_in: PackageCreate, db: Session = Depends(get_db), current_admin: User = Depends(get_current_admin)):
    _ensure_unique_name(db, package_in.name)
    package = Package(**package_in.model_dump())
    db.add(package)
    db.commit()
    db.refresh(package)
    return package


@router.put("/{package_id}", response_model=PackageRead)
async def update_package(
    package_id: int,
    package_in: PackageUpdate,
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_current_admin),
):
    package = _get_package(db, package_id)
    updates = package_in.model_dump(exclude_unset=True)
    if updates.get("name"):
        _ensure_unique_name(db, updates["name"], exclude_id=package.id)
    for field, value in updates.items():
        if value is not None:
            setattr(package, field, value)
    db.commit()
    db.refresh(package)
    return package


@router.delete("/{package_id}")
async def delete_package(package_id: int, db: Session = Depends(get_db), current_admin: User = Depends(get_current_admin)):
    package = _get_package(db, package_id)
    db.delete(package)
    db.commit()
    return {"status": "deleted", "id": package_id}
