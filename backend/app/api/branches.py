"""Branch endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from backend.app.core.cache import invalidate
from backend.app.db.session import get_db
from backend.app.dependencies.auth import get_current_admin, get_current_user
from backend.app.models.branch import Branch
from backend.app.models.session import TrainingSession
from backend.app.models.student import Student
from backend.app.models.user import User
from backend.app.schemas.branch import BranchCreate, BranchRead, BranchUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/branches", tags=["branches"])


def _get_branch(db: Session, branch_id: int) -> Branch:
    branch = db.query(Branch).filter(Branch.id == branch_id).first()
    if not branch:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Branch not found")
    return branch


@router.get("/", response_model=list[BranchRead])
async def list_branches(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return db.query(Branch).order_by(Branch.name.asc()).all()


@router.post("/", response_model=BranchRead, status_code=status.HTTP_201_CREATED)
async def create_branch(branch_in: BranchCreate, db: Session = Depends(get_db), current_admin: User = Depends(get_current_admin)):
    branch = Branch(**branch_in.model_dump())
    db.add(branch)
    db.commit()
    db.refresh(branch)
    invalidate("branches")
    return branch


@router.get("/{branch_id}", response_model=BranchRead)
async def get_branch(branch_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return _get_branch(db, branch_id)


@router.put("/{branch_id}", response_model=BranchRead)
async def update_branch(
    branch_id: int,
    branch_in: BranchUpdate,
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_current_admin),
):
    branch = _get_branch(db, branch_id)
    for field, value in branch_in.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(branch, field, value)
    db.commit()
    db.refresh(branch)
    invalidate("branches")
    return branch


@router.delete("/{branch_id}")
async def delete_branch(branch_id: int, db: Session = Depends(get_db), current_admin: User = Depends(get_current_admin)):
    branch = _get_branch(db, branch_id)
    student_count = db.query(Student).filter(Student.branch_id == branch.id).count()
    session_count = db.query(TrainingSession).filter(TrainingSession.branch_id == branch.id).count()
    if student_count or session_count:
        logger.info(
            "Refusing to delete branch %s: %d student(s), %d session(s) still assigned",
            branch.id,
            student_count,
            session_count,
        )
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Branch still has students or sessions assigned; reassign them before deleting",
        )
    db.delete(branch)
    db.commit()
    invalidate("branches")
    return {"status": "deleted", "id": branch_id}
