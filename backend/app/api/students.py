"""Student endpoints for Courtside Admin."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload

from backend.app.core.cache import invalidate
from backend.app.db.session import get_db
from backend.app.dependencies.auth import get_current_admin, get_current_user
from backend.app.models.attendance import AttendanceRecord
from backend.app.models.branch import Branch
from backend.app.models.session import TrainingSession
from backend.app.models.student import Student
from backend.app.models.user import User
from backend.app.schemas.attendance import AttendanceRead
from backend.app.schemas.student import StudentCreate, StudentRead, StudentUpdate
from backend.app.services.attendance import serialize_attendance

router = APIRouter(prefix="/students", tags=["students"])


def _get_student(db: Session, student_id: int) -> Student:
    student = db.query(Student).filter(Student.id == student_id).first()
    if not student:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Student not found")
    return student


def _ensure_branch(db: Session, branch_id: Optional[int]) -> None:
    if branch_id is not None and db.get(Branch, branch_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Branch not found")


@router.post("/", response_model=StudentRead, status_code=status.HTTP_201_CREATED)
async def create_student(student_in: StudentCreate, db: Session = Depends(get_db), current_admin: User = Depends(get_current_admin)):
    _ensure_branch(db, student_in.branch_id)
    student = Student(**student_in.model_dump())
    if student.total_sessions is None:
        student.total_sessions = student.remaining_sessions
    db.add(student)
    db.commit()
    db.refresh(student)
    invalidate("students")
    return student


@router.get("/", response_model=list[StudentRead])
async def list_students(
    branch_id: Optional[int] = None,
    search: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    query = db.query(Student)
    if branch_id is not None:
        query = query.filter(Student.branch_id == branch_id)
    if search:
        pattern = f"%{search.strip()}%"
        query = query.filter(or_(Student.name.ilike(pattern), Student.email.ilike(pattern)))
    return query.order_by(Student.name.asc()).all()


@router.get("/{student_id}", response_model=StudentRead)
async def get_student(student_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return _get_student(db, student_id)


@router.get("/{student_id}/attendance", response_model=list[AttendanceRead])
async def list_student_attendance(student_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    student = _get_student(db, student_id)
    records = (
        db.query(AttendanceRecord)
        .options(joinedload(AttendanceRecord.student))
        .join(TrainingSession, TrainingSession.id == AttendanceRecord.session_id)
        .filter(AttendanceRecord.student_id == student.id)
        .order_by(TrainingSession.date.desc(), TrainingSession.start_time.desc())
        .all()
    )
    return [serialize_attendance(record) for record in records]


@router.put("/{student_id}", response_model=StudentRead)
async def update_student(
    student_id: int,
    student_in: StudentUpdate,
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_current_admin),
):
    student = _get_student(db, student_id)
    updates = student_in.model_dump(exclude_unset=True)
    _ensure_branch(db, updates.get("branch_id"))
    for field, value in updates.items():
        if value is not None:
            setattr(student, field, value)
    db.commit()
    db.refresh(student)
    invalidate("students")
    return student


@router.delete("/{student_id}")
async def delete_student(student_id: int, db: Session = Depends(get_db), current_admin: User = Depends(get_current_admin)):
    student = _get_student(db, student_id)
    db.delete(student)
    db.commit()
    invalidate("students", "attendance")
    return {"status": "deleted", "id": student_id}
