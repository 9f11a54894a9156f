"""Dashboard aggregates for admins and coaches."""

from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from backend.app.core.cache import query_cache
from backend.app.core.time import hours_between
from backend.app.models.branch import Branch
from backend.app.models.coach import Coach
from backend.app.models.coach_session_time import CoachSessionTime
from backend.app.models.enums import SessionStatus
from backend.app.models.session import SessionCoach, TrainingSession
from backend.app.models.student import Student
from backend.app.schemas.dashboard import CoachDashboardStats, DashboardStats


def get_dashboard_stats(db: Session) -> DashboardStats:
    def load() -> DashboardStats:
        return DashboardStats(
            total_students=db.query(Student).count(),
            total_coaches=db.query(Coach).count(),
            total_sessions=db.query(TrainingSession).count(),
            total_branches=db.query(Branch).count(),
        )

    return query_cache.get_or_load("dashboard", {"view": "admin"}, load)


def get_coach_dashboard_stats(db: Session, coach: Coach, today: Optional[date] = None) -> CoachDashboardStats:
    today = today or date.today()

    def load() -> CoachDashboardStats:
        assigned = (
            db.query(TrainingSession)
            .join(SessionCoach, SessionCoach.session_id == TrainingSession.id)
            .filter(SessionCoach.coach_id == coach.id)
            .all()
        )
        upcoming = [
            s for s in assigned if s.status == SessionStatus.scheduled and s.date >= today
        ]
        completed = [s for s in assigned if s.status == SessionStatus.completed]

        records = db.query(CoachSessionTime).filter(CoachSessionTime.coach_id == coach.id).all()
        total_hours = round(sum(hours_between(r.time_in, r.time_out) for r in records), 2)

        return CoachDashboardStats(
            coach_id=coach.id,
            assigned_sessions=len(assigned),
            upcoming_sessions=len(upcoming),
            completed_sessions=len(completed),
            total_hours=total_hours,
        )

    return query_cache.get_or_load("dashboard", {"view": "coach", "coach_id": coach.id, "today": today}, load)
