"""Dashboard schemas for admin and coach overviews."""

from pydantic import BaseModel


class DashboardStats(BaseModel):
    total_students: int
    total_coaches: int
    total_sessions: int
    total_branches: int


class CoachDashboardStats(BaseModel):
    coach_id: int
    assigned_sessions: int
    upcoming_sessions: int
    completed_sessions: int
    total_hours: float
