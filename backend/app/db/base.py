from backend.app.db.base_class import Base

# Import models to register metadata for Base.metadata.create_all in tests
from backend.app.models.user import User  # noqa: F401
from backend.app.models.user_preferences import UserPreferences  # noqa: F401
from backend.app.models.branch import Branch  # noqa: F401
from backend.app.models.package import Package  # noqa: F401
from backend.app.models.student import Student  # noqa: F401
from backend.app.models.coach import Coach, CoachAvailability  # noqa: F401
from backend.app.models.session import SessionCoach, SessionParticipant, TrainingSession  # noqa: F401
from backend.app.models.attendance import AttendanceRecord  # noqa: F401
from backend.app.models.coach_session_time import CoachSessionTime  # noqa: F401
from backend.app.models.activity_log import ActivityLog  # noqa: F401
