import logging
import os

from sqlalchemy.orm import Session

from backend.app.core.security import get_password_hash
from backend.app.models.enums import UserRole
from backend.app.models.user import User

logger = logging.getLogger(__name__)

DEFAULT_DEV_PASSWORD = "Secret123!"
DEFAULT_DEV_ADMIN = "admin@courtside.test"


def ensure_default_dev_admin(db: Session) -> None:
    """
    Create a default admin user for local development if it does not exist.
    Skips execution when running under pytest to avoid altering test expectations.
    """
    if os.getenv("PYTEST_CURRENT_TEST"):
        return

    if db.query(User).filter(User.email == DEFAULT_DEV_ADMIN).first():
        return

    db.add(
        User(
            email=DEFAULT_DEV_ADMIN,
            full_name="Courtside Admin",
            hashed_password=get_password_hash(DEFAULT_DEV_PASSWORD),
            role=UserRole.admin.value,
            is_active=True,
        )
    )
    db.commit()
    logger.info("Created default development admin %s", DEFAULT_DEV_ADMIN)
