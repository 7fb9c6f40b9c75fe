"""Authentication business logic.

Registration, credential checks and the default admin account.
Failures raise ValueError with a message meant for the user.
"""

import logging
import re

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from handytrack.models.user import User
from handytrack.utils.security import hash_password, verify_password

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LENGTH = 6

ADMIN_ID = "default-admin-user"
ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "admin123"


def get_user_by_username(username: str, session: Session) -> User | None:
    return session.exec(select(User).where(User.username == username)).first()


def register_user(
    username: str,
    email: str,
    name: str,
    password: str,
    confirm_password: str,
    session: Session,
) -> User:
    """Validate the registration form and create the user.

    Raises ValueError with the first failed check.
    """
    if not (username and email and name and password and confirm_password):
        raise ValueError("Please fill in all fields")

    if password != confirm_password:
        raise ValueError("Passwords do not match")

    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")

    if not EMAIL_RE.match(email):
        raise ValueError("Invalid email address")

    if get_user_by_username(username, session):
        raise ValueError("Username already exists")

    user = User(
        username=username,
        email=email,
        name=name,
        password_hash=hash_password(password),
    )
    session.add(user)
    try:
        session.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration of the same username
        session.rollback()
        raise ValueError("Username already exists")
    session.refresh(user)

    logger.info("Registered user %s (%s)", user.username, user.id)
    return user


def authenticate(username: str, password: str, session: Session) -> User:
    """Check credentials and return the user."""
    if not username or not password:
        raise ValueError("Username and password are required")

    user = get_user_by_username(username, session)
    if not user or not verify_password(password, user.password_hash):
        logger.warning("Failed login for %s", username)
        raise ValueError("Invalid username or password")

    return user


def seed_admin(session: Session) -> bool:
    """Create the default admin account unless it exists.

    Returns True if the account was created.
    """
    if get_user_by_username(ADMIN_USERNAME, session):
        logger.info("Admin user already exists, skipping creation")
        return False

    session.add(User(
        id=ADMIN_ID,
        username=ADMIN_USERNAME,
        password_hash=hash_password(ADMIN_PASSWORD),
        name="Administrator",
        email=None,
    ))
    session.commit()

    logger.warning("Admin user created (username=%s). Change the password after first login!", ADMIN_USERNAME)
    return True
