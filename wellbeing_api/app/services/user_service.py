"""
Business logic for users.

``UserService`` registers tutors and students and checks credentials.
Passwords are stored as salted PBKDF2 hashes (see ``core.security``);
authentication succeeds only for the exact password given at
registration.
"""

import logging

from wellbeing_api.app.core.db import ConnectionPool
from wellbeing_api.app.core.exceptions import AuthError, ConflictError
from wellbeing_api.app.core.security import hash_password, verify_password
from wellbeing_api.app.schemas.user import UserCreate, UserRead

logger = logging.getLogger(__name__)

EMAIL_TAKEN = "Email already registered"


class UserService:
    """Service for registering and authenticating users."""

    @classmethod
    async def register(cls, pool: ConnectionPool, data: UserCreate) -> UserRead:
        """Create a new user.

        Raises ``ConflictError`` when the email is already present.  The
        pre-check gives the common case a clear message; the UNIQUE
        constraint on ``users.email`` covers concurrent registrations.
        """
        try:
            with pool.connection() as conn:
                exists = conn.execute(
                    "SELECT id FROM users WHERE email = ?", (data.email,)
                ).fetchone()
                if exists:
                    raise ConflictError(EMAIL_TAKEN)
                cursor = conn.execute(
                    "INSERT INTO users (role, name, email, password_hash) VALUES (?, ?, ?, ?)",
                    (data.role, data.name, data.email, hash_password(data.password)),
                )
                user_id = cursor.lastrowid
        except ConflictError:
            logger.warning("Registration rejected: %s is already registered", data.email)
            raise ConflictError(EMAIL_TAKEN) from None
        logger.info("Registered %s %s as user %s", data.role, data.email, user_id)
        return UserRead(id=user_id, role=data.role, name=data.name, email=data.email)

    @classmethod
    async def authenticate(cls, pool: ConnectionPool, email: str, password: str) -> UserRead:
        """Return the user whose email and password both match.

        Raises ``AuthError`` otherwise.
        """
        with pool.connection() as conn:
            row = conn.execute(
                "SELECT id, role, name, email, password_hash FROM users WHERE email = ?",
                (email,),
            ).fetchone()
        if not row or not verify_password(password, row["password_hash"]):
            logger.warning("Failed login for %s", email)
            raise AuthError("Invalid credentials")
        return UserRead(id=row["id"], role=row["role"], name=row["name"], email=row["email"])
