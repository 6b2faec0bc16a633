"""Account registration, login and password reset.

Passwords and security answers are only ever stored as salted bcrypt
hashes. Answers are normalised (trimmed, case-folded) before hashing so a
reset does not fail on "Paris " vs "paris".
"""

import logging
import os

import aiosqlite
from passlib.context import CryptContext

from babydaily.models.user import SecurityAnswers, UserSession

logger = logging.getLogger(__name__)

BCRYPT_ROUNDS = int(os.getenv("BABYDAILY_BCRYPT_ROUNDS", "12"))

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=BCRYPT_ROUNDS)


class AuthError(Exception):
    """Base class for authentication failures."""


class UsernameTaken(AuthError):
    pass


class InvalidCredentials(AuthError):
    pass


class SecurityAnswersMismatch(AuthError):
    pass


def _hash_answers(answers: SecurityAnswers) -> tuple[str, str, str]:
    return tuple(pwd_context.hash(a) for a in answers.normalized())


async def _get_user_row(db: aiosqlite.Connection, username: str) -> aiosqlite.Row | None:
    async with db.execute("SELECT * FROM users WHERE username = ?", (username,)) as cur:
        return await cur.fetchone()


async def register(
    db: aiosqlite.Connection, username: str, password: str, answers: SecurityAnswers
) -> UserSession:
    """Create an account. Raises UsernameTaken if the name is in use."""
    if await _get_user_row(db, username):
        raise UsernameTaken(f"Username {username!r} already exists")

    q1, q2, q3 = _hash_answers(answers)
    cursor = await db.execute(
        """INSERT INTO users (username, password_hash, security_q1_hash, security_q2_hash, security_q3_hash)
           VALUES (?, ?, ?, ?, ?)""",
        (username, pwd_context.hash(password), q1, q2, q3),
    )
    await db.commit()
    logger.info("Registered user %d", cursor.lastrowid)
    return UserSession(user_id=cursor.lastrowid, username=username)


async def login(db: aiosqlite.Connection, username: str, password: str) -> UserSession:
    """Check credentials. The same error covers unknown user and wrong password."""
    row = await _get_user_row(db, username)
    if not row or not pwd_context.verify(password, row["password_hash"]):
        raise InvalidCredentials("Invalid credentials")
    return UserSession(user_id=row["id"], username=row["username"])


async def reset_password(
    db: aiosqlite.Connection, username: str, answers: SecurityAnswers, new_password: str
) -> None:
    """Set a new password once all three security answers match."""
    row = await _get_user_row(db, username)
    if not row:
        raise InvalidCredentials("Invalid credentials")

    stored = (row["security_q1_hash"], row["security_q2_hash"], row["security_q3_hash"])
    # All three are verified, even after a miss.
    matches = [pwd_context.verify(a, h) for a, h in zip(answers.normalized(), stored)]
    if not all(matches):
        raise SecurityAnswersMismatch("Security answers do not match")

    await db.execute(
        "UPDATE users SET password_hash = ? WHERE id = ?",
        (pwd_context.hash(new_password), row["id"]),
    )
    await db.commit()
    logger.info("Password reset for user %d", row["id"])


async def get_user(db: aiosqlite.Connection, user_id: int) -> UserSession | None:
    """Public profile of a user, or None. Hashes never leave this module."""
    async with db.execute("SELECT id, username FROM users WHERE id = ?", (user_id,)) as cur:
        row = await cur.fetchone()
    return UserSession(user_id=row["id"], username=row["username"]) if row else None
