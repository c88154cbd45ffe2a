"""
Password hashing for stored users.

Credentials arrive through HTTP Basic (see shopkeep.dependencies) and are
checked against the bcrypt hash kept on the User row.
"""

import asyncio
import logging

import bcrypt

from shopkeep.core.config import get_settings

logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: Plain text password

    Returns:
        Hashed password string
    """
    salt = bcrypt.gensalt(rounds=get_settings().PASSWORD_HASH_ROUNDS)
    hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
    return hashed.decode("utf-8")


def verify_password(password: str, hashed_password: str) -> bool:
    """Check a plain text password against its stored hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError as e:
        # Malformed hash in the database
        logger.error(f"Password verification failed: {e}")
        return False


async def hash_password_async(password: str) -> str:
    """Run hash_password in a worker thread, off the event loop."""
    return await asyncio.to_thread(hash_password, password)


async def verify_password_async(password: str, hashed_password: str) -> bool:
    return await asyncio.to_thread(verify_password, password, hashed_password)
