"""Password hashing with bcrypt."""

import bcrypt

from smartsupply.config import get_logger, get_settings

logger = get_logger(__name__)


def hash_password(password: str, rounds: int | None = None) -> str:
    """Hash a password using bcrypt with the configured work factor."""
    rounds = rounds or get_settings().auth.bcrypt_rounds
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plain password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError as e:
        # Malformed hash or over-long password
        logger.warning("password_verification_failed", error=str(e))
        return False
