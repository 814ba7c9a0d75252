"""Password hashing with bcrypt."""

import bcrypt

DEFAULT_ROUNDS = 10

# bcrypt only uses the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:MAX_PASSWORD_BYTES]


def hash_password(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """Hash a password with a fresh salt.

    Passwords longer than 72 bytes are truncated, so they hash the same
    as their first 72 bytes.

    Args:
        password: Plain text password.
        rounds: bcrypt work factor (log2 of iterations).

    Returns:
        The bcrypt hash as a string.
    """
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(_encode(password), salt).decode("utf-8")


def verify_password(password: str, hashed_password: str) -> bool:
    """Check a password against a bcrypt hash in constant time.

    Args:
        password: Plain text password.
        hashed_password: Stored bcrypt hash.

    Returns:
        True if the password matches.

    Raises:
        ValueError: If the stored hash is not a valid bcrypt hash.
    """
    return bcrypt.checkpw(_encode(password), hashed_password.encode("utf-8"))
