"""
Admin password hashing with bcrypt.
"""

import bcrypt

# bcrypt only looks at the first 72 bytes
_BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    return bcrypt.hashpw(_encode(password), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return bcrypt.checkpw(_encode(plain_password), hashed_password.encode("utf-8"))
    except ValueError:
        # Stored hash is not a bcrypt hash
        return False


def validate_password(password: str, min_length: int = 8) -> str | None:
    """Return an error message when the password is too weak, else None."""
    if len(password) < min_length:
        return f"A senha deve ter pelo menos {min_length} caracteres"
    if password.strip() != password:
        return "A senha não pode começar ou terminar com espaços"
    return None
