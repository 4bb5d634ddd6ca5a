# core/security.py
"""
Password hashing for the seeded login accounts.
"""
import bcrypt


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return bcrypt.checkpw(
        plain_password.encode('utf-8'),
        hashed_password.encode('utf-8')
    )


def get_password_hash(password: str) -> str:
    """Hash a password for storage."""
    salt = bcrypt.gensalt()
    return bcrypt.hashpw(password.encode('utf-8'), salt).decode('utf-8')


def hash_credentials(credentials: dict[str, str]) -> dict[str, str]:
    """
    Hash a mapping of email -> plain password.

    Emails are lower-cased so lookups can be case-insensitive while the
    password comparison stays exact.
    """
    return {
        email.lower(): get_password_hash(password)
        for email, password in credentials.items()
    }
