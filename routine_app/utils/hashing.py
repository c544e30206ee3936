"""
Password hashing for the admin/staff accounts that edit routines.

Only the seeded admin is hashed at runtime (SEED_ADMIN_PASSWORD at startup),
so an over-long password is a configuration error, not a request error.
"""
from passlib.context import CryptContext

BCRYPT_MAX_BYTES = 72

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    if len(password.encode("utf-8")) > BCRYPT_MAX_BYTES:
        raise ValueError(f"Password too long (bcrypt max {BCRYPT_MAX_BYTES} bytes)")
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    # bcrypt would silently truncate; a longer login attempt can never match
    if len(plain_password.encode("utf-8")) > BCRYPT_MAX_BYTES:
        return False
    return pwd_context.verify(plain_password, hashed_password)
