# utils.py
from passlib.context import CryptContext
import jwt
from datetime import datetime, timedelta, timezone
from typing import Optional

from config import settings

# Using pbkdf2_sha256 (pure python, no native build needed)
pwd = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    return pwd.verify(plain, hashed)


def create_jwt(user_id: int, role: str, expires_minutes: Optional[int] = None) -> str:
    minutes = settings.jwt_expire_minutes if expires_minutes is None else expires_minutes
    payload = {
        "sub": str(user_id),
        "role": role,
        "exp": datetime.now(timezone.utc) + timedelta(minutes=minutes),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_jwt(token: str) -> Optional[int]:
    """Return the user id carried by a valid token, None otherwise."""
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
        return int(payload["sub"])
    except (jwt.PyJWTError, KeyError, TypeError, ValueError):
        return None
