# deps.py
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from core.access import Actor
from db import get_db
from models import User
from utils import decode_jwt

bearer = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
    db: Session = Depends(get_db),
) -> User:
    if credentials is None:
        raise _unauthorized("Not authorized, no token")
    user_id = decode_jwt(credentials.credentials)
    if user_id is None:
        raise _unauthorized("Not authorized, token failed")
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise _unauthorized("Not authorized, user not found")
    return user


def get_current_actor(user: User = Depends(get_current_user)) -> Actor:
    # role comes from the database so promotions apply to existing tokens
    return Actor(id=user.id, role=user.role)
