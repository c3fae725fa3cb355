# routers/auth.py
import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from core.errors import AuthorizationFailure, DuplicateFailure
from db import get_db
from deps import get_current_user
from models import User
from schemas import AuthData, LoginIn, ProfileUpdate, RegisterIn, UserOut
from utils import create_jwt, hash_password, verify_password

logger = logging.getLogger(__name__)

router = APIRouter()


def _auth_data(user: User) -> dict:
    data = UserOut.model_validate(user).model_dump()
    return AuthData(**data, token=create_jwt(user.id, user.role)).model_dump()


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(payload: RegisterIn, db: Session = Depends(get_db)):
    email = payload.email.lower()
    # check exists
    existing = db.query(User).filter(User.email == email).first()
    if existing:
        raise DuplicateFailure("User already exists")
    user = User(
        name=payload.name,
        email=email,
        password=hash_password(payload.password),
        college=payload.college,
        year=payload.year,
        phone=payload.phone,
        role=payload.role,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("User %s registered", user.id)
    return {"success": True, "message": "User registered successfully", "data": _auth_data(user)}


@router.post("/login")
def login(payload: LoginIn, db: Session = Depends(get_db)):
    user = db.query(User).filter(User.email == payload.email.lower()).first()
    if not user or not verify_password(payload.password, user.password):
        raise AuthorizationFailure("Invalid credentials")
    return {"success": True, "message": "Login successful", "data": _auth_data(user)}


@router.get("/me")
def get_me(user: User = Depends(get_current_user)):
    return {"success": True, "data": UserOut.model_validate(user).model_dump()}


@router.put("/me")
def update_profile(payload: ProfileUpdate, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    for key, value in payload.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(user, key, value)
    db.commit()
    db.refresh(user)
    return {
        "success": True,
        "message": "Profile updated successfully",
        "data": UserOut.model_validate(user).model_dump(),
    }
