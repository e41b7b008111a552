from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from qualifications.api.deps import get_current_user
from qualifications.core.exceptions import ConflictError
from qualifications.core.security import hash_password, issue_access_token, verify_password
from qualifications.db.session import get_db, unit_of_work
from qualifications.models.user import User
from qualifications.schemas.auth import LoginRequest, RegisterRequest, TokenResponse, UserOut

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    with unit_of_work(db):
        existing = db.scalar(select(User).where(User.login == payload.login))
        if existing:
            raise ConflictError(f"Login {payload.login} is already taken")
        user = User(login=payload.login, password_hash=hash_password(payload.password))
        db.add(user)
    return user


@router.post("/login", response_model=TokenResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    user = db.scalar(select(User).where(User.login == payload.login))
    if not user or not verify_password(payload.password, user.password_hash):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid login or password")

    token, expires_at = issue_access_token(user.id, user.login)
    return TokenResponse(access_token=token, user_id=user.id, login=user.login, expires_at=expires_at)


@router.get("/me", response_model=UserOut)
def me(user: User = Depends(get_current_user)):
    return user
