import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from qualifications.core.security import read_access_token
from qualifications.db.session import get_db
from qualifications.models.user import User
from qualifications.services.grading import QualificationService

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    if credentials is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing authorization token")

    try:
        claims = read_access_token(credentials.credentials)
    except jwt.InvalidTokenError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token") from exc

    user = db.get(User, claims.sub)
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")
    # The owner id is trusted for scoping only while it still belongs to the same login.
    if user.login != claims.login:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token was issued to another login")
    return user


def get_qualification_service(db: Session = Depends(get_db)) -> QualificationService:
    return QualificationService(db)
