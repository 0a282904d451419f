from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from jose import jwt, JWTError
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from whitespace_crm.core.config import settings
from whitespace_crm.core.exceptions import UnauthenticatedError
from whitespace_crm.db.session import get_db
from whitespace_crm.repositories.user_repository import UserRepository

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Caller:
    """The authenticated identity passed into every service call."""
    user_id: int
    email: str


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire})
    if "sub" in to_encode:
        to_encode["sub"] = str(to_encode["sub"])
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def verify_token(token: str, db: Session) -> Caller:
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        raise UnauthenticatedError("Invalid credentials")

    user_id = payload.get("sub")
    if user_id is None:
        raise UnauthenticatedError("Invalid token")

    try:
        user = UserRepository(db).get_by_id(int(user_id))
    except ValueError:
        raise UnauthenticatedError("Invalid token")
    if not user:
        raise UnauthenticatedError("User not found")
    return Caller(user_id=user.id, email=user.email)


def get_current_caller(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> Caller:
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise UnauthenticatedError()
    return verify_token(credentials.credentials, db)
