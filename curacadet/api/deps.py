# curacadet/api/deps.py
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.orm import Session

from curacadet.core.exceptions import AuthError, PermissionDeniedError
from curacadet.core.security import decode_access_token
from curacadet.crud import user as crud_user
from curacadet.db.models.user import User
from curacadet.db.session import SessionLocal

bearer_scheme = HTTPBearer(auto_error=False)

# Role sets used by the routers
CLINICAL_ROLES = ("admin", "user")
ADMIN_ROLES = ("admin",)
SUPER_ADMIN_ROLES = ("super_admin",)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    if credentials is None or not credentials.credentials:
        raise AuthError("Authentication required")

    try:
        payload = decode_access_token(credentials.credentials)
    except JWTError:
        raise AuthError("Invalid or expired token")

    username = payload.get("sub")
    user = crud_user.get_user_by_username(db, username) if username else None
    if not user:
        raise AuthError("Invalid or expired token")
    return user


def require_roles(*roles: str):
    """Dependency that lets the request through only for the given roles."""

    def checker(current_user: User = Depends(get_current_user)) -> User:
        if roles and current_user.role not in roles:
            raise PermissionDeniedError("Insufficient permissions")
        return current_user

    return checker
