from sqlalchemy.orm import Session
from curacadet.db.models.user import User, ROLES
from curacadet.core.exceptions import ValidationError, ConflictError
from curacadet.core.security import get_password_hash


def get_user_by_username(db: Session, username: str):
    return db.query(User).filter(User.username == username).first()


def create_user(db: Session, user_data):
    if not user_data.username or not user_data.password:
        raise ValidationError("Username and password are required")

    # Open registration may pick any role, super_admin included; the SQL console
    # trusts whoever holds it
    role = user_data.role or "user"
    if role not in ROLES:
        raise ValidationError(f"Role must be one of: {', '.join(ROLES)}")

    if get_user_by_username(db, user_data.username):
        raise ConflictError("Username already exists")

    db_user = User(
        username=user_data.username,
        hashed_password=get_password_hash(user_data.password),
        email=user_data.email,
        role=role,
    )
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user
