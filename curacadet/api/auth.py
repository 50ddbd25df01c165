from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from curacadet.api.deps import get_db, get_current_user
from curacadet.core.exceptions import AuthError, ValidationError
from curacadet.core.security import verify_password, create_access_token
from curacadet.crud import user as crud_user
from curacadet.schemas.user import UserCreate, UserLogin, UserOut, Token

router = APIRouter()


@router.post("/register", status_code=201)
def register(user_in: UserCreate, db: Session = Depends(get_db)):
    user = crud_user.create_user(db, user_in)
    return {
        "message": "User created successfully",
        "user": UserOut.model_validate(user),
    }


@router.post("/login", response_model=Token)
def login(form: UserLogin, db: Session = Depends(get_db)):
    if not form.username or not form.password:
        raise ValidationError("Username and password are required")

    user = crud_user.get_user_by_username(db, form.username)
    if not user or not verify_password(form.password, user.hashed_password):
        raise AuthError("Invalid credentials")

    access_token = create_access_token(
        data={"sub": user.username, "user_id": user.id, "role": user.role}
    )
    return {"access_token": access_token, "token_type": "bearer", "user": user}


@router.get("/me", response_model=UserOut)
def read_me(current_user=Depends(get_current_user)):
    return current_user
