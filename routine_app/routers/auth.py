from fastapi import APIRouter, Depends, HTTPException
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from routine_app.database import get_db
from routine_app.models.user import User
from routine_app.schemas.user import UserOut, TokenOut
from routine_app.utils.auth import create_access_token, get_current_user
from routine_app.utils.hashing import hash_password, verify_password

import logging
logger = logging.getLogger("routine_app.auth")


router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/login", response_model=TokenOut)
def login(form_data: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)):
    user = db.query(User).filter(User.username == form_data.username).first()
    if not user or not verify_password(form_data.password, user.password_hash):
        logger.info("Failed login for %s", form_data.username)
        raise HTTPException(status_code=403, detail="Invalid credentials")

    token = create_access_token({"sub": user.username, "role": user.role})
    return TokenOut(access_token=token)


@router.get("/me", response_model=UserOut)
def get_me(current_user: User = Depends(get_current_user)):
    return current_user


def seed_admin(db: Session, username: str, password: str):
    """Create the first admin account if it does not exist yet."""
    if not username or not password:
        return None
    user = db.query(User).filter(User.username == username).first()
    if user:
        return user
    user = User(username=username, password_hash=hash_password(password), role="admin")
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Seeded admin account %s", username)
    return user
