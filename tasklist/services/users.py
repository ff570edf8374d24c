"""User directory: maps an authenticated email to its ``users`` row."""

from typing import Optional
from sqlalchemy.orm import Session
from tasklist.models.task import Task  # noqa: F401  (registers the relationship target)
from tasklist.models.user import User


def get_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email).first()


def create_user(db: Session, email: str, hashed_password: str) -> User:
    user = User(email=email, password=hashed_password)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user
