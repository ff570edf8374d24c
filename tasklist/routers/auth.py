import logging
from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session
from tasklist import config
from tasklist.schemas.user import TokenOut, UserCreate, UserOut
from tasklist.services import users
from tasklist.utils.auth import hash_password, verify_password, create_token
from tasklist.database import get_db
from tasklist.dependencies import RequestContext, get_request_context

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

@router.post("/register", response_model=UserOut, status_code=201)
def register(user: UserCreate, db: Session = Depends(get_db)):
    if users.get_by_email(db, user.email):
        raise HTTPException(status_code=400, detail="Email already exists")

    try:
        hashed = hash_password(user.password)
    except ValueError as e:
        # map hashing/validation errors to a 400 so client gets a clear message
        raise HTTPException(status_code=400, detail=str(e))

    new_user = users.create_user(db, user.email, hashed)
    logger.info("registered user %s", new_user.id)
    return new_user

@router.post("/login", response_model=TokenOut)
def login(user: UserCreate, response: Response, db: Session = Depends(get_db)):
    db_user = users.get_by_email(db, user.email)
    if not db_user or not verify_password(user.password, db_user.password):
        raise HTTPException(status_code=401, detail="Invalid credentials")

    token = create_token({"sub": db_user.email})
    response.set_cookie(
        key=config.SESSION_COOKIE_NAME,
        value=token,
        max_age=int(config.ACCESS_TOKEN_EXPIRE_MINUTES * 60),
        httponly=True,
        samesite="lax",
        secure=config.SESSION_COOKIE_SECURE,
    )
    logger.info("user %s signed in", db_user.id)
    return {"token": token}

@router.post("/logout")
def logout(response: Response):
    response.delete_cookie(config.SESSION_COOKIE_NAME, httponly=True, samesite="lax", secure=config.SESSION_COOKIE_SECURE)
    return {"message": "Signed out"}

@router.get("/session", response_model=UserOut)
def session(ctx: RequestContext = Depends(get_request_context)):
    return ctx.user
