from dataclasses import dataclass
from typing import Optional
from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session
from tasklist import config
from tasklist.database import get_db
from tasklist.errors import Unauthorized
from tasklist.models.user import User
from tasklist.services import users
from tasklist.utils.auth import Principal, decode_session_token, extract_token


@dataclass(frozen=True)
class RequestContext:
    """Per-request identity handed to every task handler."""

    principal: Principal
    user: User

    @property
    def user_id(self) -> int:
        return self.user.id


def get_principal(request: Request, authorization: Optional[str] = Header(None)) -> Principal:
    cookie_token = request.cookies.get(config.SESSION_COOKIE_NAME)
    return decode_session_token(extract_token(authorization, cookie_token))


def get_request_context(principal: Principal = Depends(get_principal), db: Session = Depends(get_db)) -> RequestContext:
    """Resolve the principal to its user row; a session without a user is not a session."""
    user = users.get_by_email(db, principal.email)
    if user is None:
        raise Unauthorized()
    return RequestContext(principal=principal, user=user)
