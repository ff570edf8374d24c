from fastapi import Request
from fastapi.responses import RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware
from tasklist import config
from tasklist.utils.auth import extract_token, is_authenticated

LOGIN_PATH = "/login"

# API and tooling paths answer for themselves (401 JSON, docs); only pages redirect
_UNGUARDED_PREFIXES = ("/api", "/auth", "/health", "/docs", "/redoc", "/openapi.json")


def _is_page(path: str) -> bool:
    return not any(path == p or path.startswith(p + "/") for p in _UNGUARDED_PREFIXES)


class LoginRedirectMiddleware(BaseHTTPMiddleware):
    """
    Route-level access control for pages.

    Unauthenticated requests to any page except the login page go to the login
    page; signed-in users asking for the login page go to the app root. Only the
    token is checked here, the user row is resolved by the API.
    """

    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        if not _is_page(path):
            return await call_next(request)

        token = extract_token(request.headers.get("authorization"), request.cookies.get(config.SESSION_COOKIE_NAME))
        signed_in = is_authenticated(token)

        if not signed_in and path != LOGIN_PATH:
            return RedirectResponse(url=LOGIN_PATH, status_code=307)
        if signed_in and path == LOGIN_PATH:
            return RedirectResponse(url="/", status_code=307)
        return await call_next(request)
