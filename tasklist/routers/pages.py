from fastapi import APIRouter
from fastapi.responses import HTMLResponse

# Placeholder shells; the real UI is a separate client of /api/tasks.
router = APIRouter(include_in_schema=False)

_INDEX = """<!doctype html>
<html><head><title>Tasks</title></head>
<body><main id="app" data-api="/api/tasks"></main></body></html>
"""

_LOGIN = """<!doctype html>
<html><head><title>Sign in</title></head>
<body><main id="login" data-login="/auth/login"></main></body></html>
"""


@router.get("/", response_class=HTMLResponse)
def index():
    return _INDEX


@router.get("/login", response_class=HTMLResponse)
def login_page():
    return _LOGIN
