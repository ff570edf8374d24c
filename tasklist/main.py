import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from tasklist import config
from tasklist.database import Base, engine
from tasklist.errors import AppError
from tasklist.logging_setup import setup_logging
from tasklist.middleware import LoginRedirectMiddleware
from tasklist.models.task import Task  # noqa: F401
from tasklist.models.user import User  # noqa: F401
from tasklist.routers import auth, pages, tasks

setup_logging(config.LOG_LEVEL)
logger = logging.getLogger(__name__)

Base.metadata.create_all(bind=engine)

app = FastAPI(title="Tasklist")

app.add_middleware(LoginRedirectMiddleware)

# API routers
app.include_router(auth.router)
app.include_router(tasks.router)
app.include_router(pages.router)


@app.get("/health", tags=["health"])
def health():
	return {"status": "ok"}


def _validation_message(exc: RequestValidationError) -> str:
	for err in exc.errors():
		loc = err.get("loc") or ()
		ctx = err.get("ctx") or {}
		if "error" in ctx:
			# message raised by one of our field validators
			return str(ctx["error"])
		if err.get("type") == "value_error" and len(loc) > 1:
			return err.get("msg", "Invalid request body")
	return "Invalid request body"


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
	return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
	return JSONResponse(status_code=400, content={"error": _validation_message(exc)})


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
	return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=getattr(exc, "headers", None))


# Generic error handler to return JSON errors for unexpected exceptions
@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
	logger.exception("unhandled error on %s %s", request.method, request.url.path)
	return JSONResponse(status_code=500, content={"error": "Internal server error"})
