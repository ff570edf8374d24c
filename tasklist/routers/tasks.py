import logging
from contextlib import contextmanager
from typing import Optional
from fastapi import APIRouter, Depends, Query, Request
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError as SchemaError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from tasklist.database import get_db
from tasklist.dependencies import RequestContext, get_request_context
from tasklist.errors import InternalError, ValidationError
from tasklist.schemas.task import MessageOut, TaskCreate, TaskOut, TaskPage
from tasklist.services import tasks as task_service
from tasklist.utils.pagination import PageRequest, parse_int, total_pages

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


@contextmanager
def _store_errors(db: Session, action: str, ctx: RequestContext, task_id: Optional[int] = None):
    """Roll back and turn store failures into a generic InternalError."""
    try:
        yield
    except SQLAlchemyError:
        db.rollback()
        logger.exception("error %s (user=%s task=%s)", action, ctx.user_id, task_id)
        raise InternalError()


def _task_id(raw: str) -> int:
    # same leading-integer rule as page/pageSize: "12abc" -> 12
    task_id = parse_int(raw, None)
    if task_id is None:
        raise ValidationError("Invalid task ID")
    return task_id


async def task_create_body(request: Request, ctx: RequestContext = Depends(get_request_context)) -> TaskCreate:
    """Read and validate the create payload only once the caller is known."""
    try:
        payload = await request.json()
    except ValueError:
        raise ValidationError()
    try:
        return TaskCreate.model_validate(payload)
    except SchemaError as e:
        raise RequestValidationError([{**err, "loc": ("body", *err["loc"])} for err in e.errors()])


@router.get("", response_model=TaskPage)
def list_tasks(
    q: Optional[str] = Query(None, description="Case-insensitive title search"),
    page: Optional[str] = Query(None, description="Page number, starting at 1"),
    page_size: Optional[str] = Query(None, alias="pageSize", description="Items per page, 1..100"),
    ctx: RequestContext = Depends(get_request_context),
    db: Session = Depends(get_db),
):
    """Paginated tasks of the caller. Non-numeric page/pageSize fall back to defaults."""
    window = PageRequest.from_query(page, page_size)
    with _store_errors(db, "fetching tasks", ctx):
        items, total = task_service.list_tasks(db, ctx.user_id, q, window)
        return TaskPage(
            items=[TaskOut.model_validate(t) for t in items],
            page=window.page,
            page_size=window.page_size,
            total=total,
            total_pages=total_pages(total, window.page_size),
        )


@router.post(
    "",
    response_model=TaskOut,
    status_code=201,
    openapi_extra={"requestBody": {"required": True, "content": {"application/json": {"schema": TaskCreate.model_json_schema()}}}},
)
def create_task(
    ctx: RequestContext = Depends(get_request_context),
    task: TaskCreate = Depends(task_create_body),
    db: Session = Depends(get_db),
):
    with _store_errors(db, "creating task", ctx):
        return task_service.create_task(db, ctx.user_id, task.title)


@router.patch("/{task_id}/toggle", response_model=TaskOut)
def toggle_task(task_id: str, ctx: RequestContext = Depends(get_request_context), db: Session = Depends(get_db)):
    tid = _task_id(task_id)
    with _store_errors(db, "toggling task", ctx, tid):
        return task_service.toggle_task(db, ctx.user_id, tid)


@router.patch("/{task_id}", response_model=TaskOut)
def patch_task(task_id: str, ctx: RequestContext = Depends(get_request_context), db: Session = Depends(get_db)):
    """Same as the toggle endpoint; any request body is ignored."""
    tid = _task_id(task_id)
    with _store_errors(db, "toggling task", ctx, tid):
        return task_service.toggle_task(db, ctx.user_id, tid)


@router.delete("/{task_id}", response_model=MessageOut)
def delete_task(task_id: str, ctx: RequestContext = Depends(get_request_context), db: Session = Depends(get_db)):
    tid = _task_id(task_id)
    with _store_errors(db, "deleting task", ctx, tid):
        task_service.delete_task(db, ctx.user_id, tid)
    return {"message": "Task deleted successfully"}
