"""
Task operations scoped to a single owner.

Every function takes the caller's user id explicitly and raises
``tasklist.errors`` exceptions; the HTTP layer owns commit/rollback on failure
and the translation to responses.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from tasklist.config import MAX_ROW_ID
from tasklist.errors import Forbidden, NotFound
from tasklist.models.task import Task
from tasklist.models.user import User  # noqa: F401  (registers the relationship target)
from tasklist.utils.pagination import PageRequest

logger = logging.getLogger(__name__)


def list_tasks(db: Session, user_id: int, q: Optional[str], window: PageRequest) -> Tuple[List[Task], int]:
    """
    Return one page of the caller's tasks and the total number of matches.

    ``q`` is a case-insensitive substring filter on the title, applied
    verbatim (whitespace included) when non-empty; LIKE wildcards in it match
    literally. Pending tasks come first, newest first within each group.
    A window past the last match returns no items without querying them.
    """
    query = db.query(Task).filter(Task.user_id == user_id)
    if q:
        query = query.filter(Task.title.icontains(q, autoescape=True))

    total = query.count()
    if window.offset >= total:
        return [], total
    items = (
        query.order_by(Task.done.asc(), Task.created_at.desc(), Task.id.desc())
        .offset(window.offset)
        .limit(window.limit)
        .all()
    )
    return items, total


def create_task(db: Session, user_id: int, title: str) -> Task:
    """Insert a pending task; ``title`` is already trimmed and bounded by the schema."""
    task = Task(title=title, done=False, user_id=user_id)
    db.add(task)
    db.commit()
    db.refresh(task)
    logger.info("created task %s for user %s", task.id, user_id)
    return task


def toggle_task(db: Session, user_id: int, task_id: int) -> Task:
    """
    Flip ``done`` on a task owned by the caller.

    Absent task -> NotFound; task owned by someone else -> Forbidden.
    The flip is a single ``UPDATE ... SET done = NOT done`` so concurrent
    toggles cannot lose an update.
    """
    if not -MAX_ROW_ID <= task_id <= MAX_ROW_ID:
        raise NotFound()
    task = db.get(Task, task_id)
    if task is None:
        raise NotFound()
    if task.user_id != user_id:
        logger.warning("user %s tried to toggle task %s owned by user %s", user_id, task_id, task.user_id)
        raise Forbidden()

    db.query(Task).filter(Task.id == task_id, Task.user_id == user_id).update(
        {Task.done: ~Task.done}, synchronize_session=False
    )
    db.commit()
    db.refresh(task)
    return task


def delete_task(db: Session, user_id: int, task_id: int) -> None:
    """
    Hard-delete a task owned by the caller.

    Existence and ownership are checked in one lookup, so a task that belongs
    to another user is reported as NotFound.
    """
    if not -MAX_ROW_ID <= task_id <= MAX_ROW_ID:
        raise NotFound()
    task = db.query(Task).filter(Task.id == task_id, Task.user_id == user_id).first()
    if task is None:
        raise NotFound()
    db.delete(task)
    db.commit()
    logger.info("deleted task %s for user %s", task_id, user_id)
