# src/tasklist/tasks/task_api.py

from __future__ import annotations

import logging

from ..core.ports import TaskRepo
from .task_models import Task

logger = logging.getLogger(__name__)

TITLE_REQUIRED_MESSAGE = "Title is required. Please enter at least one character."


class TitleRequiredError(ValueError):
    """Raised when a submitted title is empty after trimming."""

    def __init__(self) -> None:
        super().__init__(TITLE_REQUIRED_MESSAGE)


class TaskNotFoundError(LookupError):
    def __init__(self, task_id: int) -> None:
        super().__init__(f"Task {task_id} not found")
        self.task_id = task_id


def clean_title(raw: str | None) -> str:
    title = (raw or "").strip()
    if not title:
        raise TitleRequiredError()
    return title


def create_task(repo: TaskRepo, raw_title: str | None) -> Task:
    """
    Validate and add a task.
    The store itself accepts any title; the non-blank rule lives here.
    """
    task = repo.add(clean_title(raw_title))
    logger.info("Created task id=%s", task.id)
    return task


def rename_task(repo: TaskRepo, task_id: int, raw_title: str | None) -> Task:
    """Replace the title of an existing task. Unknown ids are reported before validation."""
    task = repo.find(task_id)
    if task is None:
        raise TaskNotFoundError(task_id)

    task.title = clean_title(raw_title)
    repo.update(task)
    logger.info("Renamed task id=%s", task.id)
    return task


def remove_task(repo: TaskRepo, task_id: int | None) -> bool:
    if task_id is None:
        return False
    removed = repo.delete(task_id)
    if removed:
        logger.info("Deleted task id=%s", task_id)
    else:
        logger.info("Delete requested for unknown task id=%s", task_id)
    return removed
