# src/tasklist/web/routes.py

from __future__ import annotations

import logging
from typing import Annotated
from urllib.parse import urlencode

from fastapi import Depends, FastAPI, Form, Request
from fastapi.responses import Response

from ..core.ports import TaskRepo
from ..tasks.task_api import (
    TITLE_REQUIRED_MESSAGE,
    TaskNotFoundError,
    TitleRequiredError,
    create_task,
    remove_task,
    rename_task,
)
from .render import RenderMode, TaskViews, render_mode, see_other

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Task not found."

# ?error=<code> values understood by the no-script pages.
ERROR_MESSAGES = {
    "required": TITLE_REQUIRED_MESSAGE,
}

Mode = Annotated[RenderMode, Depends(render_mode)]
TitleField = Annotated[str, Form()]


def _parse_int(raw: str | None) -> int | None:
    try:
        return int((raw or "").strip())
    except ValueError:
        return None


def _tasks_url(**params: object) -> str:
    query = {k: v for k, v in params.items() if v not in (None, "")}
    return f"/tasks?{urlencode(query)}" if query else "/tasks"


class TaskRoutes:
    """
    Registers the /tasks routes on a FastAPI app.

    Every route shapes its response by RenderMode:
    - FRAGMENT: partial HTML (+ out-of-band #status update) for htmx swaps
    - FULL_PAGE: complete document, or a 303 redirect after POST (PRG)
    """

    def __init__(self, app: FastAPI, store: TaskRepo, views: TaskViews, page_size: int = 10):
        if not isinstance(app, FastAPI):
            raise TypeError("app must be an instance of FastAPI.")

        self.app = app
        self.store = store
        self.views = views
        self.page_size = max(1, int(page_size))

    def _not_found(self, request: Request, mode: RenderMode) -> Response:
        if mode is RenderMode.FRAGMENT:
            return self.views.fragment(
                self.views.status_html(NOT_FOUND_MESSAGE, alert=True), status_code=404
            )
        return self.views.error_page(request, NOT_FOUND_MESSAGE, 404)

    def add_routes(self) -> None:
        store = self.store
        views = self.views
        page_size = self.page_size

        @self.app.get("/", include_in_schema=False)
        def root():
            return see_other("/tasks")

        @self.app.get("/health")
        def health():
            return {"status": "ok", "tasks": store.count()}

        @self.app.get("/tasks")
        def list_tasks(
            request: Request,
            mode: Mode,
            q: str = "",
            page: str | None = None,
            error: str | None = None,
        ):
            query = q
            result = store.search(query, _parse_int(page) or 1, page_size)
            if mode is RenderMode.FRAGMENT:
                return views.list_fragment(result, query)
            return views.index_page(request, result, query, error=ERROR_MESSAGES.get(error or ""))

        @self.app.get("/tasks/fragment")
        def list_fragment(q: str = "", page: str | None = None):
            query = q
            result = store.search(query, _parse_int(page) or 1, page_size)
            return views.list_fragment(result, query)

        @self.app.post("/tasks")
        def add_task(mode: Mode, title: TitleField = ""):
            try:
                task = create_task(store, title)
            except TitleRequiredError as e:
                logger.debug("Rejected blank title on create")
                if mode is RenderMode.FRAGMENT:
                    return views.fragment(views.status_html(str(e), alert=True), status_code=400)
                return see_other(_tasks_url(error="required"))

            if mode is RenderMode.FRAGMENT:
                return views.fragment(
                    views.created_html(task),
                    views.status_html(f'Task "{task.title}" added successfully.'),
                    status_code=201,
                )
            return see_other("/tasks")

        @self.app.post("/tasks/{task_id}/delete")
        def delete_task(mode: Mode, task_id: str):
            removed = remove_task(store, _parse_int(task_id))
            if mode is RenderMode.FRAGMENT:
                message = "Task deleted." if removed else "Could not delete task."
                # Empty primary content: the outerHTML swap removes the <li>.
                return views.fragment(views.status_html(message, alert=not removed))
            return see_other("/tasks")

        @self.app.get("/tasks/{task_id}/edit")
        def edit_form(request: Request, mode: Mode, task_id: str, error: str | None = None):
            parsed = _parse_int(task_id)
            task = store.find(parsed) if parsed is not None else None
            if task is None:
                return self._not_found(request, mode)

            message = ERROR_MESSAGES.get(error or "")
            if mode is RenderMode.FRAGMENT:
                return views.fragment(views.edit_html(task, message))

            number = store.page_of(task.id, page_size)
            result = store.search("", number, page_size)
            return views.index_page(
                request,
                result,
                "",
                editing_id=task.id,
                edit_error=message,
            )

        @self.app.post("/tasks/{task_id}/edit")
        def edit_task(request: Request, mode: Mode, task_id: str, title: TitleField = ""):
            parsed = _parse_int(task_id)
            current = store.find(parsed) if parsed is not None else None
            if current is None:
                return self._not_found(request, mode)

            try:
                task = rename_task(store, current.id, title)
            except TaskNotFoundError:
                return self._not_found(request, mode)
            except TitleRequiredError as e:
                logger.debug("Rejected blank title on edit id=%s", current.id)
                if mode is RenderMode.FRAGMENT:
                    return views.fragment(
                        views.edit_html(current, str(e)),
                        views.status_html(str(e), alert=True),
                        status_code=400,
                    )
                return see_other(f"/tasks/{current.id}/edit?error=required")

            if mode is RenderMode.FRAGMENT:
                return views.fragment(
                    views.item_html(task),
                    views.status_html(f'Task "{task.title}" updated.'),
                )
            return see_other("/tasks")

        @self.app.get("/tasks/{task_id}/view")
        def view_task(request: Request, mode: Mode, task_id: str):
            parsed = _parse_int(task_id)
            task = store.find(parsed) if parsed is not None else None
            if task is None:
                return self._not_found(request, mode)
            if mode is RenderMode.FULL_PAGE:
                return see_other("/tasks")
            return views.fragment(views.item_html(task))

        logger.info("Task routes registered (page_size=%s).", page_size)
