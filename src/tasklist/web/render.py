# src/tasklist/web/render.py

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from pathlib import Path
from typing import Any

from fastapi import Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from ..tasks.task_models import Page, Task

TEMPLATES_DIR = Path(__file__).parent / "templates"


class RenderMode(StrEnum):
    """How a response should be shaped for the requesting client."""

    FULL_PAGE = "full_page"
    FRAGMENT = "fragment"

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> RenderMode:
        raw = headers.get("HX-Request") or ""
        return cls.FRAGMENT if raw.strip().lower() == "true" else cls.FULL_PAGE


def render_mode(request: Request) -> RenderMode:
    """FastAPI dependency: derive the render mode once per request."""
    return RenderMode.from_headers(request.headers)


def see_other(url: str) -> RedirectResponse:
    # 303 so the browser follows up with a GET (PRG).
    return RedirectResponse(url, status_code=303)


def plural(n: int, word: str) -> str:
    return f"{n} {word}" if n == 1 else f"{n} {word}s"


def count_message(page: Page[Task], query: str) -> str:
    if query.strip():
        return f'Found {plural(page.total, "task")} matching "{query}".'
    return f"Showing {plural(page.total, 'task')}."


class TaskViews:
    """
    Template rendering for the task pages.

    Every method returns a ready HTMLResponse; fragment responses are plain
    concatenations of partial templates (primary swap target first, then any
    out-of-band status update).
    """

    def __init__(self, app_name: str, templates_dir: Path = TEMPLATES_DIR) -> None:
        self.app_name = app_name
        self.templates = Jinja2Templates(directory=templates_dir)

    def _render(self, name: str, context: dict[str, Any]) -> str:
        return self.templates.get_template(name).render(context)

    def _respond(self, body: str, status_code: int = 200) -> HTMLResponse:
        return HTMLResponse(body, status_code=status_code, headers={"Vary": "HX-Request"})

    # ---- fragments ----

    def status_html(self, message: str, *, alert: bool = False) -> str:
        return self._render("tasks/_status.html", {"message": message, "alert": alert})

    def item_html(self, task: Task) -> str:
        return self._render("tasks/_item.html", {"task": task})

    def created_html(self, task: Task) -> str:
        # New item + removal of the "No tasks" placeholder, if present.
        return self._render("tasks/_created.html", {"task": task})

    def edit_html(self, task: Task, error: str | None = None) -> str:
        return self._render("tasks/_edit.html", {"task": task, "error": error})

    def list_html(self, page: Page[Task], query: str, editing_id: int | None = None) -> str:
        return self._render(
            "tasks/_list.html",
            {"page": page, "q": query, "editing_id": editing_id, "edit_error": None},
        )

    def fragment(self, *parts: str, status_code: int = 200) -> HTMLResponse:
        return self._respond("".join(parts), status_code=status_code)

    def list_fragment(self, page: Page[Task], query: str) -> HTMLResponse:
        return self.fragment(
            self.list_html(page, query),
            self.status_html(count_message(page, query)),
        )

    # ---- full pages ----

    def index_page(
        self,
        request: Request,
        page: Page[Task],
        query: str,
        *,
        error: str | None = None,
        editing_id: int | None = None,
        edit_error: str | None = None,
    ) -> HTMLResponse:
        response = self.templates.TemplateResponse(
            request,
            "tasks/index.html",
            {
                "title": self.app_name,
                "page": page,
                "q": query,
                "error": error,
                "editing_id": editing_id,
                "edit_error": edit_error,
                "status_message": error or count_message(page, query),
            },
        )
        response.headers["Vary"] = "HX-Request"
        return response

    def error_page(self, request: Request, message: str, status_code: int) -> HTMLResponse:
        response = self.templates.TemplateResponse(
            request,
            "error.html",
            {"title": self.app_name, "message": message},
            status_code=status_code,
        )
        response.headers["Vary"] = "HX-Request"
        return response
