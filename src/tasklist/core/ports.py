# src/tasklist/core/ports.py

"""
Ports (interfaces) used by the web layer.

Handlers depend on a Protocol instead of the concrete CSV store.
This keeps storage swappable and makes testing easier.
"""

from __future__ import annotations

from typing import Protocol

from ..tasks.task_models import Page, Task


class TaskRepo(Protocol):
    def all(self) -> list[Task]: ...
    def count(self) -> int: ...
    def find(self, task_id: int) -> Task | None: ...

    def add(self, title: str) -> Task: ...
    def delete(self, task_id: int) -> bool: ...
    def update(self, task: Task) -> None: ...

    def search(self, query: str = "", page: int = 1, size: int = 10) -> Page[Task]: ...
    def page_of(self, task_id: int, size: int = 10) -> int: ...

    def close(self) -> None: ...
