# src/tasklist/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(slots=True)
class Task:
    id: int
    title: str


@dataclass(slots=True, frozen=True)
class Page(Generic[T]):
    """
    One page of a (possibly filtered) listing.

    Computed on demand, never persisted:
    - total: number of matching items across all pages
    - number: 1-based page number, already clamped into [1, total_pages]
    """

    items: list[T]
    total: int
    size: int
    number: int
    total_pages: int

    @property
    def has_prev(self) -> bool:
        return self.number > 1

    @property
    def has_next(self) -> bool:
        return self.number < self.total_pages
