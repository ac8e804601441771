# src/tasklist/tasks/task_store.py

from __future__ import annotations

import contextlib
import csv
import logging
import os
import threading
from dataclasses import replace
from pathlib import Path

from .task_models import Page, Task

logger = logging.getLogger(__name__)

CSV_HEADER = ("id", "title")


class TaskStore:
    """
    In-memory task list backed by a flat CSV file.

    File format:
    - header line "id,title"
    - one "id,title" row per task, in insertion order

    The whole file is rewritten on every mutation (tmp file + os.replace).
    Fine for small lists; there is no incremental persistence.

    Thread-safety:
    - mutations and ID allocation are serialized by a single lock
    - readers get copies, never the stored Task objects
    """

    def __init__(self, csv_path: str | Path = "data/tasks.csv") -> None:
        self._path = Path(csv_path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.RLock()
        self._tasks: list[Task] = []
        self._next_id = 1

        if self._path.exists():
            self._load()
        else:
            self._persist()

        logger.info(
            "TaskStore ready path=%s total=%s next_id=%s",
            self._path,
            len(self._tasks),
            self._next_id,
        )

    @property
    def next_id(self) -> int:
        return self._next_id

    def close(self) -> None:
        """Compatibility hook for shutdown (every mutation is already on disk)."""
        return

    # ---- low-level helpers ----

    def _load(self) -> None:
        with self._path.open("r", encoding="utf-8", newline="") as f:
            reader = csv.reader(f)
            next(reader, None)  # header
            for lineno, row in enumerate(reader, start=2):
                if not row:
                    continue
                if len(row) < 2:
                    logger.warning("Skipping malformed row %s in %s: %r", lineno, self._path, row)
                    continue
                try:
                    task_id = int(row[0])
                except ValueError:
                    logger.warning("Skipping row %s in %s: bad id %r", lineno, self._path, row[0])
                    continue
                # Unquoted titles with commas (older files) split into extra fields.
                title = ",".join(row[1:])
                self._tasks.append(Task(id=task_id, title=title))
                self._next_id = max(self._next_id, task_id + 1)

    def _persist(self) -> None:
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            with tmp.open("w", encoding="utf-8", newline="") as f:
                writer = csv.writer(f, lineterminator="\n")
                writer.writerow(CSV_HEADER)
                writer.writerows((t.id, t.title) for t in self._tasks)
            os.replace(tmp, self._path)
        finally:
            # Gone after a successful replace; otherwise drop the partial file.
            with contextlib.suppress(FileNotFoundError):
                tmp.unlink()

    def _index_of(self, task_id: int) -> int | None:
        for i, t in enumerate(self._tasks):
            if t.id == task_id:
                return i
        return None

    # ---- public API ----

    def count(self) -> int:
        with self._lock:
            return len(self._tasks)

    def all(self) -> list[Task]:
        with self._lock:
            return [replace(t) for t in self._tasks]

    def find(self, task_id: int) -> Task | None:
        with self._lock:
            idx = self._index_of(task_id)
            return replace(self._tasks[idx]) if idx is not None else None

    def add(self, title: str) -> Task:
        with self._lock:
            task = Task(id=self._next_id, title=title)
            self._next_id += 1
            self._tasks.append(task)
            self._persist()
            logger.debug("Task added id=%s", task.id)
            return replace(task)

    def delete(self, task_id: int) -> bool:
        with self._lock:
            idx = self._index_of(task_id)
            if idx is None:
                return False
            del self._tasks[idx]
            self._persist()
            logger.debug("Task deleted id=%s", task_id)
            return True

    def update(self, task: Task) -> None:
        """Replace the stored title for task.id. Persists even if the id is unknown."""
        with self._lock:
            idx = self._index_of(task.id)
            if idx is not None:
                self._tasks[idx].title = task.title
            self._persist()
            logger.debug("Task updated id=%s found=%s", task.id, idx is not None)

    def search(self, query: str = "", page: int = 1, size: int = 10) -> Page[Task]:
        """
        Case-insensitive substring search with pagination.

        - blank query => no filter; otherwise the query is matched as-is,
          surrounding whitespace included
        - size < 1 is treated as 1
        - page is clamped into [1, total_pages]; total_pages is at least 1
        """
        query = query or ""
        needle = query.lower()
        with self._lock:
            if query.strip():
                matched = [t for t in self._tasks if needle in t.title.lower()]
            else:
                matched = list(self._tasks)

            total = len(matched)
            page_size = max(1, int(size))
            total_pages = max(1, -(-total // page_size))
            number = min(max(1, int(page)), total_pages)

            start = (number - 1) * page_size
            items = [replace(t) for t in matched[start : start + page_size]]

        return Page(
            items=items,
            total=total,
            size=page_size,
            number=number,
            total_pages=total_pages,
        )

    def page_of(self, task_id: int, size: int = 10) -> int:
        """1-based page number of task_id in the unfiltered listing (1 if absent)."""
        page_size = max(1, int(size))
        with self._lock:
            idx = self._index_of(task_id)
        return 1 if idx is None else idx // page_size + 1
