"""Task board state.

The board is an immutable tuple of tasks. Every update function takes the
current tasks and returns the new tasks; callers persist the result.
"""

import time

from .classifier import classify_task
from .models import QUADRANTS, Quadrant, Task

Tasks = tuple[Task, ...]


def new_task_id(tasks: Tasks, now_ms: int | None = None) -> str:
    """Timestamp-derived id that is unique and increasing on this board."""
    candidate = now_ms if now_ms is not None else time.time_ns() // 1_000_000
    numeric = [int(t.id) for t in tasks if t.id.isdecimal()]
    if numeric and candidate <= max(numeric):
        candidate = max(numeric) + 1
    return str(candidate)


def add_task(tasks: Tasks, text: str, now_ms: int | None = None) -> tuple[Tasks, Task | None]:
    """Classify text and append it as a new task.

    Blank text leaves the board unchanged and returns None for the task.
    """
    if not text.strip():
        return tasks, None

    task = Task(id=new_task_id(tasks, now_ms), text=text.strip(), quadrant=classify_task(text))
    return (*tasks, task), task


def find_task(tasks: Tasks, task_id: str) -> Task | None:
    for task in tasks:
        if task.id == task_id:
            return task
    return None


def delete_task(tasks: Tasks, task_id: str) -> Tasks:
    return tuple(t for t in tasks if t.id != task_id)


def move_task(tasks: Tasks, task_id: str, quadrant: Quadrant) -> Tasks:
    """Re-label one task. Unknown ids leave the board unchanged."""
    if quadrant not in QUADRANTS:
        raise ValueError(f"Unknown quadrant: {quadrant!r}")
    return tuple(
        Task(id=t.id, text=t.text, quadrant=quadrant) if t.id == task_id else t
        for t in tasks
    )


def tasks_by_quadrant(tasks: Tasks, quadrant: Quadrant) -> list[Task]:
    return [t for t in tasks if t.quadrant == quadrant]


def group_by_quadrant(tasks: Tasks) -> dict[Quadrant, list[Task]]:
    """Tasks for every quadrant, in display order, including empty ones."""
    return {q: tasks_by_quadrant(tasks, q) for q in QUADRANTS}
