from __future__ import annotations

from dataclasses import dataclass

from .entities import Task


@dataclass(frozen=True)
class TaskFilters:
    show_completed: bool = True
    starred_only: bool = False
    search: str | None = None

    def matches(self, task: Task) -> bool:
        if not self.show_completed and task.completed:
            return False
        if self.starred_only and not task.is_starred:
            return False
        if self.search:
            needle = self.search.casefold()
            if needle not in task.title.casefold() and needle not in task.description.casefold():
                return False
        return True
