"""Rich progress display driven by pipeline events.

Pipeline functions accept an ``on_progress(event, payload)`` callback; the
reporter maps those events onto rich progress tasks:

- ``import:start`` / ``page:imported`` / ``import:finalized``
- ``generate:start`` / ``page:rendered`` / ``generate:finalized``
- ``write:start`` / ``file:written`` / ``write:finalized``

Unknown events are ignored.
"""

from __future__ import annotations

from types import TracebackType

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)


class ProgressReporter:
    def __init__(self, console: Console | None = None, *, transient: bool = False) -> None:
        self.progress = Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            console=console,
            transient=transient,
        )
        self._tasks: dict[str, TaskID] = {}
        self._totals: dict[str, int] = {}

    def __enter__(self) -> ProgressReporter:
        self.progress.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.progress.stop()

    def add_step(self, description: str, total: int | None = None) -> TaskID:
        return self.progress.add_task(description, total=total)

    def finish_task(self, task_id: TaskID) -> None:
        task = self.progress.tasks[self.progress.task_ids.index(task_id)]
        if task.total is not None:
            self.progress.update(task_id, completed=task.total)
        self.progress.remove_task(task_id)

    def _start(self, key: str, description: str, total: int | None) -> None:
        if key in self._tasks:
            self._finish(key)
        self._tasks[key] = self.add_step(description, total=total)
        if total is not None:
            self._totals[key] = total

    def _advance(self, key: str) -> None:
        task_id = self._tasks.get(key)
        if task_id is not None:
            self.progress.advance(task_id)

    def _finish(self, key: str) -> None:
        task_id = self._tasks.pop(key, None)
        if task_id is not None:
            self.finish_task(task_id)

    def emit(self, event: str, payload: dict[str, int | str]) -> None:
        if event == "import:start":
            self._start("pages", "Importing pages", _as_total(payload.get("page_count")))
        elif event == "page:imported":
            self._advance("pages")
        elif event == "import:finalized":
            self._finish("pages")
        elif event == "generate:start":
            template = payload.get("template", "")
            self._start("pages", f"Rendering {template}".strip(), _as_total(payload.get("pages")))
        elif event == "page:rendered":
            self._advance("pages")
        elif event == "generate:finalized":
            self._finish("pages")
        elif event == "write:start":
            self._start("files", "Writing files", _as_total(payload.get("files")))
        elif event == "file:written":
            self._advance("files")
        elif event == "write:finalized":
            self._finish("files")


def _as_total(value: int | str | None) -> int | None:
    return value if isinstance(value, int) and value >= 0 else None


__all__ = ["ProgressReporter"]
