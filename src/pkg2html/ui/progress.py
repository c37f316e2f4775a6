"""rich progress display driven by the builders' progress events."""

from __future__ import annotations

from types import TracebackType

from rich.console import Console
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskID, TextColumn


class ProgressReporter:
    """Context manager turning ``(event, payload)`` pairs into progress bars."""

    def __init__(self, console: Console | None = None) -> None:
        self.progress = Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TextColumn("{task.completed}/{task.total}"),
            console=console,
            transient=False,
        )
        self._tasks: dict[str, TaskID] = {}
        self._totals: dict[str, int] = {}
        self.missing: list[str] = []

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
        if task_id in self.progress.task_ids:
            self.progress.remove_task(task_id)

    def _finish(self, key: str) -> None:
        task_id = self._tasks.pop(key, None)
        if task_id is not None:
            self.finish_task(task_id)
        self._totals.pop(key, None)

    def emit(self, event: str, payload: dict[str, int | str]) -> None:
        if event == "category:start":
            self._finish("functions")
            total = int(payload.get("functions", 0))
            self._totals["functions"] = total
            self._tasks["functions"] = self.add_step(f"📚 {payload.get('category', '')}", total=total)
        elif event in ("function:rendered", "function:missing"):
            if event == "function:missing":
                self.missing.append(str(payload.get("name", "")))
            task_id = self._tasks.get("functions")
            if task_id is not None:
                self.progress.advance(task_id)
        elif event == "alpha:written":
            self._finish("functions")
            self.progress.console.log(f"🔤 Alphabetical index: {payload.get('files', 0)} files")
        elif event == "manual:converted":
            self.progress.console.log(f"📘 Manual converted (root {payload.get('index', '')})")
        elif event == "assets:mirrored":
            self.progress.console.log(f"🖼️  Manual assets copied: {payload.get('assets', 0)}")
        elif event == "site:finalized":
            for key in list(self._tasks):
                self._finish(key)


__all__ = ["ProgressReporter"]
