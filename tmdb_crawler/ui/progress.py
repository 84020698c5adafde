"""Terminal progress helpers with Rich-based rendering."""

from __future__ import annotations

from dataclasses import dataclass
from threading import Lock

from rich.console import Console
from rich.errors import LiveError
from rich.progress import (
    BarColumn,
    Progress,
    ProgressColumn,
    SpinnerColumn,
    Task,
    TaskID,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.text import Text


@dataclass
class ProgressState:
    total: int
    accepted: int = 0
    rejected: int = 0
    failed: int = 0

    @property
    def completed(self) -> int:
        return self.accepted + self.rejected + self.failed


class RateColumn(ProgressColumn):
    """Render the number of identifiers processed per second."""

    def render(self, task: Task) -> Text:
        speed = task.finished_speed or task.speed
        if speed is None:
            return Text("", style="progress.percentage")
        return Text(f"{speed:.1f} id/s", style="progress.percentage")


class ProgressReporter:
    """Render progress and keep outcome counters; safe to call from any worker thread."""

    def __init__(self, enabled: bool = True, label: str = "crawl", console: Console | None = None) -> None:
        self.enabled = enabled
        self._label = label
        self._console = console
        self._progress: Progress | None = None
        self._task_id: TaskID | None = None
        self._lock = Lock()
        self.state: ProgressState | None = None

    def start(self, total: int) -> None:
        self.state = ProgressState(total=total)
        if not self.enabled:
            return
        if self._console is None:
            self._console = Console()
        if not self._console.is_terminal:
            # Non-interactive output: keep counters only
            self.enabled = False
            return
        self._progress = Progress(
            SpinnerColumn(style="cyan"),
            TextColumn("[bold blue]{task.fields[label]:<10}", justify="left"),
            BarColumn(bar_width=None, complete_style="green", finished_style="green"),
            TaskProgressColumn(show_speed=False),
            TimeElapsedColumn(),
            RateColumn(),
            TextColumn("[green]✓{task.fields[accepted]:>6}", justify="right"),
            TextColumn("[yellow]↷{task.fields[rejected]:>6}", justify="right"),
            TextColumn("[red]✗{task.fields[failed]:>6}", justify="right"),
            refresh_per_second=8,
            expand=True,
            transient=True,
            console=self._console,
        )
        try:
            self._progress.start()
        except LiveError:
            # Another live display owns this console
            self.enabled = False
            self._progress = None
            return
        self._task_id = self._progress.add_task(
            "crawl", total=total, label=self._label, accepted=0, rejected=0, failed=0
        )

    def advance(self, accepted: bool = False, rejected: bool = False, failed: bool = False) -> None:
        if self.state is None:
            raise RuntimeError("ProgressReporter.start must be called before advance")
        with self._lock:
            if accepted:
                self.state.accepted += 1
            if rejected:
                self.state.rejected += 1
            if failed:
                self.state.failed += 1
            if self._progress is not None and self._task_id is not None:
                self._progress.update(
                    self._task_id,
                    advance=1,
                    accepted=self.state.accepted,
                    rejected=self.state.rejected,
                    failed=self.state.failed,
                )

    def close(self) -> None:
        with self._lock:
            if self._progress is not None:
                self._progress.stop()
                self._progress = None
            self._task_id = None

    def summary(self) -> dict[str, int]:
        if self.state is None:
            return {"accepted": 0, "rejected": 0, "failed": 0}
        return {
            "accepted": self.state.accepted,
            "rejected": self.state.rejected,
            "failed": self.state.failed,
        }


__all__ = ["ProgressReporter", "ProgressState", "RateColumn"]
