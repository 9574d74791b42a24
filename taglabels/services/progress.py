from __future__ import annotations

import sys
from typing import Any

from tqdm import tqdm

"""Terminal progress bar for the PDF export (tqdm, TTY only).

The session publishes integer percentages (0..100) after every page; the bar
advances by the positive difference to the previous value. Redirected output
(CI, pipes) gets no bar at all.
"""

__all__ = [
    "ProgressTracker",
    "is_tty_enabled",
]

_BAR_OPTIONS: dict[str, Any] = {
    "total": 100,
    "unit": "%",
    "leave": True,
    "ncols": 80,
    "ascii": True,
}


def is_tty_enabled() -> bool:
    return sys.stdout.isatty()


class ProgressTracker:
    """Percent listener that drives a tqdm bar.

    Usable as a TagSession progress listener (it is callable) and as a
    context manager that closes the bar.
    """

    def __init__(self, total_labels: int, *, description: str = "Generating") -> None:
        self.total_labels = total_labels  # ページ数 (表示用)
        self.description = description
        self.percent = 0
        self.enabled = is_tty_enabled()
        self.pbar: Any = tqdm(desc=description, **_BAR_OPTIONS) if self.enabled else None

    def __call__(self, percent: int) -> None:
        self.update(percent)

    def update(self, percent: int) -> None:
        target = min(100, max(0, percent))
        if target <= self.percent:
            return
        step, self.percent = target - self.percent, target
        if self.pbar is None:
            return
        self.pbar.update(step)
        self.pbar.set_description(f"{self.description}: {target}% completed")

    def close(self) -> None:
        if self.pbar is None:
            return
        self.pbar.close()
        self.pbar = None

    def __enter__(self) -> ProgressTracker:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()
