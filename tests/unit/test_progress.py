from __future__ import annotations

from unittest.mock import MagicMock, patch

from taglabels.services.progress import ProgressTracker


def test_disabled_when_not_tty():
    with patch("taglabels.services.progress.is_tty_enabled", return_value=False), \
         patch("taglabels.services.progress.tqdm") as tqdm_cls:
        tracker = ProgressTracker(3)
        tracker(33)
        tracker(100)
        tracker.close()
    tqdm_cls.assert_not_called()
    assert tracker.enabled is False
    assert tracker.percent == 100


def test_tty_progress_updates_by_delta():
    bar = MagicMock()
    with patch("taglabels.services.progress.is_tty_enabled", return_value=True), \
         patch("taglabels.services.progress.tqdm", return_value=bar) as tqdm_cls:
        with ProgressTracker(3) as tracker:
            tracker(33)
            tracker(66)
            tracker(100)

    assert tqdm_cls.call_args.kwargs["total"] == 100
    assert [c.args[0] for c in bar.update.call_args_list] == [33, 33, 34]
    bar.set_description.assert_called_with("Generating: 100% completed")
    bar.close.assert_called_once()
    assert tracker.pbar is None


def test_non_increasing_values_are_ignored():
    bar = MagicMock()
    with patch("taglabels.services.progress.is_tty_enabled", return_value=True), \
         patch("taglabels.services.progress.tqdm", return_value=bar):
        tracker = ProgressTracker(2)
        tracker(50)
        tracker(50)
        tracker(10)
        tracker(150)
    assert [c.args[0] for c in bar.update.call_args_list] == [50, 50]
    assert tracker.percent == 100

