"""Data models used by the UI."""

from __future__ import annotations

from dataclasses import dataclass

from typebook.core.session import Metrics


@dataclass(frozen=True)
class StatsText:
    """Label text for the time, WPM and accuracy read-outs."""

    time: str = "0s"
    wpm: str = "0"
    accuracy: str = "100%"

    @classmethod
    def from_metrics(cls, metrics: Metrics) -> "StatsText":
        return cls(
            time=f"{metrics.elapsed_seconds}s",
            wpm=f"{metrics.wpm}",
            accuracy=f"{metrics.accuracy}%",
        )
