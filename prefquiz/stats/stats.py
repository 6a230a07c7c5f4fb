from __future__ import annotations

"""Per-session score totals and their formatting. Not persisted."""

from dataclasses import asdict, dataclass
from typing import Dict


@dataclass
class SessionSummary:
    total: int = 0
    correct: int = 0
    incorrect: int = 0
    skipped: int = 0
    unsaved: int = 0

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


def update_stats(summary: SessionSummary, correct: bool, *, saved: bool = True) -> None:
    """Count one answered question."""
    if correct:
        summary.correct += 1
    else:
        summary.incorrect += 1
    if not saved:
        summary.unsaved += 1


def format_summary(summary: SessionSummary) -> str:
    lines = [
        "=== Quiz results ===",
        f"Total questions: {summary.total}",
        f"Correct: {summary.correct}",
        f"Incorrect: {summary.incorrect}",
    ]
    if summary.skipped:
        lines.append(f"Skipped (missing question data): {summary.skipped}")
    if summary.unsaved:
        lines.append(f"Not saved: {summary.unsaved}")
    return "\n".join(lines)
