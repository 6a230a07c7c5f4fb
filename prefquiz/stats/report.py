from __future__ import annotations

"""Per-user progress report over the answer ledger, using pandas.

One row per question with the user's latest attempt (if any) and a status
column: absent, correct or incorrect.
"""

from pathlib import Path
from typing import Any, Dict

import pandas as pd

from ..errors import StorageFailure
from ..storage.store import QuizStore

COLUMNS = ["question_id", "prefecture", "correct_answer", "selected_answer", "is_correct", "status"]

_SQL = """
SELECT q.question_id, q.prefecture, q.correct_answer, a.selected_answer, a.is_correct
FROM questions q
LEFT JOIN user_answers a ON a.question_id = q.question_id AND a.user_id = ?
ORDER BY q.question_id
"""


def progress_frame(store: QuizStore, user_id: str) -> pd.DataFrame:
    try:
        df = pd.read_sql_query(_SQL, store.connection, params=(user_id,))
    except Exception as e:
        raise StorageFailure(f"Could not load progress for {user_id}: {e}") from e
    df["question_id"] = df["question_id"].astype("Int64")
    df["selected_answer"] = df["selected_answer"].astype("string")
    df["status"] = "absent"
    df.loc[df["is_correct"] == 1, "status"] = "correct"
    df.loc[df["is_correct"] == 0, "status"] = "incorrect"
    df["is_correct"] = df["status"].map({"correct": True, "incorrect": False, "absent": pd.NA}).astype("boolean")
    df["status"] = df["status"].astype("string")
    return df[COLUMNS]


def summarize_progress(df: pd.DataFrame) -> Dict[str, Any]:
    counts = df["status"].value_counts()
    answered = int(counts.get("correct", 0)) + int(counts.get("incorrect", 0))
    return {
        "questions": int(len(df)),
        "answered": answered,
        "correct": int(counts.get("correct", 0)),
        "incorrect": int(counts.get("incorrect", 0)),
        "unanswered": int(counts.get("absent", 0)),
        "accuracy": (int(counts.get("correct", 0)) / answered) if answered else 0.0,
    }


def format_progress(user_id: str, summary: Dict[str, Any]) -> str:
    return "\n".join(
        [
            f"Progress for {user_id}:",
            f"Answered: {summary['answered']}/{summary['questions']}",
            f"Correct: {summary['correct']}",
            f"Incorrect (to retry): {summary['incorrect']}",
            f"Accuracy: {summary['accuracy']:.0%}",
        ]
    )


def export_ndjson(df: pd.DataFrame, out_path: Path) -> None:
    """Export a DataFrame to line-delimited JSON (NDJSON) for quick inspection."""
    Path(out_path).parent.mkdir(parents=True, exist_ok=True)
    df.to_json(out_path, orient="records", lines=True, force_ascii=False)
