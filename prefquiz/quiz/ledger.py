from __future__ import annotations

"""Answer Ledger: the latest attempt per (user, question).

Each key is in one of three states: absent, correct, incorrect. ``record``
checks for an existing row and then inserts or updates it inside one
transaction, so at most one row per key ever exists.
"""

from typing import List, Literal, Optional

from ..app.explain import trace as xtrace
from ..errors import LedgerWriteFailure, StorageFailure
from ..storage.schema import AnswerRecord
from ..storage.store import QuizStore

LedgerState = Literal["absent", "correct", "incorrect"]


class AnswerLedger:
    def __init__(self, store: QuizStore) -> None:
        self.store = store

    def record(self, user_id: str, question_id: int, selected_answer: str, is_correct: bool) -> AnswerRecord:
        rec = AnswerRecord(
            user_id=user_id,
            question_id=question_id,
            selected_answer=selected_answer.strip(),
            is_correct=is_correct,
        )
        try:
            with self.store.transaction() as tx:
                rows = tx.query(
                    "SELECT COUNT(*) AS n FROM user_answers WHERE user_id = ? AND question_id = ?",
                    (rec.user_id, rec.question_id),
                )
                if rows[0]["n"] > 0:
                    tx.execute(
                        "UPDATE user_answers SET selected_answer = ?, is_correct = ? "
                        "WHERE user_id = ? AND question_id = ?",
                        (rec.selected_answer, int(rec.is_correct), rec.user_id, rec.question_id),
                    )
                    action = "update"
                else:
                    tx.execute(
                        "INSERT INTO user_answers (user_id, question_id, selected_answer, is_correct) "
                        "VALUES (?, ?, ?, ?)",
                        (rec.user_id, rec.question_id, rec.selected_answer, int(rec.is_correct)),
                    )
                    action = "insert"
        except StorageFailure as e:
            raise LedgerWriteFailure(f"Answer to question {question_id} was not saved: {e}") from e
        xtrace("answer_recorded", {"user": user_id, "question": question_id, "correct": rec.is_correct, "action": action})
        return rec

    def get(self, user_id: str, question_id: int) -> Optional[AnswerRecord]:
        rows = self.store.query(
            "SELECT user_id, question_id, selected_answer, is_correct FROM user_answers "
            "WHERE user_id = ? AND question_id = ?",
            (user_id, question_id),
        )
        if not rows:
            return None
        r = rows[0]
        return AnswerRecord(
            user_id=r["user_id"],
            question_id=r["question_id"],
            selected_answer=r["selected_answer"] or "",
            is_correct=bool(r["is_correct"]),
        )

    def state(self, user_id: str, question_id: int) -> LedgerState:
        rec = self.get(user_id, question_id)
        if rec is None:
            return "absent"
        return "correct" if rec.is_correct else "incorrect"

    def incorrect_question_ids(self, user_id: str) -> List[int]:
        rows = self.store.query(
            "SELECT DISTINCT question_id FROM user_answers "
            "WHERE user_id = ? AND is_correct = 0 ORDER BY question_id",
            (user_id,),
        )
        return [int(r["question_id"]) for r in rows]
