from __future__ import annotations

"""Selection Policy: which question ids make up a session."""

from dataclasses import dataclass
from typing import Dict, List, Literal, Optional

from ..quiz.ledger import AnswerLedger
from ..quiz.questions import QuestionRepository

Mode = Literal["all", "retry_incorrect"]

MODE_LABELS: Dict[Mode, str] = {
    "all": "All questions",
    "retry_incorrect": "Previously incorrect questions only",
}

# Main menu: 1 = all, 2 = retry incorrect, 3 = exit (None).
MENU: Dict[int, Optional[Mode]] = {1: "all", 2: "retry_incorrect", 3: None}


@dataclass(frozen=True)
class QuizSession:
    """Who is playing and in which mode; threaded through a session run."""

    user_id: str
    mode: Mode = "all"


class SelectionPolicy:
    def __init__(self, questions: QuestionRepository, ledger: AnswerLedger) -> None:
        self.questions = questions
        self.ledger = ledger

    def questions_for(self, session: QuizSession) -> List[int]:
        if session.mode == "all":
            return self.questions.all_ids()
        if session.mode == "retry_incorrect":
            return list(dict.fromkeys(self.ledger.incorrect_question_ids(session.user_id)))
        raise ValueError(f"Unknown mode: {session.mode}")
