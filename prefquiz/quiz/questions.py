from __future__ import annotations

"""Question Repository: question lookup and multiple-choice option synthesis."""

import random
from dataclasses import dataclass, field
from typing import List

from ..app.explain import trace as xtrace
from ..errors import InvalidChoice, NotFound
from ..storage.schema import Question
from ..storage.store import QuizStore

DEFAULT_DISTRACTORS = 3


def _text(value: object) -> str:
    return "" if value is None else str(value).strip()


def normalize_answer(text: str) -> str:
    return (text or "").strip().casefold()


def answers_match(a: str, b: str) -> bool:
    """Trimmed, case-insensitive answer equality."""
    return normalize_answer(a) == normalize_answer(b)


@dataclass(frozen=True)
class QuestionView:
    """One rendered question: prompt, shuffled options and the correct answer."""

    question_id: int
    prefecture: str
    correct_answer: str
    options: List[str] = field(default_factory=list)

    @property
    def prompt(self) -> str:
        return f"What is the capital of {self.prefecture}?"

    @property
    def correct_index(self) -> int:
        """1-based position of the correct answer in ``options``."""
        for i, opt in enumerate(self.options, start=1):
            if answers_match(opt, self.correct_answer):
                return i
        raise ValueError(f"Correct answer missing from options for question {self.question_id}")

    def option_at(self, choice: int) -> str:
        if not isinstance(choice, int) or isinstance(choice, bool) or not (1 <= choice <= len(self.options)):
            raise InvalidChoice(choice, len(self.options))
        return self.options[choice - 1]

    def is_correct(self, answer: str) -> bool:
        return answers_match(answer, self.correct_answer)


class QuestionRepository:
    def __init__(self, store: QuizStore, rng: random.Random | None = None, *, distractors: int = DEFAULT_DISTRACTORS) -> None:
        self.store = store
        self.rng = rng or random.Random()
        self.distractors = max(0, int(distractors))

    def get(self, question_id: int) -> Question:
        """Load one question; rows with a blank prompt or answer count as missing."""
        rows = self.store.query(
            "SELECT question_id, prefecture, correct_answer FROM questions WHERE question_id = ?",
            (question_id,),
        )
        if not rows:
            raise NotFound(question_id)
        r = rows[0]
        prefecture = _text(r["prefecture"])
        correct_answer = _text(r["correct_answer"])
        if not prefecture or not correct_answer:
            raise NotFound(question_id)
        return Question(question_id=int(r["question_id"]), prefecture=prefecture, correct_answer=correct_answer)

    def all_ids(self) -> List[int]:
        rows = self.store.query("SELECT question_id FROM questions ORDER BY question_id")
        return [int(r["question_id"]) for r in rows]

    def _distractor_pool(self, question: Question) -> List[str]:
        """Distinct answers of other questions, excluding the correct answer by value."""
        rows = self.store.query(
            "SELECT correct_answer FROM questions WHERE question_id != ? ORDER BY question_id",
            (question.question_id,),
        )
        seen = {normalize_answer(question.correct_answer)}
        pool: List[str] = []
        for r in rows:
            text = _text(r["correct_answer"])
            key = normalize_answer(text)
            if not key or key in seen:
                continue
            seen.add(key)
            pool.append(text)
        return pool

    def fetch(self, question_id: int) -> QuestionView:
        question = self.get(question_id)
        pool = self._distractor_pool(question)
        wrong = self.rng.sample(pool, min(self.distractors, len(pool)))
        options = [question.correct_answer] + wrong
        self.rng.shuffle(options)
        xtrace("question_fetched", {"question": question_id, "options": len(options)})
        return QuestionView(
            question_id=question.question_id,
            prefecture=question.prefecture,
            correct_answer=question.correct_answer,
            options=options,
        )
