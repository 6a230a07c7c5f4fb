from __future__ import annotations

"""Table definitions and Pydantic row models for the quiz store."""

from pydantic import BaseModel, Field, field_validator

# --- Constants ---

DIGEST_HEX_LENGTH = 64

# (user_id, question_id) uniqueness in user_answers is kept by the ledger,
# not by a table constraint.
DDL = """
CREATE TABLE IF NOT EXISTS users (
    user_id TEXT PRIMARY KEY,
    password TEXT
);

CREATE TABLE IF NOT EXISTS questions (
    question_id INTEGER PRIMARY KEY,
    prefecture TEXT,
    correct_answer TEXT
);

CREATE TABLE IF NOT EXISTS user_answers (
    user_id TEXT,
    question_id INTEGER,
    selected_answer TEXT,
    is_correct INTEGER
);
"""


# --- Pydantic models ---

class User(BaseModel):
    user_id: str = Field(min_length=1)
    password_hash: str = Field(min_length=DIGEST_HEX_LENGTH, max_length=DIGEST_HEX_LENGTH)

    @field_validator("password_hash")
    @classmethod
    def _hex_digest(cls, v: str) -> str:
        try:
            int(v, 16)
        except ValueError:
            raise ValueError("password_hash must be a hex digest") from None
        return v.lower()


class Question(BaseModel):
    question_id: int
    prefecture: str
    correct_answer: str

    @field_validator("prefecture", "correct_answer")
    @classmethod
    def _strip(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v


class AnswerRecord(BaseModel):
    user_id: str
    question_id: int
    selected_answer: str
    is_correct: bool
