from .schema import DDL, DIGEST_HEX_LENGTH, AnswerRecord, Question, User
from .store import DEFAULT_DB_PATH, QuizStore, open_store

__all__ = [
    "DDL",
    "DIGEST_HEX_LENGTH",
    "AnswerRecord",
    "Question",
    "User",
    "DEFAULT_DB_PATH",
    "QuizStore",
    "open_store",
]
