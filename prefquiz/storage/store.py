from __future__ import annotations

"""SQLite-backed handle for the quiz tables.

The handle is opened once by the CLI and closed on exit. Statements run in
autocommit mode unless wrapped in ``transaction()``.
"""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterable, Iterator, Sequence

from ..errors import StorageFailure
from .schema import DDL, Question


DEFAULT_DB_PATH = "./data/quiz.db"


class QuizStore:
    def __init__(self, conn: sqlite3.Connection, path: str = ":memory:") -> None:
        self._conn = conn
        self.path = path
        self._in_tx = False

    def __enter__(self) -> "QuizStore":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._conn is None

    @property
    def connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise StorageFailure("Store is closed")
        return self._conn

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def query(self, sql: str, params: Sequence[Any] = ()) -> list[sqlite3.Row]:
        try:
            return self.connection.execute(sql, tuple(params)).fetchall()
        except sqlite3.Error as e:
            raise StorageFailure(f"Query failed: {e}") from e

    def execute(self, sql: str, params: Sequence[Any] = ()) -> int:
        """Run a write statement and return the affected row count."""
        try:
            cur = self.connection.execute(sql, tuple(params))
        except sqlite3.Error as e:
            raise StorageFailure(f"Statement failed: {e}") from e
        return cur.rowcount

    @contextmanager
    def transaction(self) -> Iterator["QuizStore"]:
        """Run the enclosed statements as one unit of work.

        Commits on normal exit; rolls back and re-raises on any exception.
        """
        if self._in_tx:
            raise StorageFailure("Nested transactions are not supported")
        conn = self.connection
        try:
            conn.execute("BEGIN IMMEDIATE")
        except sqlite3.Error as e:
            raise StorageFailure(f"Could not begin transaction: {e}") from e
        self._in_tx = True
        try:
            yield self
        except BaseException:
            try:
                conn.execute("ROLLBACK")
            except sqlite3.Error:
                pass
            raise
        else:
            try:
                conn.execute("COMMIT")
            except sqlite3.Error as e:
                try:
                    conn.execute("ROLLBACK")
                except sqlite3.Error:
                    pass
                raise StorageFailure(f"Commit failed: {e}") from e
        finally:
            self._in_tx = False

    def init_schema(self) -> None:
        try:
            self.connection.executescript(DDL)
        except sqlite3.Error as e:
            raise StorageFailure(f"Could not create schema: {e}") from e

    def seed_questions(self, questions: Iterable[Question]) -> int:
        """Insert questions whose id is not yet present. Returns the number inserted."""
        inserted = 0
        with self.transaction():
            for q in questions:
                q = Question.model_validate(q)
                n = self.execute(
                    "INSERT INTO questions (question_id, prefecture, correct_answer) "
                    "SELECT ?, ?, ? WHERE NOT EXISTS (SELECT 1 FROM questions WHERE question_id = ?)",
                    (q.question_id, q.prefecture, q.correct_answer, q.question_id),
                )
                inserted += max(n, 0)
        return inserted


def open_store(path: str | Path = DEFAULT_DB_PATH, *, timeout_s: float = 5.0) -> QuizStore:
    """Open (creating parent directories as needed) the SQLite store at ``path``."""
    path_str = str(path)
    try:
        if path_str != ":memory:":
            Path(path_str).parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(path_str, timeout=float(timeout_s), isolation_level=None)
    except (OSError, sqlite3.Error) as e:
        raise StorageFailure(f"Could not open store at {path_str}: {e}") from e
    conn.row_factory = sqlite3.Row
    return QuizStore(conn, path_str)
