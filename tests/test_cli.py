import contextlib
import io
import sqlite3
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from prefquiz import __version__
from prefquiz.app.cli import main

from ._support import BrokenStore


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.db = str(Path(self._tmp.name) / "quiz.db")

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _run(self, argv, inputs=(), secrets=()):
        out = io.StringIO()
        err = io.StringIO()
        with mock.patch("builtins.input", side_effect=list(inputs)), \
                mock.patch("getpass.getpass", side_effect=list(secrets)), \
                contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
            code = main(argv)
        return code, out.getvalue(), err.getvalue()

    def test_version(self) -> None:
        code, out, _ = self._run(["--version"])
        self.assertEqual(code, 0)
        self.assertIn(__version__, out)

    def test_init_db_seeds_once(self) -> None:
        code, out, _ = self._run(["--db", self.db, "init-db"])
        self.assertEqual(code, 0)
        self.assertIn("Seeded 47", out)
        _, out, _ = self._run(["--db", self.db, "init-db"])
        self.assertIn("Seeded 0", out)

    def test_register_then_exit(self) -> None:
        self._run(["--db", self.db, "init-db"])
        code, out, _ = self._run(["--db", self.db, "play", "--seed", "3"],
                                 inputs=["2", "alice", "2", "3"], secrets=["pw"])
        self.assertEqual(code, 0)
        self.assertIn("Registration complete!", out)
        self.assertIn("No questions to ask", out)

    def test_exhausted_login_exits_nonzero(self) -> None:
        self._run(["--db", self.db, "init-db"])
        code, _, err = self._run(["--db", self.db, "play"],
                                 inputs=["1", "bob", "bob", "bob"], secrets=["a", "b", "c"])
        self.assertEqual(code, 1)
        self.assertIn("Login failed 3 times", err)

    def test_progress_report(self) -> None:
        self._run(["--db", self.db, "init-db"])
        export = str(Path(self._tmp.name) / "out" / "alice.ndjson")
        code, out, _ = self._run(["--db", self.db, "progress", "--user", "alice", "--export", export])
        self.assertEqual(code, 0)
        self.assertIn("Answered: 0/47", out)
        self.assertTrue(Path(export).exists())

    def _broken_store(self, *args, **kwargs) -> BrokenStore:
        conn = sqlite3.connect(":memory:", isolation_level=None)
        conn.row_factory = sqlite3.Row
        store = BrokenStore(conn, ":memory:")
        store.fail_query = True
        return store

    def test_storage_failure_during_login_exits_nonzero(self) -> None:
        with mock.patch("prefquiz.app.cli.open_store", side_effect=self._broken_store):
            code, _, err = self._run(["--db", self.db, "play"], inputs=["1", "bob"], secrets=["pw"])
        self.assertEqual(code, 1)
        self.assertIn("ERROR: database is locked", err)

    def test_invalid_menu_input_is_reprompted(self) -> None:
        self._run(["--db", self.db, "init-db"])
        code, out, _ = self._run(["--db", self.db, "play"],
                                 inputs=["x", "9", "2", "carol", "3"], secrets=["pw"])
        self.assertEqual(code, 0)
        self.assertIn("Invalid selection", out)


if __name__ == "__main__":
    unittest.main()
