import json
import tempfile
import unittest
from pathlib import Path

from prefquiz.quiz.ledger import AnswerLedger
from prefquiz.stats.report import export_ndjson, format_progress, progress_frame, summarize_progress
from prefquiz.stats.stats import SessionSummary, format_summary, update_stats

from ._support import memory_store


class ProgressReportTests(unittest.TestCase):
    def setUp(self) -> None:
        self.store = memory_store()
        ledger = AnswerLedger(self.store)
        ledger.record("u1", 1, "Osaka", False)
        ledger.record("u1", 2, "Osaka", True)
        ledger.record("u2", 3, "Nagoya", False)

    def tearDown(self) -> None:
        self.store.close()

    def test_status_per_question(self) -> None:
        df = progress_frame(self.store, "u1")
        self.assertEqual(list(df["question_id"]), [1, 2, 3, 4])
        self.assertEqual(list(df["status"]), ["incorrect", "correct", "absent", "absent"])

    def test_summary(self) -> None:
        summary = summarize_progress(progress_frame(self.store, "u1"))
        self.assertEqual(summary["answered"], 2)
        self.assertEqual(summary["incorrect"], 1)
        self.assertEqual(summary["unanswered"], 2)
        self.assertAlmostEqual(summary["accuracy"], 0.5)
        self.assertIn("Answered: 2/4", format_progress("u1", summary))

    def test_unknown_user_is_all_absent(self) -> None:
        summary = summarize_progress(progress_frame(self.store, "nobody"))
        self.assertEqual((summary["answered"], summary["unanswered"], summary["accuracy"]), (0, 4, 0.0))

    def test_export_ndjson(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            out = Path(tmp) / "reports" / "u1.ndjson"
            export_ndjson(progress_frame(self.store, "u1"), out)
            lines = out.read_text(encoding="utf-8").splitlines()
        self.assertEqual(len(lines), 4)
        first = json.loads(lines[0])
        self.assertEqual(first["status"], "incorrect")
        self.assertEqual(first["selected_answer"], "Osaka")


class SessionSummaryTests(unittest.TestCase):
    def test_counts_and_format(self) -> None:
        s = SessionSummary(total=3)
        update_stats(s, True)
        update_stats(s, False, saved=False)
        s.skipped += 1
        text = format_summary(s)
        self.assertEqual((s.correct, s.incorrect, s.unsaved), (1, 1, 1))
        self.assertIn("Total questions: 3", text)
        self.assertIn("Not saved: 1", text)
        self.assertIn("Skipped", text)


if __name__ == "__main__":
    unittest.main()
