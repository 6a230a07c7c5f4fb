import unittest

from prefquiz.policy.selection import MENU, QuizSession, SelectionPolicy
from prefquiz.quiz.ledger import AnswerLedger
from prefquiz.quiz.questions import QuestionRepository

from ._support import memory_store


class SelectionPolicyTests(unittest.TestCase):
    def setUp(self) -> None:
        self.store = memory_store()
        self.ledger = AnswerLedger(self.store)
        self.policy = SelectionPolicy(QuestionRepository(self.store), self.ledger)

    def tearDown(self) -> None:
        self.store.close()

    def test_all_returns_every_question_once(self) -> None:
        self.ledger.record("u1", 2, "Osaka", True)
        self.assertEqual(self.policy.questions_for(QuizSession("u1", "all")), [1, 2, 3, 4])

    def test_retry_empty_without_history(self) -> None:
        self.assertEqual(self.policy.questions_for(QuizSession("u1", "retry_incorrect")), [])

    def test_retry_tracks_latest_correctness(self) -> None:
        retry = QuizSession("u1", "retry_incorrect")
        self.ledger.record("u1", 1, "Osaka", False)
        self.ledger.record("u1", 2, "Osaka", True)
        self.assertEqual(self.policy.questions_for(retry), [1])
        self.ledger.record("u1", 1, "Tokyo", True)
        self.assertEqual(self.policy.questions_for(retry), [])

    def test_retry_is_per_user(self) -> None:
        self.ledger.record("u2", 3, "Osaka", False)
        self.assertEqual(self.policy.questions_for(QuizSession("u1", "retry_incorrect")), [])
        self.assertEqual(self.policy.questions_for(QuizSession("u2", "retry_incorrect")), [3])

    def test_unknown_mode(self) -> None:
        with self.assertRaises(ValueError):
            self.policy.questions_for(QuizSession("u1", "random"))  # type: ignore[arg-type]

    def test_menu_mapping(self) -> None:
        self.assertEqual(MENU[1], "all")
        self.assertEqual(MENU[2], "retry_incorrect")
        self.assertIsNone(MENU[3])


if __name__ == "__main__":
    unittest.main()
