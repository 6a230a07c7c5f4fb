from __future__ import annotations

"""Session Manager: gates entry and runs quiz sessions.

Wires the Selection Policy, Question Repository and Answer Ledger together
and talks to the terminal only through the ``ui`` callback dict
(``ask``, ``ask_secret``, ``ask_choice``, ``inform``).
"""

import random
from typing import Any, Callable, Dict, Optional, Tuple

from ..auth.credentials import CredentialStore, check_format
from ..errors import (
    DuplicateIdentifier,
    ExhaustedLoginAttempts,
    InvalidChoice,
    InvalidCredentials,
    InvalidFormat,
    LedgerWriteFailure,
    NotFound,
    StorageFailure,
)
from ..policy.selection import MENU, MODE_LABELS, QuizSession, SelectionPolicy
from ..quiz.ledger import AnswerLedger
from ..quiz.questions import QuestionRepository, QuestionView
from ..stats.stats import SessionSummary, format_summary, update_stats
from ..storage.schema import User
from ..storage.store import QuizStore
from .explain import trace as xtrace

UI = Dict[str, Callable[..., Any]]

DEFAULT_MAX_LOGIN_ATTEMPTS = 3


class SessionManager:
    def __init__(self, cfg: Dict[str, Any], store: QuizStore, rng: random.Random | None = None) -> None:
        self.cfg = cfg
        self.store = store
        quiz_cfg = cfg.get("quiz", {})
        self.credentials = CredentialStore(store)
        self.questions = QuestionRepository(store, rng, distractors=int(quiz_cfg.get("distractors", 3)))
        self.ledger = AnswerLedger(store)
        self.policy = SelectionPolicy(self.questions, self.ledger)
        self.max_login_attempts = int(cfg.get("auth", {}).get("max_login_attempts", DEFAULT_MAX_LOGIN_ATTEMPTS))
        self.show_remaining = bool(cfg.get("ui", {}).get("show_remaining", True))

    # --- entry gate ---

    def login_or_register(self, ui: UI) -> User:
        inform = ui["inform"]
        while True:
            choice = ui["ask_choice"]("1: Log in  2: Register > ", 1, 2)
            if choice == 1:
                return self.login(ui)
            user = self.register(ui)
            if user is not None:
                return user
            inform("Returning to the start menu.")

    def login(self, ui: UI) -> User:
        """Prompt for credentials at most ``max_login_attempts`` times.

        Raises ExhaustedLoginAttempts once the limit is reached; StorageFailure
        propagates unchanged.
        """
        inform = ui["inform"]
        for attempt in range(1, self.max_login_attempts + 1):
            user_id = ui["ask"]("User ID: ").strip()
            password = ui["ask_secret"]("Password: ")
            try:
                user = self.credentials.authenticate(user_id, password)
            except InvalidCredentials:
                remaining = self.max_login_attempts - attempt
                inform(f"Login failed. Attempts remaining: {remaining}")
                continue
            inform("Login successful!")
            xtrace("login_ok", {"user": user.user_id, "attempt": attempt})
            return user
        inform("Too many failed login attempts.")
        raise ExhaustedLoginAttempts(self.max_login_attempts)

    def register(self, ui: UI) -> Optional[User]:
        """Register a new user. Returns None when the caller should start over."""
        inform = ui["inform"]
        while True:
            user_id = ui["ask"]("New user ID (1-8 characters): ").strip()
            try:
                check_format("user ID", user_id)
            except InvalidFormat as e:
                inform(str(e))
                continue
            break
        while True:
            password = ui["ask_secret"]("Password (1-8 characters): ")
            try:
                check_format("password", password)
            except InvalidFormat as e:
                inform(str(e))
                continue
            break
        try:
            user = self.credentials.register(user_id, password)
        except DuplicateIdentifier:
            inform("That user ID already exists. Please try another.")
            return None
        except StorageFailure as e:
            inform(f"Registration failed, please try again. ({e})")
            return None
        inform("Registration complete!")
        return user

    # --- quiz sessions ---

    def main_menu(self, user: User, ui: UI) -> int:
        """Loop over the main menu until the user exits. Returns the exit status."""
        inform = ui["inform"]
        while True:
            inform("\nMenu:")
            inform("1. Answer all questions")
            inform("2. Answer previously incorrect questions")
            inform("3. Exit")
            choice = ui["ask_choice"]("Select an option: ", 1, 3)
            if choice not in MENU:
                inform("Invalid selection. Please try again.")
                continue
            mode = MENU[choice]
            if mode is None:
                inform("Goodbye.")
                return 0
            summary = self.run(QuizSession(user_id=user.user_id, mode=mode), ui)
            if summary is not None:
                inform("\n" + format_summary(summary))

    def run(self, session: QuizSession, ui: UI) -> Optional[SessionSummary]:
        """Present every selected question once. Returns None when nothing was selected."""
        inform = ui["inform"]
        inform(f"Mode: {MODE_LABELS[session.mode]}")
        ids = self.policy.questions_for(session)
        if not ids:
            inform("No questions to ask. Returning to menu.")
            xtrace("session_empty", {"user": session.user_id, "mode": session.mode})
            return None

        xtrace("session_started", {"user": session.user_id, "mode": session.mode, "questions": len(ids)})
        summary = SessionSummary(total=len(ids))
        for i, question_id in enumerate(ids):
            try:
                view = self.questions.fetch(question_id)
            except NotFound as e:
                inform(f"Error: {e}. Skipping.")
                summary.skipped += 1
                continue

            if self.show_remaining:
                inform(f"\n({len(ids) - i} remaining)")
            inform(f"\n{view.prompt}")
            for n, option in enumerate(view.options, start=1):
                inform(f"{n}. {option}")

            while True:
                choice = ui["ask_choice"]("Enter a number: ", 1, len(view.options))
                try:
                    is_correct, saved = self.answer(session, view, choice)
                except InvalidChoice as e:
                    inform(f"{e}. Please try again.")
                    continue
                break

            inform("Correct!" if is_correct else f"Incorrect. The answer was {view.correct_answer}.")
            if not saved:
                inform("[WARN] Your result for this question was not saved.")
            update_stats(summary, is_correct, saved=saved)

        xtrace("session_ended", summary.to_dict())
        return summary

    def answer(self, session: QuizSession, view: QuestionView, choice: int) -> Tuple[bool, bool]:
        """Grade a 1-based choice and record it. Returns (is_correct, saved)."""
        selected = view.option_at(choice)
        is_correct = view.is_correct(selected)
        try:
            self.ledger.record(session.user_id, view.question_id, selected, is_correct)
        except LedgerWriteFailure:
            return is_correct, False
        return is_correct, True
