from __future__ import annotations

"""Error taxonomy for the quiz engine.

Recoverable errors (format, credentials, choice) are re-prompted by the
terminal layer; ``ExhaustedLoginAttempts`` and startup ``StorageFailure``
end the process.
"""


class QuizError(Exception):
    """Base class for all quiz engine errors."""


class InvalidFormat(QuizError):
    def __init__(self, field: str, value: str = "") -> None:
        super().__init__(f"Invalid {field}: must be 1-8 letters, digits or allowed symbols")
        self.field = field
        self.value = value


class DuplicateIdentifier(QuizError):
    def __init__(self, user_id: str) -> None:
        super().__init__(f"User ID already exists: {user_id}")
        self.user_id = user_id


class InvalidCredentials(QuizError):
    def __init__(self) -> None:
        super().__init__("Invalid user ID or password")


class NotFound(QuizError):
    def __init__(self, question_id: int) -> None:
        super().__init__(f"Question not found: {question_id}")
        self.question_id = question_id


class InvalidChoice(QuizError):
    def __init__(self, choice: int, option_count: int) -> None:
        super().__init__(f"Choice {choice} is outside 1..{option_count}")
        self.choice = choice
        self.option_count = option_count


class LedgerWriteFailure(QuizError):
    """The attempt could not be saved; nothing was written."""


class StorageFailure(QuizError):
    """Transport or connectivity error from the backing store."""


class ExhaustedLoginAttempts(QuizError):
    def __init__(self, attempts: int) -> None:
        super().__init__(f"Login failed {attempts} times")
        self.attempts = attempts
