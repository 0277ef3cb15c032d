"""Domain entities composed from validated value types.

Entities are frozen: an update means building a replacement with
`dataclasses.replace`. Ids stay at the unsaved sentinel until a
repository assigns one on insert.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, Optional, Tuple

from .values import AnswerIndex, Email, HashedPassword, Option, QuizId, Text, Title, UserId


@dataclass(frozen=True)
class Quiz:
    """A multiple-choice question with its set of correct option indexes."""
    title: Title
    text: Text
    options: Tuple[Option, ...]
    answer: FrozenSet[AnswerIndex]
    id: QuizId = field(default_factory=QuizId.unsaved)
    user_id: Optional[UserId] = None

    def answer_values(self) -> list:
        """Correct indexes as sorted plain integers."""
        return sorted(a.value for a in self.answer)

    def option_values(self) -> list:
        return [o.value for o in self.options]


@dataclass(frozen=True)
class User:
    """A registered user.

    `quizzes` is None when the owning quizzes were not loaded.
    """
    email: Email
    hashed_password: HashedPassword
    id: UserId = field(default_factory=UserId.unsaved)
    quizzes: Optional[Tuple[Quiz, ...]] = None


@dataclass(frozen=True)
class AnswerResult:
    is_correct: bool
