"""Business logic services.

Services coordinate validation, repositories and the grading rule.
They are stateless apart from the repositories they are given, and they
never raise for expected failures: every operation returns `Ok(...)` or
`Err(DomainError)`. Repository errors are passed through unchanged and
are never retried here.
"""

import json
import logging
from typing import List, Optional

from . import grading
from .domain import Quiz, User
from .errors import AnsweredQuizDoesNotExist, UserAlreadyExists
from .repositories import QuizRepository, UserRepository
from .result import Err, Ok
from .security import dummy_verify
from .validation import validate_all, validate_answer, validate_options
from .values import Email, HashedPassword, QuizId, Text, Title

logger = logging.getLogger("quizapp.services")


def _log_event(event: str, **fields):
    logger.info("%s %s", event, json.dumps(fields, ensure_ascii=True))


def _as_quiz_id(quiz_id) -> QuizId:
    return quiz_id if isinstance(quiz_id, QuizId) else QuizId(quiz_id)


class QuizService:
    """Create, fetch and answer quizzes."""
    def __init__(self, quiz_repo: QuizRepository, user_repo: UserRepository):
        self.quiz_repo = quiz_repo
        self.user_repo = user_repo

    def save_quiz(self, title: str, text: str, answer_indexes: List[int], options: List[str], user_email: Optional[str] = None):
        """Validate a new quiz and store it.

        All four fields are validated even when an earlier one fails;
        the result is `Err(IncorrectFields)` listing every failure in the
        order title, text, answer, options. When `user_email` names a
        registered user the quiz is owned by them; an unknown or
        malformed email leaves the quiz without an owner.

        Returns `Ok(QuizId)` on success.
        """
        owner = None
        if user_email:
            parsed = Email.parse(user_email)
            if parsed.ok:
                found = self.user_repo.get_user_from_email(parsed.value)
                if not found.ok:
                    return found
                owner = found.value

        validated = validate_all(
            lambda t, x, a, o: Quiz(title=t, text=x, answer=a, options=o, user_id=owner.id if owner else None),
            Title.parse(title),
            Text.parse(text),
            validate_answer(answer_indexes, options),
            validate_options(options),
        )
        if not validated.ok:
            _log_event("quiz_rejected", failures=len(validated.error.failures))
            return validated

        saved = self.quiz_repo.create_new_quiz(validated.value)
        if saved.ok:
            _log_event("quiz_saved", quiz_id=saved.value.value, owned=owner is not None)
        return saved

    def get_quiz(self, quiz_id):
        """Return `Ok(Quiz)`, `Ok(None)` or the repository's error."""
        return self.quiz_repo.get_quiz(_as_quiz_id(quiz_id))

    def answer_quiz(self, quiz_id, submitted_indexes: List[int]):
        """Grade `submitted_indexes` against the stored quiz.

        Returns `Ok(AnswerResult)`, or `Err(AnsweredQuizDoesNotExist)`
        when no quiz has that id.
        """
        qid = _as_quiz_id(quiz_id)
        found = self.quiz_repo.get_quiz(qid)
        if not found.ok:
            return found
        if found.value is None:
            return Err(AnsweredQuizDoesNotExist(qid.value))
        result = grading.grade(found.value, submitted_indexes)
        _log_event("quiz_answered", quiz_id=qid.value, correct=result.is_correct)
        return Ok(result)


class UserService:
    """Registration and credential checks."""
    def __init__(self, user_repo: UserRepository):
        self.user_repo = user_repo

    def register_user(self, email: str, password: str):
        """Create a new user with a hashed password.

        The existence check here is advisory; the storage unique index on
        email is what rejects a concurrent duplicate (reported as an
        `InsertionError`). Returns `Ok(UserId)`.
        """
        validated = validate_all(
            lambda e, p: User(email=e, hashed_password=p),
            Email.parse(email),
            HashedPassword.parse(password),
        )
        if not validated.ok:
            return validated
        user = validated.value

        existing = self.user_repo.get_user_from_email(user.email)
        if not existing.ok:
            return existing
        if existing.value is not None:
            return Err(UserAlreadyExists(existing.value.email.value))

        created = self.user_repo.create_user(user)
        if created.ok:
            _log_event("user_registered", user_id=created.value.value)
        return created

    def is_valid_user(self, email: str, password: str):
        """Check credentials; `Ok(False)` for unknown email or wrong password.

        Both negative cases take a full hash verification, so neither the
        result nor the timing tells them apart.
        """
        parsed = Email.parse(email)
        if not parsed.ok:
            return Ok(dummy_verify())
        found = self.user_repo.get_user_from_email(parsed.value)
        if not found.ok:
            return found
        if found.value is None:
            return Ok(dummy_verify())
        return Ok(found.value.hashed_password.matches(password))
