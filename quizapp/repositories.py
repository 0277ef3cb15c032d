"""Repository contracts and their SQL implementations.

Each repository is small and focused on a single aggregate (quizzes,
users). The abstract classes are the contracts the service layer relies
on; `SqlQuizRepository` and `SqlUserRepository` implement them with
SQLModel sessions opened per call, so a repository holds nothing but its
engine.

Storage faults never escape a repository: any exception raised while
talking to the database (or while rebuilding an entity from a row that
no longer satisfies its invariants) is logged and returned as
`Err(InsertionError)` or `Err(RetrievalError)` carrying a description of
the fault.
"""

import json
import logging
from abc import ABC, abstractmethod

from sqlmodel import Session, select

from . import models
from .domain import Quiz, User
from .errors import InsertionError, RetrievalError, describe_fault
from .result import Err, Ok
from .values import AnswerIndex, Email, HashedPassword, Option, QuizId, Text, Title, UserId

logger = logging.getLogger("quizapp.repositories")


def _log_fault(event: str, exc: Exception, **fields):
    fields["fault"] = describe_fault(exc)
    logger.warning("%s %s", event, json.dumps(fields, ensure_ascii=True), exc_info=True)


class QuizRepository(ABC):
    """Persistence contract for `Quiz` entities."""

    @abstractmethod
    def create_new_quiz(self, quiz: Quiz):
        """Store `quiz` and return `Ok(QuizId)` or `Err(PersistenceError)`."""

    @abstractmethod
    def get_quiz(self, quiz_id: QuizId):
        """Return `Ok(Quiz)`, `Ok(None)` when absent, or `Err(PersistenceError)`."""


class UserRepository(ABC):
    """Persistence contract for `User` entities."""

    @abstractmethod
    def create_user(self, user: User):
        """Store `user` and return `Ok(UserId)` or `Err(PersistenceError)`."""

    @abstractmethod
    def get_user_from_email(self, email: Email):
        """Return `Ok(User)`, `Ok(None)` when absent, or `Err(PersistenceError)`."""


def quiz_from_row(row: models.QuizRow) -> Quiz:
    """Rebuild a `Quiz` from a stored row; raises ValueError on corrupt data."""
    return Quiz(
        id=QuizId(row.id),
        title=Title(row.title),
        text=Text(row.text),
        options=tuple(Option(o) for o in row.options),
        answer=frozenset(AnswerIndex(a) for a in row.answer),
        user_id=UserId(row.user_id) if row.user_id is not None else None,
    )


def user_from_row(row: models.UserRow) -> User:
    return User(
        id=UserId(row.id),
        email=Email(row.email),
        hashed_password=HashedPassword(row.password_hash),
        quizzes=None,
    )


class SqlQuizRepository(QuizRepository):
    def __init__(self, engine):
        self.engine = engine

    def create_new_quiz(self, quiz: Quiz):
        row = models.QuizRow(
            title=quiz.title.value,
            text=quiz.text.value,
            options=quiz.option_values(),
            answer=quiz.answer_values(),
            user_id=quiz.user_id.value if quiz.user_id is not None else None,
        )
        try:
            with Session(self.engine) as session:
                session.add(row)
                session.commit()
                session.refresh(row)
                return Ok(QuizId(row.id))
        except Exception as exc:
            _log_fault("quiz_insert_failed", exc, title=quiz.title.value)
            return Err(InsertionError(describe_fault(exc)))

    def get_quiz(self, quiz_id: QuizId):
        try:
            with Session(self.engine) as session:
                row = session.get(models.QuizRow, quiz_id.value)
                return Ok(quiz_from_row(row) if row is not None else None)
        except Exception as exc:
            _log_fault("quiz_retrieval_failed", exc, quiz_id=quiz_id.value)
            return Err(RetrievalError(describe_fault(exc)))


class SqlUserRepository(UserRepository):
    def __init__(self, engine):
        self.engine = engine

    def create_user(self, user: User):
        row = models.UserRow(email=user.email.value, password_hash=user.hashed_password.value)
        try:
            with Session(self.engine) as session:
                session.add(row)
                session.commit()
                session.refresh(row)
                return Ok(UserId(row.id))
        except Exception as exc:
            # a concurrent registration with the same email lands here via the unique index
            _log_fault("user_insert_failed", exc, email=user.email.value)
            return Err(InsertionError(describe_fault(exc)))

    def get_user_from_email(self, email: Email):
        """Exact, case-sensitive lookup of a user by email."""
        stmt = select(models.UserRow).where(models.UserRow.email == email.value)
        try:
            with Session(self.engine) as session:
                row = session.exec(stmt).first()
                return Ok(user_from_row(row) if row is not None else None)
        except Exception as exc:
            _log_fault("user_retrieval_failed", exc, email=email.value)
            return Err(RetrievalError(describe_fault(exc)))
