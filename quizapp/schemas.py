"""Pydantic request/response schemas.

These are the body shapes a transport layer exchanges with clients.
They only check the JSON shape (strings, lists of ints); domain
validation stays in the service layer so that every field failure is
reported together.
"""

from typing import List

from pydantic import BaseModel

from .domain import AnswerResult, Quiz
from .errors import error_messages


class QuizIn(BaseModel):
    """Payload for creating a quiz."""
    title: str
    text: str
    options: List[str]
    answers: List[int]


class QuizOut(BaseModel):
    """A stored quiz as returned to clients."""
    id: int
    title: str
    text: str
    options: List[str]
    answers: List[int]

    @classmethod
    def from_quiz(cls, quiz: Quiz) -> "QuizOut":
        return cls(
            id=quiz.id.value,
            title=quiz.title.value,
            text=quiz.text.value,
            options=quiz.option_values(),
            answers=quiz.answer_values(),
        )

    @classmethod
    def from_request(cls, quiz_id: int, payload: QuizIn) -> "QuizOut":
        """Echo a create request back with the id it was stored under."""
        return cls(id=quiz_id, **payload.model_dump())


class AnswerQuizIn(BaseModel):
    answers: List[int]


class AnswerQuizOut(BaseModel):
    is_correct: bool

    @classmethod
    def from_result(cls, result: AnswerResult) -> "AnswerQuizOut":
        return cls(is_correct=result.is_correct)


class RegisterIn(BaseModel):
    """Payload for user registration."""
    email: str
    password: str


class RegisterOut(BaseModel):
    email: str
    id: int


class ErrorOut(BaseModel):
    """Error body: one message per problem."""
    errors: List[str]

    @classmethod
    def from_error(cls, error) -> "ErrorOut":
        return cls(errors=error_messages(error))
