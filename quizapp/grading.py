"""Quiz grading rule."""

from typing import Iterable

from .domain import AnswerResult, Quiz


def grade(quiz: Quiz, submitted: Iterable[int]) -> AnswerResult:
    """Compare submitted indexes to the stored answer as sets.

    Order and duplicates in `submitted` do not matter: `[2, 0, 0]` is
    correct for a stored answer of `{0, 2}`.
    """
    stored = {a.value for a in quiz.answer}
    return AnswerResult(is_correct=stored == set(submitted))
