"""Accumulating validation.

Ordinary validation stops at the first bad field. The helpers here run
every validator unconditionally and collect every failure, so a client
sees all problems with a submission in a single response.

A validation is a `Result` whose error is either one
`FieldValidationFailure` or a tuple of them (as produced by
`validate_each`). `validate_all` combines any number of them.
"""

from typing import Callable, Iterable, Sequence

from .errors import Empty, IncorrectFields
from .result import Err, Ok
from .values import AnswerIndex, Option


def _failures_of(err: Err) -> tuple:
    if isinstance(err.error, tuple):
        return err.error
    return (err.error,)


def validate_each(raws: Iterable, validator: Callable):
    """Validate every item of `raws`, accumulating failures.

    `validator` is called as `validator(raw, position)`. Returns
    `Ok(tuple_of_values)` when all items pass, otherwise `Err` with a
    tuple of every failure in item order.
    """
    values = []
    failures = []
    for position, raw in enumerate(raws):
        res = validator(raw, position)
        if isinstance(res, Err):
            failures.extend(_failures_of(res))
        else:
            values.append(res.value)
    if failures:
        return Err(tuple(failures))
    return Ok(tuple(values))


def validate_all(build: Callable, *validations):
    """Combine independent field validations into one outcome.

    When every validation is `Ok`, returns `Ok(build(*values))` with the
    values in argument order. Otherwise returns
    `Err(IncorrectFields(failures))` holding every failure, ordered by
    argument; `build` is not called.
    """
    values = []
    failures = []
    for res in validations:
        if isinstance(res, Err):
            failures.extend(_failures_of(res))
        else:
            values.append(res.value)
    if failures:
        return Err(IncorrectFields(tuple(failures)))
    return Ok(build(*values))


def validate_options(options: Sequence[str]):
    return validate_each(options, Option.parse)


def validate_answer(indexes: Sequence[int], options: Sequence[str]):
    """Validate submitted answer indexes against the raw `options`.

    Returns `Ok(frozenset_of_AnswerIndex)`. An empty `indexes` list is an
    `Empty("answers")` failure; duplicates collapse into the set.
    """
    if not indexes:
        return Err(Empty("answers"))
    res = validate_each(indexes, lambda raw, _pos: AnswerIndex.parse(raw, options))
    return res.map(frozenset)
