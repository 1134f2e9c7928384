"""Message formatting helpers.

Messages use printf-style (`%`) formatting, resolved on the calling thread.
"""

from __future__ import annotations

import traceback
from collections.abc import Sequence
from typing import Any


class MissingFormatArgumentError(TypeError):
    """The format string expects more arguments than were supplied."""


def format_message(fmt: str, args: Sequence[Any]) -> str:
    """Apply `args` to `fmt` with `%` formatting.

    Raises:
        MissingFormatArgumentError: `fmt` consumes more values than `args` holds.
        TypeError, ValueError: any other formatting problem (propagated as-is).
    """
    try:
        return fmt % tuple(args)
    except TypeError as exc:
        if "not enough arguments" in str(exc):
            raise MissingFormatArgumentError(
                f"format string {fmt!r} needs more than {len(args)} argument(s)"
            ) from exc
        raise


def resolve_message(
    fmt: str, args: Sequence[Any]
) -> tuple[str, BaseException | None]:
    """Format a log message, splitting off a trailing exception when it is a cause.

    If the last argument is an exception, the message is first formatted
    without it and the exception is returned as the attached error. When the
    format string needs that last value too, the full argument list is used
    and nothing is attached.
    """
    if not args:
        return str(fmt), None

    last = args[-1]
    if last is not None and isinstance(last, BaseException):
        try:
            return format_message(fmt, args[:-1]), last
        except MissingFormatArgumentError:
            return format_message(fmt, args), None

    return format_message(fmt, args), None


def render_stack_trace(error: BaseException) -> str:
    """Render `error` with its traceback (and chained causes) as text."""
    lines = traceback.format_exception(type(error), error, error.__traceback__)
    return "".join(lines).rstrip("\n")


def render_body(method: str, message: str, error: BaseException | None) -> str:
    """Build ``"<method>(): <message>"`` with the stack trace on following lines."""
    body = f"{method}(): {message}"
    if error is not None:
        body = f"{body}\n{render_stack_trace(error)}"
    return body
