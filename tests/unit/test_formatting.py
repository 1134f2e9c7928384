import pytest

from asynclog.formatting import MissingFormatArgumentError, format_message, render_body, resolve_message


def _raised(exc: BaseException) -> BaseException:
    try:
        raise exc
    except BaseException as caught:  # noqa: BLE001
        return caught


def test_trailing_exception_is_attached_when_format_does_not_use_it():
    exc = ValueError("boom")
    message, error = resolve_message("count=%d", (5, exc))
    assert message == "count=5"
    assert error is exc


def test_trailing_exception_is_formatted_when_format_needs_it():
    exc = ValueError("boom")
    message, error = resolve_message("count=%d and %s", (5, exc))
    assert message == "count=5 and boom"
    assert error is None


def test_lone_exception_argument_consumed_by_placeholder():
    exc = KeyError("k")
    message, error = resolve_message("lookup failed: %r", (exc,))
    assert message == "lookup failed: KeyError('k')"
    assert error is None


def test_lone_exception_argument_attached_to_plain_message():
    exc = RuntimeError("x")
    message, error = resolve_message("sync failed", (exc,))
    assert message == "sync failed"
    assert error is exc


def test_trailing_none_is_a_plain_value():
    message, error = resolve_message("%s=%s", ("key", None))
    assert message == "key=None"
    assert error is None


def test_no_args_means_no_formatting():
    message, error = resolve_message("100% sure", ())
    assert message == "100% sure"
    assert error is None


def test_wrong_argument_type_propagates_instead_of_falling_back():
    with pytest.raises(TypeError) as info:
        resolve_message("%d items", ("many", ValueError("x")))
    assert not isinstance(info.value, MissingFormatArgumentError)


def test_too_many_arguments_propagates():
    with pytest.raises(TypeError) as info:
        format_message("%s", (1, 2))
    assert not isinstance(info.value, MissingFormatArgumentError)


def test_surplus_arguments_before_trailing_exception_propagate():
    with pytest.raises(TypeError, match="not all arguments converted"):
        resolve_message("count=%d", (5, 6, ValueError("x")))


def test_too_few_arguments_even_with_full_list_propagates():
    with pytest.raises(MissingFormatArgumentError):
        resolve_message("%s %s %s", (1, ValueError("x")))


def test_render_body_appends_stack_trace():
    exc = _raised(ValueError("boom"))
    body = render_body("refresh", "count=5", exc)
    first, rest = body.split("\n", 1)
    assert first == "refresh(): count=5"
    assert rest.startswith("Traceback (most recent call last):")
    assert rest.endswith("ValueError: boom")


def test_render_body_without_error_is_single_line():
    assert render_body("run", "ok", None) == "run(): ok"
