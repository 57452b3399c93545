"""Standard assertion helpers.

Each helper receives the pilot first and judges the result of the current
test. Load them with ``Pilot.inject_standard_helpers()``.
"""

from collections.abc import Sized
from pprint import pformat
from typing import Any, Iterable

from exacodis.core.invoker import resolve_class
from exacodis.core.record import CaughtError


def _strict_equal(a: Any, b: Any) -> bool:
    return type(a) is type(b) and a == b


def _as_class(cls: Any) -> type | str:
    """Class to check against. A dotted name is imported, a bare name kept."""
    if isinstance(cls, str):
        return resolve_class(cls) if "." in cls else cls
    return cls if isinstance(cls, type) else type(cls)


def _is_instance(value: Any, cls: type | str) -> bool:
    if isinstance(cls, str):
        # bare names match any class of the value's MRO
        return any(cls == k.__name__ for k in type(value).__mro__)
    return isinstance(value, cls)


def _class_label(cls: type | str) -> str:
    return cls if isinstance(cls, str) else cls.__qualname__


def _check(pilot, condition: bool, label: str, expected: Any) -> None:
    if condition:
        pilot.add_success(label)
    else:
        pilot.add_failure(expected=expected, label=label)


# Equality


def assert_equal(pilot, to: Any) -> None:
    result = pilot.current_runner.result
    _check(pilot, _strict_equal(result, to), "equal", f"Equal to: {pformat(to)}")


def assert_not_equal(pilot, to: Any) -> None:
    result = pilot.current_runner.result
    _check(pilot, not _strict_equal(result, to), "notEqual", f"Not equal to: {pformat(to)}")


# Types


def _type_helper(label: str, expected: str, predicate):
    def helper(pilot) -> None:
        _check(pilot, predicate(pilot.current_runner.result), label, expected)

    helper.__name__ = f"assert_{label}"
    return helper


assert_is_bool = _type_helper("isBoolean", "Boolean", lambda v: isinstance(v, bool))
assert_is_int = _type_helper(
    "isInteger", "Integer", lambda v: isinstance(v, int) and not isinstance(v, bool)
)
assert_is_float = _type_helper("isFloat", "Float", lambda v: isinstance(v, float))
assert_is_str = _type_helper("isString", "String", lambda v: isinstance(v, str))
assert_is_list = _type_helper("isList", "List", lambda v: isinstance(v, list))
assert_is_dict = _type_helper("isDict", "Dict", lambda v: isinstance(v, dict))
assert_is_none = _type_helper("isNone", "None", lambda v: v is None)
assert_is_scalar = _type_helper(
    "isScalar", "Scalar", lambda v: isinstance(v, (bool, int, float, str, bytes))
)
assert_is_callable = _type_helper("isCallable", "Callable", callable)


# Classes and exceptions


def assert_is_instance_of(pilot, cls: Any, label: str = "instanceOf") -> None:
    cls = _as_class(cls)
    result = pilot.current_runner.result
    _check(pilot, _is_instance(result, cls), label, f"{label}: {_class_label(cls)}")


def assert_is_not_instance_of(pilot, cls: Any, label: str = "notInstanceOf") -> None:
    cls = _as_class(cls)
    result = pilot.current_runner.result
    _check(pilot, not _is_instance(result, cls), label, f"{label}: {_class_label(cls)}")


def assert_exception(pilot, cls: Any = Exception) -> None:
    cls = _as_class(cls)
    outcome = pilot.current_runner.outcome
    raised = isinstance(outcome, CaughtError) and _is_instance(outcome.error, cls)
    _check(pilot, raised, "exception", f"exception: {_class_label(cls)}")


def assert_not_exception(pilot, cls: Any = Exception) -> None:
    cls = _as_class(cls)
    outcome = pilot.current_runner.outcome
    raised = isinstance(outcome, CaughtError) and _is_instance(outcome.error, cls)
    _check(pilot, not raised, "notException", f"notException: {_class_label(cls)}")


# Membership


def assert_in(pilot, values: Iterable[Any]) -> None:
    values = list(values)
    result = pilot.current_runner.result
    _check(pilot, result in values, "in", f"To be loosely one of: {pformat(values)}")


def assert_in_strict(pilot, values: Iterable[Any]) -> None:
    values = list(values)
    result = pilot.current_runner.result
    found = any(_strict_equal(result, v) for v in values)
    _check(pilot, found, "inStrict", f"To be strictly one of: {pformat(values)}")


def assert_not_in(pilot, values: Iterable[Any]) -> None:
    values = list(values)
    result = pilot.current_runner.result
    _check(pilot, result not in values, "notIn", f"Not to be loosely one of: {pformat(values)}")


def assert_not_in_strict(pilot, values: Iterable[Any]) -> None:
    values = list(values)
    result = pilot.current_runner.result
    found = any(_strict_equal(result, v) for v in values)
    _check(pilot, not found, "notInStrict", f"Not to be strictly one of: {pformat(values)}")


def assert_count(pilot, nb: int) -> None:
    result = pilot.current_runner.result
    counted = isinstance(result, Sized) and len(result) == nb
    _check(pilot, counted, "count", f"Sized and number of elements: {nb}")


HELPERS = {
    "assert_equal": assert_equal,
    "assert_not_equal": assert_not_equal,
    "assert_is_bool": assert_is_bool,
    "assert_is_int": assert_is_int,
    "assert_is_float": assert_is_float,
    "assert_is_str": assert_is_str,
    "assert_is_list": assert_is_list,
    "assert_is_dict": assert_is_dict,
    "assert_is_none": assert_is_none,
    "assert_is_scalar": assert_is_scalar,
    "assert_is_callable": assert_is_callable,
    "assert_is_instance_of": assert_is_instance_of,
    "assert_is_not_instance_of": assert_is_not_instance_of,
    "assert_exception": assert_exception,
    "assert_not_exception": assert_not_exception,
    "assert_in": assert_in,
    "assert_in_strict": assert_in_strict,
    "assert_not_in": assert_not_in,
    "assert_not_in_strict": assert_not_in_strict,
    "assert_count": assert_count,
}
