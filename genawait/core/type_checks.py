import types
from typing import Any, Union, get_args, get_origin

from genawait.exceptions import ConstructionMismatchError


def check_type(
    value: Any,
    expected: Any | None,
    role: str,
):
    if expected is None:
        return

    try:
        matches = _matches(value, expected)

    except TypeError as err:
        raise ConstructionMismatchError(
            f"Cannot check {role} against {expected!r}: {err}"
        ) from err

    if not matches:
        raise ConstructionMismatchError(
            f"Expected {role} of type {_type_name(expected)}, got {type(value).__name__}: {value!r}"
        )


def _matches(value: Any, expected: Any) -> bool:
    if expected is Any:
        return True

    origin = get_origin(expected)
    if origin is Union or origin is types.UnionType:
        return any(_matches(value, arg) for arg in get_args(expected))

    # Only the container is checked for parameterized types like list[int].
    if isinstance(origin, type):
        expected = origin

    return isinstance(value, expected)


def _type_name(expected: Any):
    return getattr(expected, "__name__", repr(expected))
