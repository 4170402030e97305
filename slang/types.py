"""Runtime values and the operations defined over them.

Slang values are represented with plain Python objects:

* ``Number``  -> ``float``
* ``String``  -> ``str``
* ``Boolean`` -> ``bool``
* ``Array``   -> `ArrayVal`

Each operator is a function taking already evaluated operands. An operand
combination that an operator does not define raises `TypeMismatchError`;
there is no implicit coercion between variants.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List
import math

from .errors import DivisionByZeroError, ShapeError, TypeMismatchError


@dataclass
class ArrayVal:
    """Represents a Slang array value."""
    items: List[Any]

    def __repr__(self) -> str:
        return f"Array({self.items!r})"


def is_number(value: Any) -> bool:
    # bool is a subclass of int, never of float
    return isinstance(value, float)


def type_name(value: Any) -> str:
    """Return the Slang variant name of a runtime value."""
    if isinstance(value, bool):
        return 'Boolean'
    if isinstance(value, float):
        return 'Number'
    if isinstance(value, str):
        return 'String'
    if isinstance(value, ArrayVal):
        return 'Array'
    return type(value).__name__


def format_number(n: float) -> str:
    if math.isfinite(n) and n == int(n):
        return str(int(n))
    return repr(n)


def to_string(value: Any) -> str:
    """Convert a value to the text a print statement emits."""
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float):
        return format_number(value)
    if isinstance(value, str):
        return value
    if isinstance(value, ArrayVal):
        return '[' + ', '.join(to_string(item) for item in value.items) + ']'
    return str(value)


def describe(value: Any) -> str:
    """Variant and value, for error messages."""
    if isinstance(value, str):
        return f'String {value!r}'
    return f'{type_name(value)} {to_string(value)}'


def _mismatch(op: str, a: Any, b: Any) -> TypeMismatchError:
    return TypeMismatchError(f'unsupported operand types for {op}: {type_name(a)} and {type_name(b)}')


def add(a: Any, b: Any) -> Any:
    if is_number(a) and is_number(b):
        return a + b
    if isinstance(a, str) and isinstance(b, str):
        return a + b
    if isinstance(a, ArrayVal) and isinstance(b, ArrayVal):
        return ArrayVal(a.items + b.items)
    raise _mismatch('+', a, b)


def subtract(a: Any, b: Any) -> Any:
    if is_number(a) and is_number(b):
        return a - b
    raise _mismatch('-', a, b)


def multiply(a: Any, b: Any) -> Any:
    if is_number(a) and is_number(b):
        return a * b
    raise _mismatch('*', a, b)


def divide(a: Any, b: Any) -> Any:
    if is_number(a) and is_number(b):
        if b == 0.0:
            raise DivisionByZeroError('division by zero')
        return a / b
    raise _mismatch('/', a, b)


def modulus(a: Any, b: Any) -> Any:
    if is_number(a) and is_number(b):
        if b == 0.0:
            raise DivisionByZeroError('modulus by zero')
        # truncated remainder: the sign follows the dividend
        return math.fmod(a, b)
    raise _mismatch('%', a, b)


def negate(a: Any) -> Any:
    if is_number(a):
        return -a
    raise TypeMismatchError(f'unary - expects Number, got {type_name(a)}')


def logical_not(a: Any) -> Any:
    if isinstance(a, bool):
        return not a
    raise TypeMismatchError(f'! expects Boolean, got {type_name(a)}')


def values_equal(a: Any, b: Any) -> bool:
    """Structural equality. Values of different variants are never equal."""
    if type_name(a) != type_name(b):
        return False
    if isinstance(a, ArrayVal):
        if len(a.items) != len(b.items):
            return False
        return all(values_equal(x, y) for x, y in zip(a.items, b.items))
    return a == b


def equal(a: Any, b: Any) -> bool:
    if type_name(a) != type_name(b):
        raise _mismatch('==', a, b)
    return values_equal(a, b)


def not_equal(a: Any, b: Any) -> bool:
    if type_name(a) != type_name(b):
        raise _mismatch('!=', a, b)
    return not values_equal(a, b)


def _ordered(op: str, a: Any, b: Any) -> None:
    if is_number(a) and is_number(b):
        return
    if isinstance(a, str) and isinstance(b, str):
        return
    raise _mismatch(op, a, b)


def less(a: Any, b: Any) -> bool:
    _ordered('<', a, b)
    return a < b


def greater(a: Any, b: Any) -> bool:
    _ordered('>', a, b)
    return a > b


def less_equal(a: Any, b: Any) -> bool:
    _ordered('<=', a, b)
    return a <= b


def greater_equal(a: Any, b: Any) -> bool:
    _ordered('>=', a, b)
    return a >= b


def logical_and(a: Any, b: Any) -> bool:
    if isinstance(a, bool) and isinstance(b, bool):
        return a and b
    raise _mismatch('and', a, b)


def logical_or(a: Any, b: Any) -> bool:
    if isinstance(a, bool) and isinstance(b, bool):
        return a or b
    raise _mismatch('or', a, b)


def index(target: Any, idx: Any) -> Any:
    """Element ``idx`` of an array, or the character at ``idx`` of a string.

    Negative indices count from the end.
    """
    if not isinstance(target, (ArrayVal, str)):
        raise TypeMismatchError(f'cannot index {type_name(target)}')
    if not is_number(idx):
        raise TypeMismatchError(f'index must be Number, got {type_name(idx)}')
    if not math.isfinite(idx) or idx != int(idx):
        raise ShapeError(f'index {format_number(idx)} is not a whole number')
    items = target.items if isinstance(target, ArrayVal) else target
    i = int(idx)
    if i < 0:
        i += len(items)
    if i < 0 or i >= len(items):
        raise ShapeError(f'index {format_number(idx)} out of range for length {len(items)}')
    return items[i]


def _first(arr: ArrayVal) -> Any:
    if not arr.items:
        raise ShapeError('first of empty array')
    return arr.items[0]


def _last(arr: ArrayVal) -> Any:
    if not arr.items:
        raise ShapeError('last of empty array')
    return arr.items[-1]


ARRAY_FIELDS: Dict[str, Callable[[ArrayVal], Any]] = {
    'length': lambda arr: float(len(arr.items)),
    'first': _first,
    'last': _last,
}

STRING_FIELDS: Dict[str, Callable[[str], Any]] = {
    'length': lambda s: float(len(s)),
    'upper': lambda s: s.upper(),
    'lower': lambda s: s.lower(),
}


def access(target: Any, field: str) -> Any:
    """Look up a named field of a value."""
    if isinstance(target, ArrayVal):
        fields = ARRAY_FIELDS
    elif isinstance(target, str):
        fields = STRING_FIELDS
    else:
        raise ShapeError(f'{type_name(target)} has no field {field}')
    if field not in fields:
        raise ShapeError(f'{type_name(target)} has no field {field}')
    return fields[field](target)
