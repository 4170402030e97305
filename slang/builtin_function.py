from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from .errors import CallError, TypeMismatchError
from .types import ArrayVal, to_string, type_name


@dataclass
class BuiltinFunction:
    name: str
    arity: Optional[int]  # None means variadic
    fn: Callable[[List[Any]], Any]

    def __repr__(self) -> str:
        return f"<builtin {self.name}>"


def builtin_len(args: List[Any]) -> Any:
    value = args[0]
    if isinstance(value, ArrayVal):
        return float(len(value.items))
    if isinstance(value, str):
        return float(len(value))
    raise TypeMismatchError(f'len expects Array or String, got {type_name(value)}')


def builtin_str(args: List[Any]) -> Any:
    return to_string(args[0])


def builtin_num(args: List[Any]) -> Any:
    value = args[0]
    if isinstance(value, float):
        return value
    if not isinstance(value, str):
        raise TypeMismatchError(f'num expects String, got {type_name(value)}')
    try:
        return float(value)
    except ValueError:
        raise CallError(f'cannot parse number from {value!r}')


def builtin_type(args: List[Any]) -> Any:
    return type_name(args[0])


def default_builtins() -> Dict[str, BuiltinFunction]:
    return {
        'len': BuiltinFunction('len', 1, builtin_len),
        'str': BuiltinFunction('str', 1, builtin_str),
        'num': BuiltinFunction('num', 1, builtin_num),
        'type': BuiltinFunction('type', 1, builtin_type),
    }
