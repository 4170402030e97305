from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

from .errors import TypeMismatchError, UndefinedVariableError, UninitializedVariableError
from .types import describe, type_name


class Environment:
    """A stack of scopes mapping names to values.

    ``scopes[0]`` is the outermost scope and ``scopes[-1]`` the current one.
    Lookups and reassignments both walk innermost-first, so they always agree
    on which binding a name refers to.
    """
    def __init__(self):
        self.scopes: List[Dict[str, Any]] = [{}]

    @property
    def depth(self) -> int:
        return len(self.scopes)

    def find_scope(self, name: str) -> Optional[Dict[str, Any]]:
        for scope in reversed(self.scopes):
            if name in scope:
                return scope
        return None

    def is_bound(self, name: str) -> bool:
        return self.find_scope(name) is not None

    def get(self, name: str) -> Any:
        scope = self.find_scope(name)
        if scope is None:
            raise UndefinedVariableError(name, self.snapshot())
        return scope[name]

    def declare(self, name: str, value: Any, alias: bool):
        """Bind ``name`` to ``value``.

        An existing binding is overwritten in the scope it lives in, provided
        the new value has the same variant or ``alias`` is set. Without an
        existing binding, ``alias`` creates one in the current scope and a
        plain assignment is an error.
        """
        scope = self.find_scope(name)
        if scope is not None:
            current = scope[name]
            if not alias and type_name(current) != type_name(value):
                raise TypeMismatchError(
                    f'mismatched types for {name}, cannot assign {describe(value)} to {describe(current)}')
            scope[name] = value
        elif alias:
            self.scopes[-1][name] = value
        else:
            raise UninitializedVariableError(name)

    def push(self):
        self.scopes.append({})

    def pop(self):
        if len(self.scopes) == 1:
            raise RuntimeError('cannot pop the outermost scope')
        self.scopes.pop()

    @contextmanager
    def scope(self) -> Iterator[Dict[str, Any]]:
        """Run the body inside a fresh innermost scope.

        The stack is restored to its previous depth however the body exits.
        """
        depth = len(self.scopes)
        self.push()
        try:
            yield self.scopes[-1]
        finally:
            del self.scopes[depth:]

    def snapshot(self) -> List[Dict[str, Any]]:
        return [dict(scope) for scope in self.scopes]

    def __repr__(self) -> str:
        return f"Environment({self.scopes!r})"
