import pytest

from slang.environment import Environment
from slang.errors import TypeMismatchError, UndefinedVariableError, UninitializedVariableError
from slang.types import ArrayVal


def test_alias_declaration_binds_in_innermost_scope():
    env = Environment()
    env.push()
    env.declare('x', 1.0, alias=True)
    assert env.scopes[-1] == {'x': 1.0}
    assert env.scopes[0] == {}


def test_lookup_walks_innermost_first():
    env = Environment()
    env.declare('x', 1.0, alias=True)
    env.push()
    env.scopes[-1]['x'] = 2.0
    assert env.get('x') == 2.0
    env.pop()
    assert env.get('x') == 1.0


def test_reassignment_updates_innermost_binding():
    env = Environment()
    env.declare('x', 1.0, alias=True)
    env.push()
    env.scopes[-1]['x'] = 2.0
    env.declare('x', 3.0, alias=False)
    assert env.scopes == [{'x': 1.0}, {'x': 3.0}]


def test_reassignment_reaches_outer_scope():
    env = Environment()
    env.declare('x', 1.0, alias=True)
    with env.scope():
        env.declare('x', 5.0, alias=False)
    assert env.get('x') == 5.0


def test_type_stable_reassignment():
    env = Environment()
    env.declare('x', 5.0, alias=True)
    with pytest.raises(TypeMismatchError) as excinfo:
        env.declare('x', 's', alias=False)
    assert "String 's'" in excinfo.value.message
    assert 'Number 5' in excinfo.value.message
    env.declare('x', 6.0, alias=False)
    assert env.get('x') == 6.0


def test_alias_allows_variant_change():
    env = Environment()
    env.declare('x', 5.0, alias=True)
    env.declare('x', ArrayVal([]), alias=True)
    assert env.get('x') == ArrayVal([])


def test_assignment_to_undeclared_name():
    env = Environment()
    with pytest.raises(UninitializedVariableError) as excinfo:
        env.declare('nope', 1.0, alias=False)
    assert excinfo.value.variable == 'nope'
    assert not env.is_bound('nope')


def test_undefined_variable_carries_snapshot():
    env = Environment()
    env.declare('a', 1.0, alias=True)
    with pytest.raises(UndefinedVariableError) as excinfo:
        env.get('b')
    assert excinfo.value.variable == 'b'
    assert excinfo.value.snapshot == [{'a': 1.0}]


def test_scope_is_dropped_on_error():
    env = Environment()
    with pytest.raises(ZeroDivisionError):
        with env.scope():
            env.push()
            env.declare('inner', 1.0, alias=True)
            1 / 0
    assert env.depth == 1
    assert not env.is_bound('inner')


def test_outermost_scope_cannot_be_popped():
    env = Environment()
    with pytest.raises(RuntimeError):
        env.pop()
