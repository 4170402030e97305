import math

import pytest

from slang import types
from slang.errors import DivisionByZeroError, ShapeError, TypeMismatchError
from slang.types import ArrayVal, to_string, type_name


def test_type_names():
    assert type_name(1.0) == 'Number'
    assert type_name('a') == 'String'
    assert type_name(True) == 'Boolean'
    assert type_name(ArrayVal([])) == 'Array'


@pytest.mark.parametrize('value, text', [
    (20.0, '20'),
    (-2.0, '-2'),
    (2.5, '2.5'),
    (3 - 4 / 3, repr(3 - 4 / 3)),
    ('verbatim "text"', 'verbatim "text"'),
    (True, 'true'),
    (False, 'false'),
    (ArrayVal([1.0, 'a', ArrayVal([False])]), '[1, a, [false]]'),
    (ArrayVal([]), '[]'),
])
def test_to_string(value, text):
    assert to_string(value) == text


def test_addition_and_concatenation():
    assert types.add(2.0, 3.0) == 5.0
    assert types.add('foo', 'bar') == 'foobar'
    assert types.add(ArrayVal([1.0]), ArrayVal([2.0])) == ArrayVal([1.0, 2.0])


@pytest.mark.parametrize('a, b', [
    ('a', 1.0),
    (1.0, 'a'),
    (True, 1.0),
    (ArrayVal([]), 'a'),
])
def test_addition_rejects_mixed_variants(a, b):
    with pytest.raises(TypeMismatchError):
        types.add(a, b)


@pytest.mark.parametrize('fn', [types.subtract, types.multiply, types.divide, types.modulus])
def test_arithmetic_needs_numbers(fn):
    with pytest.raises(TypeMismatchError):
        fn('a', 'b')
    with pytest.raises(TypeMismatchError):
        fn(True, 1.0)


def test_division_and_modulus():
    assert types.divide(7.0, 2.0) == 3.5
    assert types.modulus(7.0, 3.0) == 1.0
    assert types.modulus(-7.0, 3.0) == -1.0
    with pytest.raises(DivisionByZeroError):
        types.divide(1.0, 0.0)
    with pytest.raises(DivisionByZeroError):
        types.modulus(1.0, -0.0)


def test_unary_operators():
    assert types.negate(2.0) == -2.0
    assert types.logical_not(False) is True
    with pytest.raises(TypeMismatchError):
        types.negate('a')
    with pytest.raises(TypeMismatchError):
        types.logical_not(0.0)


def test_equality_is_variant_strict():
    assert types.equal(1.0, 1.0) is True
    assert types.not_equal('a', 'b') is True
    assert types.equal(ArrayVal([1.0, 'x']), ArrayVal([1.0, 'x'])) is True
    # elements of different variants are unequal rather than an error
    assert types.equal(ArrayVal([1.0]), ArrayVal([True])) is False
    with pytest.raises(TypeMismatchError):
        types.equal(1.0, '1')
    with pytest.raises(TypeMismatchError):
        types.not_equal(True, 1.0)


def test_no_epsilon_in_float_comparison():
    assert types.equal(0.1 + 0.2, 0.3) is False
    assert types.less(0.3, 0.1 + 0.2) is True


def test_ordering():
    assert types.less(1.0, 2.0) is True
    assert types.greater('b', 'a') is True
    assert types.less_equal(2.0, 2.0) is True
    assert types.greater_equal(1.0, 2.0) is False
    with pytest.raises(TypeMismatchError):
        types.less(1.0, 'a')
    with pytest.raises(TypeMismatchError):
        types.greater(ArrayVal([]), ArrayVal([]))


def test_logical_operators_need_booleans():
    assert types.logical_and(True, False) is False
    assert types.logical_or(True, False) is True
    with pytest.raises(TypeMismatchError):
        types.logical_and(1.0, True)
    with pytest.raises(TypeMismatchError):
        types.logical_or(True, 'yes')


def test_index():
    arr = ArrayVal([10.0, 20.0, 30.0])
    assert types.index(arr, 0.0) == 10.0
    assert types.index(arr, -1.0) == 30.0
    assert types.index('abc', 1.0) == 'b'
    with pytest.raises(ShapeError):
        types.index(arr, 3.0)
    with pytest.raises(ShapeError):
        types.index(arr, 0.5)
    with pytest.raises(ShapeError):
        types.index(arr, math.inf)
    with pytest.raises(TypeMismatchError):
        types.index(arr, '0')
    with pytest.raises(TypeMismatchError):
        types.index(5.0, 0.0)


def test_access():
    arr = ArrayVal([1.0, 2.0])
    assert types.access(arr, 'length') == 2.0
    assert types.access(arr, 'first') == 1.0
    assert types.access(arr, 'last') == 2.0
    assert types.access('Hi', 'upper') == 'HI'
    assert types.access('Hi', 'length') == 2.0
    with pytest.raises(ShapeError):
        types.access(ArrayVal([]), 'first')
    with pytest.raises(ShapeError):
        types.access(arr, 'size')
    with pytest.raises(ShapeError):
        types.access(1.0, 'length')
