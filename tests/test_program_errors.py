import pytest

from slang.errors import TypeMismatchError
from slang.interpreter import parse_program, Interpreter, run_file


def test_program_error1(example_source):
    ast = parse_program(example_source('error1.slang'))
    with pytest.raises(TypeMismatchError) as excinfo:
        Interpreter().run(ast)
    assert excinfo.value.line == 2
    assert 'x' in excinfo.value.message


def test_program_scope_typecheck(example_path):
    with pytest.raises(TypeMismatchError) as excinfo:
        run_file(str(example_path('scope_typecheck.slang')))
    assert excinfo.value.line == 8
    assert str(excinfo.value).startswith('TypeMismatchError [line 8]:')
