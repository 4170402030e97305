from slang.interpreter import parse_program, Interpreter


def test_program_scope_modify(example_source):
    """The block reassigns an outer variable and declares an inner one.

    The outer binding keeps the new value after the block; the inner one
    disappears with the block's scope.
    """
    ast = parse_program(example_source('scope_modify.slang'))
    interp = Interpreter()
    assert interp.run(ast) == 2
    assert not interp.global_env.is_bound('y')
    assert interp.global_env.depth == 1
