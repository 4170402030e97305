from slang.interpreter import parse_program, Interpreter


def test_program_while1_runs_body_ten_times(example_source):
    ast = parse_program(example_source('while1.slang'))
    interp = Interpreter()
    assert interp.run(ast) == 10
    assert interp.global_env.get('count') == 0
