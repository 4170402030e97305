from slang.interpreter import parse_program, Interpreter


def test_program_fizzbuzz(example_source, capsys):
    ast = parse_program(example_source('fizzbuzz.slang'))
    interp = Interpreter()
    interp.run(ast)
    out_lines = capsys.readouterr().out.strip().split('\n')
    expected = [
        '1', '2', 'Fizz', '4', 'Buzz', 'Fizz', '7', '8', 'Fizz', 'Buzz',
        '11', 'Fizz', '13', '14', 'FizzBuzz',
    ]
    assert out_lines == expected
