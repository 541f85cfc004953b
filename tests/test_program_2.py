from monkey.interpreter import parse_program, Interpreter


def test_program_2_arithmetic(capsys):
    with open('examples/program_2.monkey', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    interp.run(ast)
    out_lines = capsys.readouterr().out.strip().split('\n')
    # -7 / 2 truncates toward zero
    assert out_lines == ['25', '30', '-3', '55']
