from monkey.interpreter import parse_program, Interpreter


def test_program_12_countdown(capsys):
    with open('examples/program_12.monkey', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    interp.run(ast)
    out_lines = capsys.readouterr().out.strip().split('\n')
    assert out_lines == ['3', '2', '1', '3628800']
