from monkey.interpreter import parse_program, Interpreter


def test_program_3_fibonacci(capsys):
    with open('examples/program_3.monkey', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    interp.run(ast)
    out = capsys.readouterr().out.strip()
    assert out == '610'
