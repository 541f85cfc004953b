from monkey.interpreter import parse_program, Interpreter


def test_program_6_hashes(capsys):
    with open('examples/program_6.monkey', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    interp.run(ast)
    out_lines = capsys.readouterr().out.strip().split('\n')
    assert out_lines == ['Alice', '30', 'one', 'yes', '2', 'null']
