from monkey.interpreter import parse_program, Interpreter


def test_program_10_array_builtins(capsys):
    with open('examples/program_10.monkey', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    interp.run(ast)
    out_lines = capsys.readouterr().out.strip().split('\n')
    # push copies; rest of an empty array and out-of-range indexes are null
    assert out_lines == ['[1, 2, 3]', '[1, 2, 3, 4]', '1', '4', '[2, 3, 4]', 'null', 'null', 'null']
