import io

from monkey.repl import MONKEY_FACE, Shell


def run_lines(*lines):
    out = io.StringIO()
    shell = Shell(stdout=out)
    for line in lines:
        shell.onecmd(line)
    return out.getvalue()


def test_prints_inspected_result():
    assert run_lines("1 + 2 * 3") == "7\n"
    assert run_lines('"mon" + "key"') == "monkey\n"
    assert run_lines("[1, true, fn(x) { x }]") == "[1, true, fn(x) { x }]\n"


def test_each_line_has_a_fresh_environment():
    out = run_lines("let x = 5;", "x")
    assert out.startswith("5\n")
    assert "identifier not found: x" in out


def test_parser_errors_banner():
    out = run_lines("let = 1")
    assert out == (
        MONKEY_FACE
        + "Woops! We ran into some monkey business here!\n"
        + " parser errors:\n"
        + "\texpected next token to be IDENT, got ASSIGN instead\n"
    )


def test_runtime_errors_banner():
    out = run_lines("5 + true")
    assert out.endswith(" runtime errors:\n\tunknown operator: INTEGER + BOOLEAN\n")
    assert "Woops! We ran into some monkey business here!" in out


def test_runaway_recursion_is_reported():
    out = run_lines("let f = fn(n) { f(n + 1) }; f(0)")
    assert out.endswith("\tmaximum recursion depth exceeded\n")


def test_puts_output_goes_to_stdout(capsys):
    out = run_lines('puts("hi")')
    assert capsys.readouterr().out == "hi\n"
    assert out == "null\n"


def test_empty_line_and_exit():
    out = io.StringIO()
    shell = Shell(stdout=out)
    assert not shell.onecmd("")
    assert shell.onecmd("exit")
    assert shell.onecmd("EOF")
    assert out.getvalue() == "\n"


def test_cmdloop_reads_until_eof():
    stdin = io.StringIO("let a = 2; a * a\n\n")
    out = io.StringIO()
    shell = Shell(stdin=stdin, stdout=out)
    shell.use_rawinput = False
    shell.cmdloop(intro="")
    assert "4\n" in out.getvalue()


def test_deeply_nested_input():
    assert run_lines('(' * 300 + '1' + ')' * 300) == "1\n"


def test_nesting_beyond_the_limit_is_a_parser_error():
    out = run_lines('(' * 20000 + '1' + ')' * 20000)
    assert out.endswith(" parser errors:\n\texpression nested too deeply\n")


def test_lines_starting_with_command_names_are_monkey_source():
    assert run_lines("help + 1").endswith("\tidentifier not found: help\n")
    assert run_lines("exit(1)").endswith("\tidentifier not found: exit\n")
    assert run_lines("let help = 2; help * 3") == "6\n"
