"""Handles interactive mode for the Monkey interpreter. Uses cmd as backend."""

import cmd

from .environment import Environment
from .errors import MonkeyError
from .interpreter import Interpreter
from .objects import Error, inspect
from .parser import parse_program

MONKEY_FACE = '\n'.join([
    "            __,__",
    ".--.  .-\"     \"-.  .--.",
    "/ .. \\/  .-. .-.  \\/ .. \\",
    "| |  '|  /   Y   \\  |'  | |",
    "| \\   \\  \\ 0 | 0 /  /   / |",
    "\\ '- ,\\.-\"\"\"\"\"\"\"-./, -' /",
    "   ''-' /_   ^ ^   _\\ '-''",
    "       |  \\._   _./  |",
    "       \\   \\ '~' /   /",
    "        '._ '-=-' _.'",
    "           '-----'",
]) + '\n'


class Shell(cmd.Cmd):
    """Monkey read-eval-print shell; every line runs as its own program."""
    intro = "Hello! This is the Monkey programming language!\nFeel free to type in commands"
    prompt = ">> "

    def __init__(self, interpreter=None, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.interpreter = interpreter if interpreter is not None else Interpreter()

    def onecmd(self, line):
        # Only the bare words are shell commands; every other line is Monkey
        # source, even one that starts with `exit` or `help`.
        command = line.strip()
        if command in ('exit', 'help', 'EOF'):
            return super().onecmd(command)
        if not command:
            return self.emptyline()
        return self.default(line)

    def default(self, line):
        """Evaluates one line of Monkey source."""
        try:
            program = parse_program(line)
        except MonkeyError as e:
            self.report('parser', e.message)
            return
        try:
            result = self.interpreter.run(program, Environment())
        except RecursionError:  # cmd.Cmd would otherwise exit the loop
            self.report('runtime', 'maximum recursion depth exceeded')
            return
        if isinstance(result, Error):
            self.report('runtime', result.message)
            return
        self.stdout.write(inspect(result) + '\n')

    def report(self, stage, message):
        self.stdout.write(MONKEY_FACE)
        self.stdout.write("Woops! We ran into some monkey business here!\n")
        self.stdout.write(f" {stage} errors:\n")
        self.stdout.write(f"\t{message}\n")

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        self.stdout.write(
            "Type a Monkey expression or statement, e.g. 'let add = fn(a, b) { a + b }; add(1, 2)'.\n"
            "Each line is evaluated on its own. Built-ins: len, first, last, rest, push, puts.\n"
            "Type 'exit' or press Ctrl-D to leave.\n"
        )

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        self.stdout.write('\n')
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
