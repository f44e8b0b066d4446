import io
import os

from toyc.interpreter.interpreter import Interpreter
from toyc.ir.program import Program
from toyc.parser.parser import Parser
from toyc.scanner.scanner import Scanner
from tests.test_util import open_file


def compile_program(program: str) -> Program:
    scanner = Scanner(program)
    tokens = scanner.scan()

    parser = Parser(program)
    return parser.parse(tokens)


def run(ir: Program, stdin: str = "", **kwargs) -> str:
    output = io.StringIO()
    interpreter = Interpreter(ir, stdin=io.StringIO(stdin), stdout=output, **kwargs)
    interpreter.run()
    return output.getvalue()


def execute(program: str, stdin: str = "") -> str:
    return run(compile_program(program), stdin)


def execute_file(filename: str) -> str:
    """Execute a program, feeding it the sibling `.in` file as input if there is one."""
    program: str = open_file(filename)
    input_file = os.path.splitext(filename)[0] + ".in"
    stdin = open_file(input_file) if os.path.exists(input_file) else ""
    return execute(program, stdin)
