import argparse
import sys
from typing import List, Optional

from toyc.error.interpreter_error import InterpreterException
from toyc.error.parser_error import ParserException
from toyc.error.scanner_error import ScannerException
from toyc.interpreter.interpreter import Interpreter
from toyc.ir.program import Program
from toyc.ir.reader import IRReader
from toyc.parser.parser import Parser
from toyc.scanner.scanner import Scanner

EXIT_SUCCESS = 0
EXIT_FILE_ERROR = 1
EXIT_USAGE = 2
EXIT_SCANNER_ERROR = 3
EXIT_PARSER_ERROR = 4
EXIT_RUNTIME_ERROR = 5

RULE = "-" * 44


def compile_source(program: str) -> Program:
    """Scan and translate a source program into IR."""
    scanner = Scanner(program)
    tokens = scanner.scan()

    parser = Parser(program)
    return parser.parse(tokens)


def report(stage: str, exception: Exception) -> None:
    print("**Error**")
    print("----------------------")
    print(f"{stage} Error: {str(exception).strip()}")
    print("----------------------")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="toyc",
        description="Compile a program to IR and execute it. Files ending in .ir are executed directly.",
    )
    parser.add_argument("file", help="the source (or .ir) file to run")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    try:
        args = build_parser().parse_args(argv)
    except SystemExit as exc:
        return EXIT_USAGE if exc.code else EXIT_SUCCESS

    try:
        with open(args.file, "r", encoding="utf8") as f:
            text = f.read()
    except OSError as exc:
        print(f'**Error. File "{args.file}": {exc}')
        return EXIT_FILE_ERROR

    if args.file.endswith(".ir"):
        try:
            program = IRReader(text).read()
        except InterpreterException as exc:
            report("Runtime", exc)
            return EXIT_RUNTIME_ERROR
    else:
        try:
            program = compile_source(text)
        except ScannerException as exc:
            report("Lexer", exc)
            return EXIT_SCANNER_ERROR
        except ParserException as exc:
            report("Parser", exc)
            return EXIT_PARSER_ERROR

        print("Program Parsed Successfully.")
        print(RULE)
        print(program)
        print(RULE)

    # Keep the program output in order with anything printed above
    sys.stdout.flush()
    try:
        Interpreter(program).run()
    except InterpreterException as exc:
        report("Runtime", exc)
        return EXIT_RUNTIME_ERROR
    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
