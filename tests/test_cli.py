import io
import sys

import pytest

from toyc.cli import (
    EXIT_FILE_ERROR,
    EXIT_PARSER_ERROR,
    EXIT_RUNTIME_ERROR,
    EXIT_SCANNER_ERROR,
    EXIT_SUCCESS,
    EXIT_USAGE,
    RULE,
    main,
)
from tests.test_util import data_file


@pytest.mark.parametrize("argv", [[], ["a.tl", "b.tl"]])
def test_usage(argv, capsys):
    assert main(argv) == EXIT_USAGE
    captured = capsys.readouterr()
    assert "usage: toyc" in captured.err
    assert captured.out == ""


def test_missing_file(tmp_path, capsys):
    path = str(tmp_path / "missing.tl")
    assert main([path]) == EXIT_FILE_ERROR
    assert f'**Error. File "{path}":' in capsys.readouterr().out


def test_success(tmp_path, capsys):
    path = tmp_path / "add.tl"
    path.write_text("func main() { int a; a = 3 + 4; print a; }")
    assert main([str(path)]) == EXIT_SUCCESS

    out = capsys.readouterr().out
    assert out == "\n".join(
        [
            "Program Parsed Successfully.",
            RULE,
            "%func main()",
            "%int a",
            "%int _temp1",
            "%add _temp1, 3, 4",
            "%mov a, _temp1",
            "%int _temp2",
            "%mov _temp2, a",
            "%out _temp2",
            "%endfunc",
            RULE,
            "7",
            "",
        ]
    )


def test_reads_stdin(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("40 2\n"))
    assert main([data_file("valid", "sum.tl")]) == EXIT_SUCCESS
    assert capsys.readouterr().out.endswith(RULE + "\n42\n")


def test_scanner_error(capsys):
    assert main([data_file("invalid", "lonely_bang.tl")]) == EXIT_SCANNER_ERROR
    out = capsys.readouterr().out
    assert out.startswith("**Error**\n")
    assert "Lexer Error: ScannerError: Unrecognized symbol '!'" in out
    assert "Program Parsed Successfully." not in out


def test_parser_error(capsys):
    assert main([data_file("invalid", "no_main.tl")]) == EXIT_PARSER_ERROR
    out = capsys.readouterr().out
    assert "Parser Error: ParseError: Main function not detected in the program." in out


def test_runtime_error(capsys):
    assert main([data_file("invalid", "division.tl")]) == EXIT_RUNTIME_ERROR
    out = capsys.readouterr().out
    assert out.startswith("Program Parsed Successfully.")
    assert "Runtime Error: RuntimeError: Division by zero" in out


def test_ir_file(capsys):
    assert main([data_file("ir", "countdown.ir")]) == EXIT_SUCCESS
    assert capsys.readouterr().out == "3\n2\n1\n"


def test_malformed_ir_file(tmp_path, capsys):
    path = tmp_path / "broken.ir"
    path.write_text("%func main()\n%bogus 1\n%endfunc\n")
    assert main([str(path)]) == EXIT_RUNTIME_ERROR
    assert "unknown instruction '%bogus'" in capsys.readouterr().out


def test_deeply_nested_program(tmp_path, capsys):
    path = tmp_path / "nested.tl"
    path.write_text("func main() { int a; a = " + "(" * 2000 + "1" + ")" * 2000 + "; }")
    assert main([str(path)]) == EXIT_PARSER_ERROR
    assert "Parser Error: ParseError: Program is nested too deeply" in capsys.readouterr().out
