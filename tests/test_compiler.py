import pytest

from toyc.cli import compile_source
from toyc.error.error import CompilerException
from toyc.error.interpreter_error import InterpreterException
from toyc.error.parser_error import ParserException
from toyc.error.scanner_error import ScannerException
from tests.generation.util import execute, run
from tests.test_util import data_file, open_file

programs = [
    ### Declarations
    (
        """
func main() {
    int a;
    int [3] b;
    print a;
    print b[2];
}
""",
        "0\n0\n",
    ),
    (
        """
func main() {
    int a;
    a = 3 + 4;
    print a;
}
""",
        "7\n",
    ),
    ### Functions
    (
        """
func max(int a, int b) {
    if a > b {
        return a;
    }
    return b;
}

func main() {
    print max(3, 9);
    print max(9, 3);
    print max(max(1, 2), max(4, 3));
}
""",
        "9\n9\n4\n",
    ),
    (
        """
func fib(int n) {
    if n < 2 {
        return n;
    }
    return fib(n - 1) + fib(n - 2);
}

func main() {
    print fib(15);
}
""",
        "610\n",
    ),
    (
        """
func zero() {
    return 0;
}

func main() {
    print zero() + 1;
}
""",
        "1\n",
    ),
    ### Arrays
    (
        """
func main() {
    int [5] a;
    int i;
    while i < 5 {
        a[i] = i * i;
        i = i + 1;
    }
    i = 4;
    while i >= 0 {
        print a[i];
        i = i - 1;
    }
}
""",
        "16\n9\n4\n1\n0\n",
    ),
    (
        """
func main() {
    int [2][2][2] cube;
    cube[1][0][1] = 5;
    cube[0][1][1] = 3;
    print cube[1][0][1] - cube[0][1][1];
}
""",
        "2\n",
    ),
    (
        """
func main() {
    int [3] a;
    int [3] b;
    a[0] = 1;
    a[1] = 2;
    a[2] = 3;
    b = a;
    print b[0] + b[1] + b[2];
}
""",
        "6\n",
    ),
    ### Control flow
    (
        """
func main() {
    int i;
    while i < 100 {
        i = i + 1;
        if i % 3 != 0 {
            continue;
        }
        if i > 10 {
            break;
        }
        print i;
    }
}
""",
        "3\n6\n9\n",
    ),
    (
        """
func collatz(int n) {
    int steps;
    while n != 1 {
        if n % 2 == 0 {
            n = n / 2;
        } else {
            n = 3 * n + 1;
        }
        steps = steps + 1;
    }
    return steps;
}

func main() {
    print collatz(27);
}
""",
        "111\n",
    ),
    (
        """
func main() {
    # Comments may appear anywhere
    int a; # after code too
    a = 2147483647;
    a = a + 1;
    print a;
    print a - 1;
}
""",
        "-2147483648\n2147483647\n",
    ),
]


@pytest.mark.parametrize("program, expected", programs)
def test_program(program: str, expected: str):
    predicted = execute(program)
    assert predicted == expected


@pytest.mark.parametrize(
    "filename, stage",
    [
        ("lonely_bang.tl", ScannerException),
        ("no_main.tl", ParserException),
        ("duplicate.tl", ParserException),
        ("division.tl", InterpreterException),
    ],
)
def test_invalid_program(filename: str, stage):
    program: str = open_file(data_file("invalid", filename))
    with pytest.raises(stage):
        run(compile_source(program))


def test_stage_exceptions_share_base():
    for stage in (ScannerException, ParserException, InterpreterException):
        assert issubclass(stage, CompilerException)


def test_compilation_is_deterministic(valid_file: str):
    program: str = open_file(valid_file)
    assert str(compile_source(program)) == str(compile_source(program))
