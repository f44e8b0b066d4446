import os

from tests.generation.util import execute, execute_file
from tests.test_util import open_file


def test_valid_programs(valid_file: str):
    expected = open_file(os.path.splitext(valid_file)[0] + ".out")
    assert execute_file(valid_file) == expected


def test_while_with_break():
    program = """
    func main() {
        int i;
        i = 0;
        while i < 10 {
            if i == 3 {
                break;
            }
            print i;
            i = i + 1;
        }
        print i;
    }
    """
    assert execute(program) == "0\n1\n2\n3\n"


def test_nested_loops():
    program = """
    func main() {
        int i;
        int j;
        int count;
        while i < 3 {
            j = 0;
            while j < 4 {
                if j == 2 {
                    j = j + 1;
                    continue;
                }
                count = count + 1;
                j = j + 1;
            }
            i = i + 1;
        }
        print count;
    }
    """
    assert execute(program) == "9\n"


def test_else_if_chain():
    program = """
    func grade(int score) {
        if score >= 90 {
            return 1;
        } else if score >= 70 {
            return 2;
        } else if score >= 50 {
            return 3;
        } else {
            return 4;
        }
    }

    func main() {
        print grade(95);
        print grade(70);
        print grade(51);
        print grade(0);
    }
    """
    assert execute(program) == "1\n2\n3\n4\n"


def test_calls_as_arguments_and_indices():
    program = """
    func double(int x) {
        return x * 2;
    }

    func main() {
        int [5] a;
        a[double(2)] = double(double(3));
        print a[4];
    }
    """
    assert execute(program) == "12\n"


def test_echo_input():
    program = """
    func main() {
        int n;
        int x;
        read n;
        while n > 0 {
            read x;
            print x * x;
            n = n - 1;
        }
    }
    """
    assert execute(program, "3\n1 2\n3\n") == "1\n4\n9\n"


def test_declaration_in_skipped_if_body():
    program = """
    func main() {
        int c;
        c = 0;
        if c > 0 {
            int x;
            x = 1;
        }
        x = 2;
        print x;
    }
    """
    assert execute(program) == "2\n"


def test_declaration_in_loop_that_never_runs():
    program = """
    func main() {
        int n;
        while n > 0 {
            int [3] y;
            y[0] = n;
            n = n - 1;
        }
        y[1] = 5;
        print y[0] + y[1];
    }
    """
    assert execute(program) == "5\n"


def test_declaration_in_called_function_branch():
    program = """
    func pick(int flag) {
        if flag == 1 {
            int r;
            r = 10;
        }
        return r;
    }

    func main() {
        print pick(0);
        print pick(1);
    }
    """
    assert execute(program) == "0\n10\n"
