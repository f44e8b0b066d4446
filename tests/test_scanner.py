import pytest

from toyc import Scanner, Token, Type
from toyc.error.scanner_error import ScannerException
from tests.test_util import data_file, open_file


def test_scan_expression():
    scanner = Scanner("1 + 2 + 3")
    tokens = scanner.scan()

    expected = [
        Token("1", Type.DIGIT),
        Token("+", Type.PLUS),
        Token("2", Type.DIGIT),
        Token("+", Type.PLUS),
        Token("3", Type.DIGIT),
        Token("", Type.END),
    ]
    assert tokens == expected
    assert [token.value for token in tokens if token.type == Type.DIGIT] == [1, 2, 3]


def test_empty():
    scanner = Scanner("")
    tokens = scanner.scan()
    assert tokens == [Token("", Type.END)]


def test_whitespace_and_comments_only():
    scanner = Scanner("  \n# nothing to see here\n\t\n")
    tokens = scanner.scan()
    assert tokens == [Token("", Type.END)]


def test_spans():
    scanner = Scanner("func main() {\n  int a;\n}")
    tokens = scanner.scan()

    a = tokens[6]
    assert a == Token("a", Type.ID)
    assert (a.span.start_ln, a.span.start_col, a.span.end_col) == (2, 6, 7)
    # The end token sits right after the last character
    assert tokens[-1].type == Type.END
    assert (tokens[-1].span.start_ln, tokens[-1].span.start_col) == (3, 1)


@pytest.mark.parametrize(
    "keyword, token_type",
    [
        ("func", Type.FUNC),
        ("return", Type.RETURN),
        ("int", Type.INT),
        ("print", Type.PRINT),
        ("read", Type.READ),
        ("while", Type.WHILE),
        ("if", Type.IF),
        ("else", Type.ELSE),
        ("break", Type.BREAK),
        ("continue", Type.CONTINUE),
    ],
)
def test_keywords(keyword: str, token_type: Type):
    tokens = Scanner(keyword).scan()
    assert tokens[0] == Token(keyword, token_type)


@pytest.mark.parametrize("identifier", ["funcs", "Int", "iff", "while_1", "x", "ok_"])
def test_keywords_match_exactly(identifier: str):
    tokens = Scanner(identifier).scan()
    assert tokens[0] == Token(identifier, Type.ID)


def test_operators():
    tokens = Scanner("< <= > >= == != = + - * / %").scan()
    assert [token.type for token in tokens] == [
        Type.LT,
        Type.LEQ,
        Type.GT,
        Type.GEQ,
        Type.DEQUALS,
        Type.NEQ,
        Type.EQ,
        Type.PLUS,
        Type.MINUS,
        Type.STAR,
        Type.SLASH,
        Type.PERCENT,
        Type.END,
    ]


def test_two_character_operators_without_spaces():
    tokens = Scanner("(a)<=(b)").scan()
    assert [token.text for token in tokens] == ["(", "a", ")", "<=", "(", "b", ")", ""]


def test_terminators():
    tokens = Scanner("f(a,b);x[1]{}").scan()
    assert [token.text for token in tokens] == [
        "f", "(", "a", ",", "b", ")", ";", "x", "[", "1", "]", "{", "}", "",
    ]


def test_comment_until_end_of_line():
    tokens = Scanner("int a; # int b;\nint c;").scan()
    assert [token.text for token in tokens] == ["int", "a", ";", "int", "c", ";", ""]


def test_carriage_returns():
    tokens = Scanner("int a;\r\nint b;\r\n").scan()
    assert [token.text for token in tokens] == ["int", "a", ";", "int", "b", ";", ""]


def test_largest_number():
    tokens = Scanner("2147483647").scan()
    assert tokens[0].value == 2147483647


def test_rescan(valid_file: str):
    program: str = open_file(valid_file)
    tokens = Scanner(program).scan()
    # Ensure that we get a non-empty list of tokens, ending in exactly one END
    assert len(tokens) > 1
    assert [token.type for token in tokens].count(Type.END) == 1

    # Reconstructing the text from the tokens gives the same tokens
    rebuilt = " ".join(token.text for token in tokens[:-1])
    assert Scanner(rebuilt).scan() == tokens


def test_unexpected_character():
    with pytest.raises(ScannerException) as excinfo:
        Scanner("func main() {\n  int a ~ b;\n}").scan()
    message = str(excinfo.value)
    assert "ScannerError" in message
    assert "Unrecognized symbol '~' on line [2] column 9." in message


def test_lonely_exclamation():
    with pytest.raises(ScannerException) as excinfo:
        Scanner("a = !b;").scan()
    assert "Unrecognized symbol '!' on line [1] column 5." in str(excinfo.value)


def test_exclamation_at_end_of_input():
    with pytest.raises(ScannerException) as excinfo:
        Scanner("a !").scan()
    assert "Unrecognized symbol '!'" in str(excinfo.value)


def test_invalid_number():
    with pytest.raises(ScannerException) as excinfo:
        Scanner("a = 12a;").scan()
    assert "Detect invalid number '12a'" in str(excinfo.value)


def test_invalid_identifier():
    with pytest.raises(ScannerException) as excinfo:
        Scanner("a=1;").scan()
    assert "Detect invalid identifier 'a='" in str(excinfo.value)


def test_number_overflow():
    with pytest.raises(ScannerException) as excinfo:
        Scanner("a = 2147483648;").scan()
    assert "does not fit into a 32-bit integer" in str(excinfo.value)


def test_lonely_bang_file():
    program: str = open_file(data_file("invalid", "lonely_bang.tl"))
    with pytest.raises(ScannerException):
        Scanner(program).scan()


def test_type_values_are_distinct():
    assert len({token_type.value for token_type in Type}) == len(Type)
    assert str(Type.ID) == "identifier"
    assert str(Type.DIGIT) == "number"
    assert str(Type.END) == "end of input"
    assert Type.keyword("<end>") == Type.ID
