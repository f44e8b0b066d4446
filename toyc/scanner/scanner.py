import re
from typing import List

from toyc.error.communicator import Communicator
from toyc.token import Token
from toyc.type import Type
from toyc.util import INT32_MAX, Span

from toyc.error.scanner_error import (  # isort:skip
    InvalidIdentifierError,
    InvalidNumberError,
    LonelyExclamationError,
    NumberOverflowError,
    ScannerException,
    UnexpectedCharacterError,
)

# Characters that may directly follow a number or an identifier
TERMINATOR = r"(?=[\ \t\r(){}\[\],;]|$)"


class Scanner:
    def __init__(self, program: str) -> None:
        self.og_program = program

        self.pattern = re.compile(
            rf"""
                (?P<COMMENT>\#.*)| # Comment until the end of the line
                (?P<LRB>\()| # lrb = Left Round Bracket
                (?P<RRB>\))| # rrb = Right Round Bracket
                (?P<LCB>\{{)| # lcb = Left Curly Bracket
                (?P<RCB>\}})| # rcb = Right Curly Bracket
                (?P<LSB>\[)| # lsb = Left Square Bracket
                (?P<RSB>\])| # rsb = Right Square Bracket
                (?P<SEMICOLON>\;)|
                (?P<COMMA>\,)|
                (?P<PLUS>\+)|
                (?P<MINUS>\-)|
                (?P<STAR>\*)|
                (?P<SLASH>\/)|
                (?P<PERCENT>\%)|
                (?P<DEQUALS>\=\=)|
                (?P<LEQ>\<\=)|
                (?P<GEQ>\>\=)|
                (?P<NEQ>\!\=)|
                (?P<LT>\<)|
                (?P<GT>\>)|
                (?P<EQ>\=)|
                (?P<NOT_ERROR>\!)|
                (?P<DIGIT>[0-9]+){TERMINATOR}|
                (?P<DIGIT_ERROR>[0-9]+.)|
                (?P<ID>[a-zA-Z]\w*){TERMINATOR}|
                (?P<ID_ERROR>[a-zA-Z]\w*.)|
                (?P<SPACE>[\ \t\r])|
                (?P<ERROR>.)
            """,
            flags=re.X,
        )

    def scan(self) -> List[Token]:
        """Extract the list of tokens from the program passed to `Scanner(program)`.

        The first illegal character or malformed number/identifier run raises a
        ScannerException immediately.

        Returns:
            List[Token]: A list of Token instances, always terminated by one END token.
        """
        lines = self.og_program.splitlines()

        # Extract the tokens from the lines line by line
        tokens = [
            token
            for line_no, line in enumerate(lines, start=1)
            for token in self.scan_line(line, line_no)
        ]
        tokens.append(self.end_token(lines))

        # Report any warnings that may have accumulated
        Communicator.communicate(ScannerException)
        return tokens

    def scan_line(self, line: str, line_no: int) -> List[Token]:
        tokens = []
        for match in self.pattern.finditer(line):
            span = Span(line_no, match.span())
            match match.lastgroup:
                case "SPACE" | "COMMENT":
                    continue
                case "ERROR":
                    UnexpectedCharacterError(self.og_program, span)
                case "NOT_ERROR":
                    LonelyExclamationError(self.og_program, span)
                case "DIGIT_ERROR":
                    InvalidNumberError(self.og_program, span)
                case "ID_ERROR":
                    InvalidIdentifierError(self.og_program, span)
                case "DIGIT":
                    if int(match[0]) > INT32_MAX:
                        NumberOverflowError(self.og_program, span, int(match[0]))
                    tokens.append(Token(match[0], Type.DIGIT, span))
                case "ID":
                    tokens.append(Token(match[0], Type.keyword(match[0]), span))
                case _:
                    tokens.append(Token(match[0], match.lastgroup, span))
        return tokens

    def end_token(self, lines: List[str]) -> Token:
        """The end-of-stream token, placed directly after the last character."""
        if not lines:
            return Token("", Type.END, Span(1, (0, 0)))
        end_col = len(lines[-1])
        return Token("", Type.END, Span(len(lines), (end_col, end_col)))
