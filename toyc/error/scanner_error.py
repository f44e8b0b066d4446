from dataclasses import dataclass

from toyc.error.error import CompilerException, UnrecoverableError


class ScannerException(CompilerException):
    pass


class ScannerError(UnrecoverableError):
    stage = ScannerException

    def create_error(self, before: str, after=""):
        return super().create_error(before, class_name="ScannerError", after=after)


class UnexpectedCharacterError(ScannerError):
    def __str__(self) -> str:
        return self.create_error(
            f"Unrecognized symbol {self.error_chars!r} on {self.span.lines_str} column {self.span.start_col + 1}."
        )


class LonelyExclamationError(ScannerError):
    def __str__(self) -> str:
        return self.create_error(
            f"Unrecognized symbol '!' on {self.span.lines_str} column {self.span.start_col + 1}.",
            "'!' is only valid as part of the '!=' operator.",
        )


class InvalidNumberError(ScannerError):
    def __str__(self) -> str:
        chars = self.error_chars
        return self.create_error(
            f"Detect invalid number {chars!r} on {self.span.lines_str}: {chars[-1]!r} may not follow {chars[:-1]!r}.",
            "Numbers must be followed by whitespace, a bracket, a comma or a semicolon.",
        )


class InvalidIdentifierError(ScannerError):
    def __str__(self) -> str:
        chars = self.error_chars
        return self.create_error(
            f"Detect invalid identifier {chars!r} on {self.span.lines_str}: {chars[-1]!r} may not follow {chars[:-1]!r}.",
            "Identifiers must be followed by whitespace, a bracket, a comma or a semicolon.",
        )


@dataclass
class NumberOverflowError(ScannerError):
    integer_value: int

    def __str__(self) -> str:
        return self.create_error(
            f"The value {self.integer_value} on {self.span.lines_str} does not fit into a 32-bit integer."
        )
