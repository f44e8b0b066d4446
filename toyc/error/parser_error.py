from dataclasses import dataclass
from typing import Optional

from toyc.error.error import CompilerException, UnrecoverableError
from toyc.token import Token
from toyc.type import Type
from toyc.util import Span


class ParserException(CompilerException):
    pass


class ParseError(UnrecoverableError):
    stage = ParserException

    def create_error(self, before: str, after=""):
        return super().create_error(before, class_name="ParseError", after=after)


@dataclass
class UnexpectedTokenError(ParseError):
    expected: str | Type
    got: Token

    def __str__(self) -> str:
        expected = (
            self.expected.article_str()
            if isinstance(self.expected, Type)
            else self.expected
        )
        if self.got.type == Type.END:
            got = "the end of the program"
        else:
            got = repr(self.got.text)
        return self.create_error(
            f"Expected {expected}, but got {got} instead on {self.span.lines_str} column {self.span.start_col + 1}."
        )


@dataclass
class DuplicateDeclarationError(ParseError):
    name: str
    function: str

    def __str__(self) -> str:
        return self.create_error(
            f"Found duplicating declaration of {self.name!r} inside function {self.function!r} on {self.span.lines_str}."
        )


@dataclass
class DuplicateFunctionError(ParseError):
    name: str

    def __str__(self) -> str:
        return self.create_error(
            f"Found duplicating function name {self.name!r} on {self.span.lines_str}."
        )


@dataclass
class UndeclaredVariableError(ParseError):
    name: str

    def __str__(self) -> str:
        return self.create_error(
            f"Variable {self.name!r} used before declaration on {self.span.lines_str}.",
            "Variables must be declared earlier in the same function.",
        )


@dataclass
class UnknownFunctionError(ParseError):
    name: str

    def __str__(self) -> str:
        return self.create_error(
            f"Function {self.name!r} called before declaration on {self.span.lines_str}."
        )


@dataclass
class ArgumentCountError(ParseError):
    name: str
    expected: int
    got: int

    def __str__(self) -> str:
        return self.create_error(
            f"Function {self.name!r} takes {self.expected} argument{'s' if self.expected != 1 else ''}, but {self.got} {'were' if self.got != 1 else 'was'} given on {self.span.lines_str}."
        )


@dataclass
class TypeMismatchError(ParseError):
    dest: str
    src: str

    def __str__(self) -> str:
        return self.create_error(
            f"Type mismatch between {self.dest} and {self.src} on {self.span.lines_str}."
        )


@dataclass
class ArrayValueError(ParseError):
    name: str

    def __str__(self) -> str:
        return self.create_error(
            f"Array {self.name!r} cannot be used as an integer value on {self.span.lines_str}.",
            "Index the array to use one of its elements.",
        )


@dataclass
class NotAnArrayError(ParseError):
    name: str

    def __str__(self) -> str:
        return self.create_error(
            f"Variable {self.name!r} is not an array and cannot be indexed on {self.span.lines_str}."
        )


@dataclass
class IndexCountError(ParseError):
    name: str
    expected: int
    got: int

    def __str__(self) -> str:
        return self.create_error(
            f"Array {self.name!r} has {self.expected} dimension{'s' if self.expected != 1 else ''}, but was indexed {self.got} time{'s' if self.got != 1 else ''} on {self.span.lines_str}."
        )


@dataclass
class ArraySizeError(ParseError):
    size: Optional[int]

    def __str__(self) -> str:
        if self.size is None:
            before = f"Missing array size on {self.span.lines_str}."
        elif self.size <= 0:
            before = f"Array size {self.size} is less or equal to 0 on {self.span.lines_str}."
        else:
            before = f"Array size {self.size} is too large on {self.span.lines_str}."
        return self.create_error(before)


@dataclass
class ArrayParameterError(ParseError):
    name: str

    def __str__(self) -> str:
        return self.create_error(
            f"Parameter {self.name!r} cannot be an array on {self.span.lines_str}.",
            "Function parameters are passed by value and must be integers.",
        )


@dataclass
class EmptyBodyError(ParseError):
    construct: str

    def __str__(self) -> str:
        return self.create_error(
            f"The body of {self.construct} on {self.span.lines_str} must contain at least one statement."
        )


@dataclass
class LoopControlError(ParseError):
    keyword: str

    def __str__(self) -> str:
        return self.create_error(
            f"{self.keyword!r} used outside of a while loop on {self.span.lines_str}."
        )


class MissingMainError(ParseError):
    def __init__(self, program: str) -> None:
        super().__init__(program, Span.default())

    def __str__(self) -> str:
        return self.create_error("Main function not detected in the program.")


class MainParametersError(ParseError):
    def __str__(self) -> str:
        return self.create_error(
            f"Function 'main' cannot take parameters on {self.span.lines_str}.",
            "The program starts at main, so nothing can pass it arguments.",
        )


class NestingDepthError(ParseError):
    def __str__(self) -> str:
        return self.create_error(
            f"Program is nested too deeply to translate near {self.span.lines_str}."
        )
