from dataclasses import dataclass

from toyc.error.error import CompilerException, UnrecoverableError


class InterpreterException(CompilerException):
    pass


class InterpreterError(UnrecoverableError):
    """A fault raised while executing IR.

    The `program` of an interpreter error is the IR text, and the span points
    at the instruction that faulted.
    """

    stage = InterpreterException

    def create_error(self, before: str, after=""):
        return super().create_error(before, class_name="RuntimeError", after=after)


class DivisionByZeroError(InterpreterError):
    def __str__(self) -> str:
        return self.create_error(f"Division by zero on IR {self.span.lines_str}.")


class ModulusByZeroError(InterpreterError):
    def __str__(self) -> str:
        return self.create_error(f"Modulus by zero on IR {self.span.lines_str}.")


@dataclass
class IndexOutOfBoundsError(InterpreterError):
    name: str
    index: int
    size: int

    def __str__(self) -> str:
        return self.create_error(
            f"Index {self.index} is out of bounds for array {self.name!r} of size {self.size} on IR {self.span.lines_str}."
        )


@dataclass
class UndeclaredSlotError(InterpreterError):
    name: str

    def __str__(self) -> str:
        return self.create_error(
            f"Reference to undeclared variable {self.name!r} on IR {self.span.lines_str}."
        )


@dataclass
class SlotKindError(InterpreterError):
    name: str
    expected: str

    def __str__(self) -> str:
        return self.create_error(
            f"Variable {self.name!r} is not {self.expected} on IR {self.span.lines_str}."
        )


class InputExhaustedError(InterpreterError):
    def __str__(self) -> str:
        return self.create_error(
            f"Input stream exhausted while reading an integer on IR {self.span.lines_str}."
        )


@dataclass
class InvalidInputError(InterpreterError):
    text: str

    def __str__(self) -> str:
        return self.create_error(
            f"Input {self.text!r} is not a 32-bit integer on IR {self.span.lines_str}."
        )


@dataclass
class UnknownFunctionError(InterpreterError):
    name: str

    def __str__(self) -> str:
        if self.name == "main":
            return self.create_error("Main function not detected in the program.")
        return self.create_error(
            f"Call to unknown function {self.name!r} on IR {self.span.lines_str}."
        )


@dataclass
class ArgumentCountError(InterpreterError):
    name: str
    expected: int
    got: int

    def __str__(self) -> str:
        return self.create_error(
            f"Function {self.name!r} takes {self.expected} argument{'s' if self.expected != 1 else ''}, but {self.got} {'were' if self.got != 1 else 'was'} given on IR {self.span.lines_str}."
        )


@dataclass
class CallDepthError(InterpreterError):
    depth: int

    def __str__(self) -> str:
        return self.create_error(
            f"Maximum call depth of {self.depth} exceeded on IR {self.span.lines_str}."
        )


@dataclass
class MalformedInstructionError(InterpreterError):
    reason: str

    def __str__(self) -> str:
        return self.create_error(
            f"Malformed instruction on IR {self.span.lines_str}: {self.reason}."
        )
