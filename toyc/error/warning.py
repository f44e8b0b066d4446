from dataclasses import dataclass

from toyc.error.communicator import Communicator, WarningRaiser
from toyc.token import Token
from toyc.util import Colors, Span


@dataclass
class Warning:
    program: str

    def __post_init__(self) -> None:
        WarningRaiser.WARNINGS.append(self)

    def create_message(
        self, span: Span, before: str, after: str = "", n_after=1
    ) -> str:
        return Communicator.create_message(
            self.program, span, "Warning", before, after, 1, n_after, Colors.YELLOW
        )


@dataclass
class UnreachableCodeWarning(Warning):
    span: Span
    after: Token

    def __str__(self) -> str:
        before = f"Unreachable code on {self.span.lines_str}, after {self.str_stmt()} on {self.after.span.lines_str}."
        return self.create_message(self.span, before)

    def str_stmt(self) -> str:
        match self.after.text:
            case "return":
                return "a return"
            case "break":
                return "a break"
            case "continue":
                return "a continue"
            case _:
                return "a statement"
