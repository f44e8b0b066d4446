import re
from typing import List

from toyc.error.communicator import Communicator
from toyc.ir.instruction import Instruction
from toyc.ir.line import Line
from toyc.ir.program import Program
from toyc.util import Span

from toyc.error.interpreter_error import (  # isort:skip
    InterpreterException,
    MalformedInstructionError,
)
from toyc.ir.operand import (  # isort:skip
    Call,
    Element,
    Label,
    Literal,
    Name,
    Signature,
)

NAME = r"[A-Za-z_]\w*"


class IRReader:
    """Parse the textual form of the IR back into a `Program`.

    Blank lines and lines starting with `#` are skipped, but line numbers
    still refer to the original text so that faults point at the right line.
    """

    def __init__(self, text: str) -> None:
        self.text = text

        self.signature_pattern = re.compile(rf"^({NAME})\((.*)\)$")
        self.param_pattern = re.compile(rf"^%int ({NAME})$")
        self.literal_pattern = re.compile(r"^[+-]?[0-9]+$")
        self.name_pattern = re.compile(rf"^{NAME}$")
        self.label_pattern = re.compile(rf"^:({NAME})$")
        self.element_pattern = re.compile(rf"^\[\s*({NAME})\s*\+\s*(.+?)\s*\]$")
        self.call_pattern = re.compile(rf"^({NAME})\((.*)\)$")

    def read(self) -> Program:
        lines = []
        for line_no, raw in enumerate(self.text.splitlines(), start=1):
            stripped = raw.strip()
            if not stripped or stripped.startswith("#"):
                continue
            lines.append(self.read_line(stripped, line_no))
        Communicator.communicate(InterpreterException)
        return Program(lines, self.text)

    def read_line(self, text: str, line_no: int) -> Line:
        if text.startswith(":"):
            label = self.label_pattern.match(text)
            if not label:
                self.malformed(line_no, f"invalid label {text!r}")
            return Line(label=label[1], line_no=line_no)

        opcode, _, rest = text.partition(" ")
        try:
            instruction = Instruction(opcode)
        except ValueError:
            self.malformed(line_no, f"unknown instruction {opcode!r}")

        match instruction:
            case Instruction.FUNC:
                operands = [self.read_signature(rest.strip(), line_no)]
            case Instruction.ENDFUNC:
                operands = []
                if rest.strip():
                    self.malformed(line_no, "'%endfunc' takes no operands")
            case _:
                operands = [
                    self.read_operand(operand, line_no)
                    for operand in self.split_operands(rest)
                ]

        if len(operands) != instruction.arity:
            self.malformed(
                line_no,
                f"{instruction} expects {instruction.arity} operand{'s' if instruction.arity != 1 else ''}, got {len(operands)}",
            )
        return Line(instruction, *operands, line_no=line_no)

    def read_signature(self, text: str, line_no: int) -> Signature:
        # Accept `%func main` as well as `%func main()`
        if self.name_pattern.match(text):
            return Signature(text)
        signature = self.signature_pattern.match(text)
        if not signature:
            self.malformed(line_no, f"invalid function header {text!r}")
        params = []
        for param in self.split_operands(signature[2]):
            match = self.param_pattern.match(param)
            if not match:
                self.malformed(line_no, f"invalid parameter {param!r}")
            params.append(match[1])
        return Signature(signature[1], tuple(params))

    def read_operand(self, text: str, line_no: int):
        if self.literal_pattern.match(text):
            return Literal(int(text))
        if self.name_pattern.match(text):
            return Name(text)
        if label := self.label_pattern.match(text):
            return Label(label[1])
        if element := self.element_pattern.match(text):
            index = self.read_operand(element[2], line_no)
            if not isinstance(index, (Literal, Name)):
                self.malformed(line_no, f"invalid array index {element[2]!r}")
            return Element(element[1], index)
        if call := self.call_pattern.match(text):
            args = tuple(
                self.read_operand(arg, line_no) for arg in self.split_operands(call[2])
            )
            if any(not isinstance(arg, (Literal, Name, Element)) for arg in args):
                self.malformed(line_no, f"invalid call arguments {call[2]!r}")
            return Call(call[1], args)
        self.malformed(line_no, f"invalid operand {text!r}")

    def split_operands(self, text: str) -> List[str]:
        """Split on the commas that are not nested inside brackets or parentheses."""
        operands = []
        depth = 0
        current = ""
        for char in text:
            if char in "([":
                depth += 1
            elif char in ")]":
                depth -= 1
            if char == "," and depth == 0:
                operands.append(current.strip())
                current = ""
            else:
                current += char
        if current.strip() or operands:
            operands.append(current.strip())
        return operands

    def malformed(self, line_no: int, reason: str) -> None:
        line = self.text.splitlines()[line_no - 1]
        MalformedInstructionError(self.text, Span(line_no, (0, len(line))), reason)
