import sys
from typing import Dict, List, Optional, TextIO

from toyc.interpreter.frame import Frame, Function, InputReader
from toyc.ir.instruction import ARITHMETIC, COMPARISON, Instruction
from toyc.ir.line import Line
from toyc.ir.program import Program
from toyc.util import INT32_MAX, INT32_MIN, Span, truncated_div, truncated_mod, wrap

from toyc.error.interpreter_error import (  # isort:skip
    ArgumentCountError,
    CallDepthError,
    DivisionByZeroError,
    IndexOutOfBoundsError,
    InputExhaustedError,
    InvalidInputError,
    MalformedInstructionError,
    ModulusByZeroError,
    SlotKindError,
    UndeclaredSlotError,
    UnknownFunctionError,
)
from toyc.ir.operand import (  # isort:skip
    Call,
    Element,
    Label,
    Literal,
    Name,
    Signature,
    Value,
)


class Interpreter:
    """Execute an IR `Program`, starting at `main`.

    Every call gets its own `Frame`, kept on an explicit stack. Faults raise an
    InterpreterException immediately; output written before the fault remains.

    Args:
        program (Program): The program to execute.
        stdin (TextIO, optional): Stream that `%input` reads from. Defaults to `sys.stdin`.
        stdout (TextIO, optional): Stream that `%out` writes to. Defaults to `sys.stdout`.
        max_depth (int, optional): Maximum number of simultaneously active calls.
    """

    def __init__(
        self,
        program: Program,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
        max_depth: int = 1000,
    ) -> None:
        self.program = program
        self.stdin = stdin
        self.stdout = stdout
        self.max_depth = max_depth

        self.functions: Dict[str, Function] = {}
        # The line being executed, used to point at faults
        self.line: Optional[Line] = None

    def run(self) -> int:
        """Execute the program.

        Returns:
            int: The value returned by `main`, or 0 if it ends without `%ret`.
        """
        self.input = InputReader(self.stdin if self.stdin is not None else sys.stdin)
        self.output = self.stdout if self.stdout is not None else sys.stdout

        self.functions = self.load_functions()
        if "main" not in self.functions:
            UnknownFunctionError(self.program.text, Span.default(), "main")

        main = self.functions["main"]
        # Hand-written IR may give main parameters, they start at zero
        main_frame = Frame(main, main.start + 1, slots=dict.fromkeys(main.params, 0))
        stack: List[Frame] = [main_frame]
        while True:
            frame = stack[-1]
            self.line = line = self.program.lines[frame.pc]
            frame.pc += 1

            match line.instruction:
                case None:
                    # Labels are only branch targets
                    continue

                case Instruction.INT:
                    name = self.name(line.operands[0])
                    frame.slots.setdefault(name, 0)

                case Instruction.INT_ARRAY:
                    name = self.name(line.operands[0])
                    size = line.operands[1]
                    if not isinstance(size, Literal) or size.value <= 0:
                        self.malformed(f"invalid array size {str(size)!r}")
                    frame.slots.setdefault(name, [0] * size.value)

                case Instruction.MOV:
                    self.move(frame, *line.operands)

                case operation if operation in ARITHMETIC + COMPARISON:
                    dest, left, right = line.operands
                    value = self.compute(
                        operation,
                        self.evaluate(frame, left),
                        self.evaluate(frame, right),
                    )
                    self.store(frame, dest, value)

                case Instruction.OUT:
                    print(self.evaluate(frame, line.operands[0]), file=self.output)

                case Instruction.INPUT:
                    self.store(frame, line.operands[0], self.read_integer())

                case Instruction.CALL:
                    if len(stack) >= self.max_depth:
                        CallDepthError(self.program.text, self.span, self.max_depth)
                    stack.append(self.call(frame, *line.operands))

                case Instruction.RET | Instruction.ENDFUNC:
                    value = 0
                    if line.instruction == Instruction.RET:
                        value = self.evaluate(frame, line.operands[0])
                    stack.pop()
                    if not stack:
                        return value
                    # Point faults while storing the result at the `%call`
                    caller = stack[-1]
                    self.line = self.program.lines[caller.pc - 1]
                    self.store(caller, frame.return_to, value)

                case Instruction.JMP:
                    frame.pc = self.jump(frame, line.operands[0])

                case Instruction.BRANCH_IF | Instruction.BRANCH_IFN:
                    condition, label = line.operands
                    if (self.evaluate(frame, condition) != 0) == (
                        line.instruction == Instruction.BRANCH_IF
                    ):
                        frame.pc = self.jump(frame, label)

                case _:
                    self.malformed(f"unexpected {line.instruction}")

    def load_functions(self) -> Dict[str, Function]:
        """Build the function table, verifying that `%func` and `%endfunc` are balanced."""
        functions = {}
        current = None
        for index, line in enumerate(self.program.lines):
            self.line = line
            match line.instruction:
                case Instruction.FUNC:
                    if current is not None:
                        self.malformed(f"function {current.name!r} is missing '%endfunc'")
                    signature = line.operands[0]
                    if not isinstance(signature, Signature):
                        self.malformed("invalid function header")
                    if signature.name in functions:
                        self.malformed(f"duplicate function {signature.name!r}")
                    current = Function(signature.name, list(signature.params), index, -1)

                case Instruction.ENDFUNC:
                    if current is None:
                        self.malformed("'%endfunc' outside of a function")
                    current.end = index
                    functions[current.name] = current
                    current = None

                case None:
                    if current is None:
                        self.malformed("label outside of a function")
                    if line.label in current.labels:
                        self.malformed(f"duplicate label ':{line.label}'")
                    current.labels[line.label] = index

                case _:
                    if current is None:
                        self.malformed("instruction outside of a function")

        if current is not None:
            self.line = self.program.lines[current.start]
            self.malformed(f"function {current.name!r} is missing '%endfunc'")
        return functions

    def call(self, frame: Frame, dest: Value, call: Call) -> Frame:
        """Create the frame of the callee, with the arguments copied into its parameters."""
        if not isinstance(call, Call):
            self.malformed(f"{str(call)!r} is not a function call")
        if call.func not in self.functions:
            UnknownFunctionError(self.program.text, self.span, call.func)

        function = self.functions[call.func]
        args = [self.evaluate(frame, arg) for arg in call.args]
        if len(args) != len(function.params):
            ArgumentCountError(
                self.program.text,
                self.span,
                call.func,
                len(function.params),
                len(args),
            )

        # Fail before the call if the result cannot be stored
        self.target(frame, dest)

        callee = Frame(function, function.start + 1, return_to=dest)
        callee.slots.update(zip(function.params, args))
        return callee

    def jump(self, frame: Frame, label: Label) -> int:
        if not isinstance(label, Label):
            self.malformed(f"{str(label)!r} is not a label")
        if label.name not in frame.function.labels:
            self.malformed(f"unknown label {str(label)!r}")
        return frame.function.labels[label.name]

    def compute(self, instruction: Instruction, left: int, right: int) -> int:
        match instruction:
            case Instruction.ADD:
                return wrap(left + right)
            case Instruction.SUB:
                return wrap(left - right)
            case Instruction.MULT:
                return wrap(left * right)
            case Instruction.DIV:
                if right == 0:
                    DivisionByZeroError(self.program.text, self.span)
                return truncated_div(left, right)
            case Instruction.MOD:
                if right == 0:
                    ModulusByZeroError(self.program.text, self.span)
                return truncated_mod(left, right)
            case Instruction.LT:
                return int(left < right)
            case Instruction.LE:
                return int(left <= right)
            case Instruction.GT:
                return int(left > right)
            case Instruction.GE:
                return int(left >= right)
            case Instruction.EQ:
                return int(left == right)
            case Instruction.NEQ:
                return int(left != right)

    def move(self, frame: Frame, dest: Value, src: Value) -> None:
        # Whole arrays are copied element by element
        if isinstance(src, Name) and isinstance(frame.slots.get(src.name), list):
            source = frame.slots[src.name]
            target = frame.slots.get(dest.name) if isinstance(dest, Name) else None
            if not isinstance(target, list) or len(target) != len(source):
                SlotKindError(
                    self.program.text,
                    self.span,
                    str(dest),
                    f"an array of size {len(source)}",
                )
            target[:] = source
            return
        self.store(frame, dest, self.evaluate(frame, src))

    def evaluate(self, frame: Frame, operand: Value) -> int:
        match operand:
            case Literal(value=value):
                return wrap(value)
            case Name(name=name):
                slot = self.slot(frame, name)
                if isinstance(slot, list):
                    SlotKindError(self.program.text, self.span, name, "an integer")
                return slot
            case Element():
                values, position = self.element(frame, operand)
                return values[position]
        self.malformed(f"{str(operand)!r} is not a value")

    def store(self, frame: Frame, dest: Value, value: int) -> None:
        values, position = self.target(frame, dest)
        if values is None:
            frame.slots[position] = wrap(value)
        else:
            values[position] = wrap(value)

    def target(self, frame: Frame, dest: Value):
        """Resolve a destination to (array, index), or (None, name) for scalars."""
        match dest:
            case Name(name=name):
                if isinstance(self.slot(frame, name), list):
                    SlotKindError(self.program.text, self.span, name, "an integer")
                return None, name
            case Element():
                return self.element(frame, dest)
        self.malformed(f"cannot store into {str(dest)!r}")

    def element(self, frame: Frame, element: Element):
        values = self.slot(frame, element.array)
        if not isinstance(values, list):
            SlotKindError(self.program.text, self.span, element.array, "an array")
        position = self.evaluate(frame, element.index)
        if not 0 <= position < len(values):
            IndexOutOfBoundsError(
                self.program.text, self.span, element.array, position, len(values)
            )
        return values, position

    def slot(self, frame: Frame, name: str) -> int | List[int]:
        if name not in frame.slots:
            UndeclaredSlotError(self.program.text, self.span, name)
        return frame.slots[name]

    def name(self, operand) -> str:
        if not isinstance(operand, Name):
            self.malformed(f"{str(operand)!r} is not a variable name")
        return operand.name

    def read_integer(self) -> int:
        token = self.input.next_token()
        if token is None:
            InputExhaustedError(self.program.text, self.span)
        if not InputReader.is_integer(token) or not INT32_MIN <= int(token) <= INT32_MAX:
            InvalidInputError(self.program.text, self.span, token)
        return int(token)

    @property
    def span(self) -> Span:
        """The span of the full line currently being executed."""
        if self.line is None or self.line.line_no < 1:
            return Span.default()
        text = self.program.text.splitlines()[self.line.line_no - 1]
        return Span(self.line.line_no, (0, len(text)))

    def malformed(self, reason: str) -> None:
        MalformedInstructionError(self.program.text, self.span, reason)
