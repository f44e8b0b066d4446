from enum import Enum


class Instruction(Enum):
    FUNC = "%func"  # Begin function block
    ENDFUNC = "%endfunc"  # End function block, returns 0 if reached
    INT = "%int"  # Declare zero-initialized scalar
    INT_ARRAY = "%int[]"  # Declare zero-initialized array

    MOV = "%mov"  # Copy
    ADD = "%add"  # Addition
    SUB = "%sub"  # Subtraction
    MULT = "%mult"  # Multiplication
    DIV = "%div"  # Division, truncating toward zero
    MOD = "%mod"  # Modulo, sign of the dividend
    LT = "%lt"  # Less than
    LE = "%le"  # Less or equal
    GT = "%gt"  # Greater than
    GE = "%ge"  # Greater or equal
    EQ = "%eq"  # Equality
    NEQ = "%neq"  # Non-equality

    OUT = "%out"  # Write a value and a newline to the output stream
    INPUT = "%input"  # Read one integer from the input stream

    CALL = "%call"  # Call a function and store its return value
    RET = "%ret"  # Return from the current function
    JMP = "%jmp"  # Branch always
    BRANCH_IF = "%branch_if"  # Branch on non-zero
    BRANCH_IFN = "%branch_ifn"  # Branch on zero

    @property
    def arity(self) -> int:
        """The number of operands this instruction takes."""
        match self:
            case Instruction.ENDFUNC:
                return 0
            case Instruction.FUNC | Instruction.INT | Instruction.OUT | Instruction.INPUT | Instruction.RET | Instruction.JMP:
                return 1
            case Instruction.INT_ARRAY | Instruction.MOV | Instruction.CALL | Instruction.BRANCH_IF | Instruction.BRANCH_IFN:
                return 2
            case _:
                return 3

    def __str__(self) -> str:
        return self.value


ARITHMETIC = (
    Instruction.ADD,
    Instruction.SUB,
    Instruction.MULT,
    Instruction.DIV,
    Instruction.MOD,
)

COMPARISON = (
    Instruction.LT,
    Instruction.LE,
    Instruction.GT,
    Instruction.GE,
    Instruction.EQ,
    Instruction.NEQ,
)
