from dataclasses import dataclass
from typing import Optional, Tuple

from toyc.ir.instruction import Instruction
from toyc.ir.operand import Operand


@dataclass
class Line:
    instruction: Optional[Instruction]
    operands: Tuple[Operand]
    label: str
    line_no: int

    def __init__(
        self,
        instruction: Optional[Instruction] = None,
        *operands: Operand,
        label: str = "",
        line_no: int = -1,
    ) -> None:
        self.instruction = instruction
        self.operands = operands
        self.label = label
        # Position within the textual IR, used to point at faulting instructions
        self.line_no = line_no

    @property
    def is_label(self) -> bool:
        return self.instruction is None

    def __eq__(self, __o: object) -> bool:
        if not isinstance(__o, Line):
            return False
        return (self.instruction, self.operands, self.label) == (
            __o.instruction,
            __o.operands,
            __o.label,
        )

    def __str__(self) -> str:
        if self.is_label:
            return f":{self.label}"
        if not self.operands:
            return str(self.instruction)
        return f"{self.instruction} {', '.join(str(operand) for operand in self.operands)}"
