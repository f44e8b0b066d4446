from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, List, Tuple

from toyc.ir.line import Line
from toyc.ir.operand import Call, Label, Name, Operand
from toyc.util import Span


class Kind(Enum):
    INT = auto()
    ARRAY = auto()

    def __str__(self) -> str:
        return self.name.lower()


@dataclass
class Symbol:
    kind: Kind
    # Sizes of each dimension, empty for scalars
    dims: Tuple[int, ...] = ()

    @property
    def size(self) -> int:
        size = 1
        for dim in self.dims:
            size *= dim
        return size


@dataclass
class Expression:
    """The synthesized attribute of an expression: its code and the operand holding its result."""

    code: List[Line] = field(default_factory=list)
    operand: Operand = None
    kind: Kind = Kind.INT
    # The array symbol, if this expression names a whole array
    symbol: Symbol = None
    span: Span = None

    @property
    def is_call(self) -> bool:
        return isinstance(self.operand, Call)


@dataclass
class Context:
    """Code generation state for a single compilation.

    Temporaries and labels are numbered across all functions of the program,
    but never across compilations.
    """

    temp_count: int = 0
    label_count: int = 0
    # Function name -> number of parameters
    functions: Dict[str, int] = field(default_factory=dict)
    # Variable name -> Symbol, for the function being translated
    symbols: Dict[str, Symbol] = field(default_factory=dict)
    # Declaration lines of the function being translated
    declarations: List[Line] = field(default_factory=list)
    # (continue target, break target) of each enclosing while loop
    loops: List[Tuple[Label, Label]] = field(default_factory=list)

    def new_temp(self) -> Name:
        self.temp_count += 1
        return Name(f"_temp{self.temp_count}")

    def new_labels(self, *prefixes: str) -> Tuple[Label, ...]:
        self.label_count += 1
        return tuple(Label(f"{prefix}{self.label_count}") for prefix in prefixes)
