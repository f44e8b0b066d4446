from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Literal:
    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Name:
    """A variable, parameter or temporary."""

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Element:
    """An array element, `[array + index]`. The index is always a literal or a name."""

    array: str
    index: Literal | Name

    def __str__(self) -> str:
        return f"[{self.array} + {self.index}]"


@dataclass(frozen=True)
class Call:
    func: str
    args: Tuple[Literal | Name | Element, ...] = ()

    def __str__(self) -> str:
        return f"{self.func}({','.join(str(arg) for arg in self.args)})"


@dataclass(frozen=True)
class Label:
    name: str

    def __str__(self) -> str:
        return f":{self.name}"


@dataclass(frozen=True)
class Signature:
    """The operand of `%func`: the function name and its scalar parameters."""

    name: str
    params: Tuple[str, ...] = ()

    def __str__(self) -> str:
        return f"{self.name}({', '.join('%int ' + param for param in self.params)})"


# Operands that evaluate to a single integer
Value = Literal | Name | Element
Operand = Literal | Name | Element | Call | Label | Signature
