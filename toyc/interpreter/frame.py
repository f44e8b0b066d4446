import re
from collections import deque
from dataclasses import dataclass, field
from typing import Dict, List, Optional, TextIO

from toyc.ir.operand import Value


@dataclass
class Function:
    """A `%func` block of the loaded program."""

    name: str
    params: List[str]
    # Index of the `%func` line and of the matching `%endfunc` line
    start: int
    end: int
    # Label name -> index of the label line
    labels: Dict[str, int] = field(default_factory=dict)


@dataclass
class Frame:
    """The activation record of one in-progress call."""

    function: Function
    pc: int
    # Where the caller wants the return value, None for `main`
    return_to: Optional[Value] = None
    slots: Dict[str, int | List[int]] = field(default_factory=dict)


class InputReader:
    """Yields whitespace-delimited tokens from a text stream, one line at a time."""

    pattern = re.compile(r"^[+-]?[0-9]+$")

    def __init__(self, stream: TextIO) -> None:
        self.stream = stream
        self.pending = deque()

    def next_token(self) -> Optional[str]:
        """Return the next token, or None if the stream is exhausted."""
        while not self.pending:
            line = self.stream.readline()
            if not line:
                return None
            self.pending.extend(line.split())
        return self.pending.popleft()

    @classmethod
    def is_integer(cls, token: str) -> bool:
        return bool(cls.pattern.match(token))
