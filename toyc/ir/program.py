from typing import Iterator, List, Optional

from toyc.ir.line import Line


class Program:
    """An ordered, flat sequence of IR lines grouped into `%func` blocks.

    `text` is the textual form that the line numbers of `lines` refer to. When
    it is not given, it is produced from the lines themselves, one line each.
    """

    def __init__(self, lines: List[Line], text: Optional[str] = None) -> None:
        self.lines = lines
        if text is None:
            for line_no, line in enumerate(self.lines, start=1):
                line.line_no = line_no
            text = "\n".join(str(line) for line in self.lines)
        self.text = text

    def __iter__(self) -> Iterator[Line]:
        return iter(self.lines)

    def __len__(self) -> int:
        return len(self.lines)

    def __str__(self) -> str:
        return self.text
