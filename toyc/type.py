from enum import Enum


class Type(Enum):
    LRB = "("
    RRB = ")"
    LCB = "{"
    RCB = "}"
    LSB = "["
    RSB = "]"
    SEMICOLON = ";"
    COMMA = ","
    PLUS = "+"
    MINUS = "-"
    STAR = "*"
    SLASH = "/"
    PERCENT = "%"
    DEQUALS = "=="
    LEQ = "<="
    GEQ = ">="
    LT = "<"
    GT = ">"
    NEQ = "!="
    EQ = "="
    FUNC = "func"
    RETURN = "return"
    INT = "int"
    PRINT = "print"
    READ = "read"
    WHILE = "while"
    IF = "if"
    ELSE = "else"
    BREAK = "break"
    CONTINUE = "continue"
    ID = "<identifier>"
    DIGIT = "<number>"
    END = "<end>"

    def to_type(type_str: str):
        return Type[type_str]

    @staticmethod
    def keyword(text: str):
        """Resolve an identifier run against the reserved words, exact match only."""
        if text in KEYWORDS:
            return Type(text)
        return Type.ID

    def __str__(self) -> str:
        match self:
            case Type.ID:
                return "identifier"
            case Type.DIGIT:
                return "number"
            case Type.END:
                return "end of input"
        return repr(self.value)

    def article_str(self) -> str:
        match self:
            case Type.ID | Type.INT | Type.ELSE | Type.IF | Type.END:
                return f"an {self}"
            case _:
                return f"a {self}"


KEYWORDS = (
    "func",
    "return",
    "int",
    "print",
    "read",
    "while",
    "if",
    "else",
    "break",
    "continue",
)
