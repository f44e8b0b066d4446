from typing import List, Tuple

from toyc.error.communicator import Communicator
from toyc.error.warning import UnreachableCodeWarning
from toyc.ir.instruction import Instruction
from toyc.ir.line import Line
from toyc.ir.program import Program
from toyc.parser.context import Context, Expression, Kind, Symbol
from toyc.token import Token
from toyc.type import Type
from toyc.util import INT32_MAX, Span

from toyc.error.parser_error import (  # isort:skip
    ArgumentCountError,
    ArrayParameterError,
    ArraySizeError,
    ArrayValueError,
    DuplicateDeclarationError,
    DuplicateFunctionError,
    EmptyBodyError,
    IndexCountError,
    LoopControlError,
    MainParametersError,
    MissingMainError,
    NestingDepthError,
    NotAnArrayError,
    ParserException,
    TypeMismatchError,
    UndeclaredVariableError,
    UnexpectedTokenError,
    UnknownFunctionError,
)
from toyc.ir.operand import (  # isort:skip
    Call,
    Element,
    Literal,
    Name,
    Signature,
    Value,
)

# Binary operators and the instruction computing them into a temporary
OPERATORS = {
    Type.PLUS: Instruction.ADD,
    Type.MINUS: Instruction.SUB,
    Type.STAR: Instruction.MULT,
    Type.SLASH: Instruction.DIV,
    Type.PERCENT: Instruction.MOD,
    Type.LT: Instruction.LT,
    Type.LEQ: Instruction.LE,
    Type.GT: Instruction.GT,
    Type.GEQ: Instruction.GE,
    Type.DEQUALS: Instruction.EQ,
    Type.NEQ: Instruction.NEQ,
}

ADDITIVE = (Type.PLUS, Type.MINUS)
MULTIPLICATIVE = (Type.STAR, Type.SLASH, Type.PERCENT)
RELATIONAL = (Type.LT, Type.LEQ, Type.GT, Type.GEQ, Type.DEQUALS, Type.NEQ)
TERMINATING = (Type.RETURN, Type.BREAK, Type.CONTINUE)


class Parser:
    def __init__(self, program: str) -> None:
        self.og_program = program
        self.tokens: List[Token] = []
        self.index = 0
        self.function = ""
        self.context = Context()

    def parse(self, tokens: List[Token]) -> Program:
        """Given a list of Tokens from the scanner, translate the program into IR.

        Parsing and the semantic checks happen in one pass. The first error raises
        a ParserException, and no IR is produced.

        Args:
            tokens (List[Token]): A list of tokens, produced by `Scanner(program).scan()`

        Returns:
            Program: The generated IR.
        """
        # The cursor never moves past the END token
        if not tokens or tokens[-1].type != Type.END:
            tokens = [*tokens, Token("", Type.END, self.end_span(tokens))]

        self.tokens = tokens
        self.index = 0
        self.context = Context()

        lines = []
        try:
            while self.current.type != Type.END:
                lines.extend(self.parse_function())
        except RecursionError:
            NestingDepthError(self.og_program, self.current.span)

        if "main" not in self.context.functions:
            MissingMainError(self.og_program)

        # Report any warnings, e.g. unreachable code
        Communicator.communicate(ParserException)
        return Program(lines)

    def end_span(self, tokens: List[Token]) -> Span:
        if not tokens:
            return Span(1, (0, 0))
        last = tokens[-1].span
        return Span(last.end_ln, (last.end_col, last.end_col))

    @property
    def current(self) -> Token:
        return self.tokens[self.index]

    def peek(self) -> Token:
        return self.tokens[min(self.index + 1, len(self.tokens) - 1)]

    def advance(self) -> Token:
        token = self.current
        if token.type != Type.END:
            self.index += 1
        return token

    def expect(self, token_type: Type, expected: str = "") -> Token:
        if self.current.type != token_type:
            UnexpectedTokenError(
                self.og_program,
                self.current.span,
                expected or token_type,
                self.current,
            )
        return self.advance()

    def lookup(self, name: Token) -> Symbol:
        if name.text not in self.context.symbols:
            UndeclaredVariableError(self.og_program, name.span, name.text)
        return self.context.symbols[name.text]

    def parse_function(self) -> List[Line]:
        """function := 'func' ident '(' (decl (',' decl)*)? ')' '{' statement* '}'"""
        self.expect(Type.FUNC, "a function declaration starting with 'func'")
        name = self.expect(Type.ID, "a function name")
        if name.text in self.context.functions:
            DuplicateFunctionError(self.og_program, name.span, name.text)

        # Every function has its own scope
        self.function = name.text
        self.context.symbols = {}
        self.context.declarations = []

        params = []
        self.expect(Type.LRB)
        if self.current.type != Type.RRB:
            params.append(self.parse_parameter())
            while self.current.type == Type.COMMA:
                self.advance()
                params.append(self.parse_parameter())
        closing = self.expect(Type.RRB, "a ',' or ')'")

        # Nothing calls main, so nothing could bind its parameters
        if name.text == "main" and params:
            MainParametersError(self.og_program, name.span & closing.span)

        # Registered before the body, so that a function may call itself
        self.context.functions[name.text] = len(params)

        body = self.parse_block()
        # All declarations of the function are allocated on entry
        return [
            Line(Instruction.FUNC, Signature(name.text, tuple(params))),
            *self.context.declarations,
            *body,
            Line(Instruction.ENDFUNC),
        ]

    def parse_parameter(self) -> str:
        name, symbol = self.parse_declaration()
        if symbol.kind == Kind.ARRAY:
            ArrayParameterError(self.og_program, name.span, name.text)
        return name.text

    def parse_declaration(self) -> Tuple[Token, Symbol]:
        """decl := 'int' ('[' number ']')* ident"""
        self.expect(Type.INT, "a declaration starting with 'int'")
        dims = []
        while self.current.type == Type.LSB:
            bracket = self.advance()
            match self.current:
                case Token(type=Type.DIGIT) as number:
                    if number.value <= 0:
                        ArraySizeError(self.og_program, number.span, number.value)
                    dims.append(number.value)
                    self.advance()
                case Token(type=Type.RSB):
                    ArraySizeError(
                        self.og_program, bracket.span & self.current.span, None
                    )
                case _:
                    UnexpectedTokenError(
                        self.og_program, self.current.span, "an array size", self.current
                    )
            self.expect(Type.RSB)

        name = self.expect(Type.ID, "a variable name")
        if name.text in self.context.symbols:
            DuplicateDeclarationError(
                self.og_program, name.span, name.text, self.function
            )

        symbol = Symbol(Kind.ARRAY, tuple(dims)) if dims else Symbol(Kind.INT)
        if symbol.size > INT32_MAX:
            ArraySizeError(self.og_program, name.span, symbol.size)
        self.context.symbols[name.text] = symbol
        return name, symbol

    def parse_block(self, construct: str = "") -> List[Line]:
        """'{' statement* '}'

        If `construct` is given, the block belongs to a control-flow statement and
        must contain at least one statement.
        """
        open_bracket = self.expect(Type.LCB)
        code = []
        n_statements = 0
        terminator = None
        while self.current.type not in (Type.RCB, Type.END):
            token = self.current
            if terminator:
                UnreachableCodeWarning(self.og_program, token.span, terminator)
                terminator = None
            code.extend(self.parse_statement())
            n_statements += 1
            if token.type in TERMINATING:
                terminator = token

        if construct and n_statements == 0:
            EmptyBodyError(
                self.og_program, open_bracket.span & self.current.span, construct
            )
        self.expect(Type.RCB, "a statement or '}'")
        return code

    def parse_statement(self) -> List[Line]:
        match self.current.type:
            case Type.INT:
                return self.parse_declaration_statement()
            case Type.ID:
                return self.parse_assignment()
            case Type.RETURN:
                return self.parse_return()
            case Type.PRINT:
                return self.parse_print()
            case Type.READ:
                return self.parse_read()
            case Type.BREAK | Type.CONTINUE:
                return self.parse_loop_control()
            case Type.WHILE:
                return self.parse_while()
            case Type.IF:
                return self.parse_if()
        UnexpectedTokenError(
            self.og_program, self.current.span, "a statement", self.current
        )

    def parse_declaration_statement(self) -> List[Line]:
        """Record the declaration, to be emitted at the start of the function."""
        name, symbol = self.parse_declaration()
        self.expect(Type.SEMICOLON)
        if symbol.kind == Kind.ARRAY:
            line = Line(Instruction.INT_ARRAY, Name(name.text), Literal(symbol.size))
        else:
            line = Line(Instruction.INT, Name(name.text))
        self.context.declarations.append(line)
        return []

    def parse_assignment(self) -> List[Line]:
        """assign := var '=' expression ';'"""
        dest = self.parse_variable()
        self.expect(Type.EQ, "'='")
        src = self.parse_expression()
        self.expect(Type.SEMICOLON)

        code = dest.code + src.code
        if src.is_call:
            if dest.kind == Kind.ARRAY:
                self.mismatch(dest, src)
            code.append(Line(Instruction.CALL, dest.operand, src.operand))
            return code

        if dest.kind != src.kind or (
            dest.kind == Kind.ARRAY and dest.symbol.dims != src.symbol.dims
        ):
            self.mismatch(dest, src)
        code.append(Line(Instruction.MOV, dest.operand, src.operand))
        return code

    def mismatch(self, dest: Expression, src: Expression) -> None:
        TypeMismatchError(
            self.og_program,
            dest.span & src.span,
            f"{str(dest.operand)!r} ({self.describe(dest)})",
            f"{str(src.operand)!r} ({self.describe(src)})",
        )

    def describe(self, expression: Expression) -> str:
        if expression.kind == Kind.ARRAY:
            return "array" + "".join(f"[{dim}]" for dim in expression.symbol.dims)
        if expression.is_call:
            return "call"
        return str(expression.kind)

    def parse_return(self) -> List[Line]:
        self.expect(Type.RETURN)
        expression = self.value(self.parse_expression())
        self.expect(Type.SEMICOLON)
        return [*expression.code, Line(Instruction.RET, expression.operand)]

    def parse_print(self) -> List[Line]:
        self.expect(Type.PRINT)
        expression = self.parse_expression()
        self.expect(Type.SEMICOLON)
        if expression.kind == Kind.ARRAY:
            ArrayValueError(self.og_program, expression.span, str(expression.operand))

        # Route the value through a temporary, so %out only ever sees a name
        temp = self.context.new_temp()
        copy = Instruction.CALL if expression.is_call else Instruction.MOV
        return [
            *expression.code,
            Line(Instruction.INT, temp),
            Line(copy, temp, expression.operand),
            Line(Instruction.OUT, temp),
        ]

    def parse_read(self) -> List[Line]:
        self.expect(Type.READ)
        dest = self.parse_variable()
        self.expect(Type.SEMICOLON)
        if dest.kind == Kind.ARRAY:
            ArrayValueError(self.og_program, dest.span, str(dest.operand))

        temp = self.context.new_temp()
        return [
            *dest.code,
            Line(Instruction.INT, temp),
            Line(Instruction.INPUT, temp),
            Line(Instruction.MOV, dest.operand, temp),
        ]

    def parse_loop_control(self) -> List[Line]:
        keyword = self.advance()
        self.expect(Type.SEMICOLON)
        if not self.context.loops:
            LoopControlError(self.og_program, keyword.span, keyword.text)

        begin, end = self.context.loops[-1]
        return [Line(Instruction.JMP, end if keyword.type == Type.BREAK else begin)]

    def parse_while(self) -> List[Line]:
        """while := 'while' condition '{' statement+ '}'"""
        self.expect(Type.WHILE)
        begin, end = self.context.new_labels("loopbegin", "endloop")
        condition = self.parse_condition()

        self.context.loops.append((begin, end))
        body = self.parse_block("a while loop")
        self.context.loops.pop()

        return [
            Line(label=begin.name),
            *condition.code,
            Line(Instruction.BRANCH_IFN, condition.operand, end),
            *body,
            Line(Instruction.JMP, begin),
            Line(label=end.name),
        ]

    def parse_if(self) -> List[Line]:
        """if := 'if' condition '{' statement+ '}' ('else' (if | '{' statement+ '}'))?"""
        self.expect(Type.IF)
        else_label, end_label = self.context.new_labels("else", "endif")
        condition = self.parse_condition()
        body = self.parse_block("an if statement")

        if self.current.type != Type.ELSE:
            return [
                *condition.code,
                Line(Instruction.BRANCH_IFN, condition.operand, end_label),
                *body,
                Line(label=end_label.name),
            ]

        self.advance()
        if self.current.type == Type.IF:
            alternative = self.parse_if()
        else:
            alternative = self.parse_block("an else statement")
        return [
            *condition.code,
            Line(Instruction.BRANCH_IFN, condition.operand, else_label),
            *body,
            Line(Instruction.JMP, end_label),
            Line(label=else_label.name),
            *alternative,
            Line(label=end_label.name),
        ]

    def parse_condition(self) -> Expression:
        """condition := expression ('<' | '<=' | '>' | '>=' | '==' | '!=') expression"""
        left = self.parse_expression()
        if self.current.type not in RELATIONAL:
            UnexpectedTokenError(
                self.og_program,
                self.current.span,
                "a relational operator",
                self.current,
            )
        operator = self.advance()
        right = self.parse_expression()
        return self.binary(left, operator, right)

    def parse_expression(self) -> Expression:
        """expression := mul_expr (('+' | '-') mul_expr)*"""
        expression = self.parse_multiply_expression()
        while self.current.type in ADDITIVE:
            operator = self.advance()
            right = self.parse_multiply_expression()
            expression = self.binary(expression, operator, right)
        return expression

    def parse_multiply_expression(self) -> Expression:
        """mul_expr := term (('*' | '/' | '%') term)*"""
        expression = self.parse_term()
        while self.current.type in MULTIPLICATIVE:
            operator = self.advance()
            right = self.parse_term()
            expression = self.binary(expression, operator, right)
        return expression

    def parse_term(self) -> Expression:
        """term := number | var | call | '(' expression ')'"""
        match self.current:
            case Token(type=Type.DIGIT) as number:
                self.advance()
                return Expression(operand=Literal(number.value), span=number.span)

            case Token(type=Type.ID):
                if self.peek().type == Type.LRB:
                    return self.parse_call()
                return self.parse_variable()

            case Token(type=Type.LRB) as bracket:
                self.advance()
                expression = self.parse_expression()
                closing = self.expect(Type.RRB, "an operator or ')'")
                expression.span = bracket.span & closing.span
                return expression

        UnexpectedTokenError(
            self.og_program, self.current.span, "an expression term", self.current
        )

    def parse_variable(self) -> Expression:
        """var := ident ('[' expression ']')*"""
        name = self.expect(Type.ID, "a variable name")
        symbol = self.lookup(name)

        indices = []
        span = name.span
        while self.current.type == Type.LSB:
            self.advance()
            indices.append(self.parse_expression())
            span = span & self.expect(Type.RSB, "an operator or ']'").span

        if symbol.kind == Kind.INT:
            if indices:
                NotAnArrayError(self.og_program, span, name.text)
            return Expression(operand=Name(name.text), span=span)

        # The array as a whole
        if not indices:
            return Expression(
                operand=Name(name.text), kind=Kind.ARRAY, symbol=symbol, span=span
            )

        if len(indices) != len(symbol.dims):
            IndexCountError(
                self.og_program, span, name.text, len(symbol.dims), len(indices)
            )
        code, offset = self.flatten_index(symbol, indices)
        return Expression(code, Element(name.text, offset), span=span)

    def flatten_index(
        self, symbol: Symbol, indices: List[Expression]
    ) -> Tuple[List[Line], Value]:
        """Compute the row-major offset of `indices` into the flattened array.

        For `int [2][3] m`, `m[i][j]` is element `i * 3 + j`.
        """
        code = []
        offset = None
        for dim, index in zip(symbol.dims, indices):
            index = self.simple(index)
            code += index.code
            if offset is None:
                offset = index.operand
                continue

            scaled = self.context.new_temp()
            code.append(Line(Instruction.INT, scaled))
            code.append(Line(Instruction.MULT, scaled, offset, Literal(dim)))
            total = self.context.new_temp()
            code.append(Line(Instruction.INT, total))
            code.append(Line(Instruction.ADD, total, scaled, index.operand))
            offset = total
        return code, offset

    def parse_call(self) -> Expression:
        """call := ident '(' (expression (',' expression)*)? ')'"""
        name = self.advance()
        if name.text not in self.context.functions:
            UnknownFunctionError(self.og_program, name.span, name.text)
        self.expect(Type.LRB)

        code = []
        args = []
        if self.current.type != Type.RRB:
            while True:
                arg = self.value(self.parse_expression())
                code += arg.code
                args.append(arg.operand)
                if self.current.type != Type.COMMA:
                    break
                self.advance()
        closing = self.expect(Type.RRB, "a ',' or ')'")

        span = name.span & closing.span
        n_params = self.context.functions[name.text]
        if len(args) != n_params:
            ArgumentCountError(self.og_program, span, name.text, n_params, len(args))
        return Expression(code, Call(name.text, tuple(args)), span=span)

    def binary(self, left: Expression, operator: Token, right: Expression) -> Expression:
        """Emit the code of both operands, then the operation into a fresh temporary."""
        left = self.value(left)
        right = self.value(right)
        temp = self.context.new_temp()
        code = [
            *left.code,
            *right.code,
            Line(Instruction.INT, temp),
            Line(OPERATORS[operator.type], temp, left.operand, right.operand),
        ]
        return Expression(code, temp, span=left.span & right.span)

    def value(self, expression: Expression) -> Expression:
        """Ensure `expression` is an integer, copying a call result into a temporary."""
        if expression.kind == Kind.ARRAY:
            ArrayValueError(self.og_program, expression.span, str(expression.operand))
        if not expression.is_call:
            return expression

        temp = self.context.new_temp()
        code = [
            *expression.code,
            Line(Instruction.INT, temp),
            Line(Instruction.CALL, temp, expression.operand),
        ]
        return Expression(code, temp, span=expression.span)

    def simple(self, expression: Expression) -> Expression:
        """Like `value`, but also copies array elements, as an index must be a literal or a name."""
        expression = self.value(expression)
        if not isinstance(expression.operand, Element):
            return expression

        temp = self.context.new_temp()
        code = [
            *expression.code,
            Line(Instruction.INT, temp),
            Line(Instruction.MOV, temp, expression.operand),
        ]
        return Expression(code, temp, span=expression.span)
