import enum
import logging
import re
from dataclasses import dataclass, field
from typing import Optional

from parencalc.tokenizer import Token, TokenType, untokenize
from parencalc.utils import PrintableEnum, format_number

_logger = logging.getLogger(__name__)


@dataclass
class ParserError(Exception):
    errmsg: str
    tokens: list[Token] = field(default_factory=list)
    error_token_idx: int = 0

    def __str__(self) -> str:
        if not self.tokens:
            return f"Parser error: {self.errmsg}"
        if self.error_token_idx < len(self.tokens):
            rendered_upto = untokenize(self.tokens[: self.error_token_idx + 1])
            caret_col = len(rendered_upto) - len(self.tokens[self.error_token_idx].lexeme)
        else:
            caret_col = len(untokenize(self.tokens)) + 1
        return "\n".join([f"Parser error: {self.errmsg}", untokenize(self.tokens), " " * caret_col + "^"])


class InvalidTokenError(ParserError):
    pass


class UnknownOperatorError(ParserError):
    pass


class MalformedExpressionError(ParserError):
    pass


class InvalidAssignmentTargetError(ParserError):
    pass


class BinaryOperator(PrintableEnum):
    ADD = enum.auto()
    SUB = enum.auto()
    MUL = enum.auto()
    DIV = enum.auto()
    POW = enum.auto()
    MOD = enum.auto()
    ASSIGN = enum.auto()

    @property
    def label(self) -> str:
        return self.name.capitalize()


@dataclass
class Literal:
    value: float

    def __str__(self) -> str:
        return f"Num({format_number(self.value)})"


@dataclass
class Variable:
    name: str

    def __str__(self) -> str:
        return f"Var('{self.name}')"


@dataclass
class BinaryOperation:
    operator: BinaryOperator
    left: "Expression"
    right: "Expression"

    def __str__(self) -> str:
        return f"{self.operator.label}({self.left}, {self.right})"


Expression = Literal | Variable | BinaryOperation

OPERATORS = {
    TokenType.EQUAL: BinaryOperator.ASSIGN,
    TokenType.PLUS: BinaryOperator.ADD,
    TokenType.MINUS: BinaryOperator.SUB,
    TokenType.STAR: BinaryOperator.MUL,
    TokenType.SLASH: BinaryOperator.DIV,
    TokenType.CARET: BinaryOperator.POW,
    TokenType.PERCENT: BinaryOperator.MOD,
}

IDENTIFIER_PATTERN = re.compile(r"[a-zA-Z]+")


def stringify(expression: Expression) -> str:
    return str(expression)


def parse(tokens: list[Token], strict: bool = False, logger: Optional[logging.Logger] = None) -> Expression:
    """Builds one expression tree starting at the first token.

    Tokens left over after the root expression are ignored with a warning,
    unless ``strict`` is set, in which case they are a MalformedExpressionError.
    """
    logger = logger or _logger
    expr, i = _consume_expression(tokens, 0, logger)
    if i < len(tokens):
        if strict:
            raise MalformedExpressionError("Unexpected tokens after expression", tokens=tokens, error_token_idx=i)
        logger.warning("Ignoring %d trailing token(s): %s", len(tokens) - i, untokenize(tokens[i:]))
    logger.debug("EXPR: %s", expr)
    return expr


def _consume_expression(tokens: list[Token], i: int, logger: logging.Logger) -> tuple[Expression, int]:
    if i >= len(tokens):
        raise InvalidTokenError("Invalid token: end of input", tokens=tokens, error_token_idx=i)

    token = tokens[i]
    if token.type is TokenType.BRACKET_OPEN:
        left_idx = i + 1
        left, i = _consume_expression(tokens, left_idx, logger)

        if i >= len(tokens):
            raise MalformedExpressionError(
                "Invalid expression: operator expected, found end of input", tokens=tokens, error_token_idx=i
            )
        operator_token = tokens[i]
        operator = OPERATORS.get(operator_token.type)
        if operator is None:
            raise UnknownOperatorError(
                f"Unknown operator: {operator_token.lexeme}", tokens=tokens, error_token_idx=i
            )
        if operator is BinaryOperator.ASSIGN and not isinstance(left, Variable):
            raise InvalidAssignmentTargetError(
                f"Assigning only works for variables, not {left}", tokens=tokens, error_token_idx=left_idx
            )

        right, i = _consume_expression(tokens, i + 1, logger)
        if i >= len(tokens) or tokens[i].type is not TokenType.BRACKET_CLOSE:
            raise MalformedExpressionError(
                "Invalid expression: missing closing bracket?", tokens=tokens, error_token_idx=i
            )
        logger.debug("L:%s OP:%s R:%s", left, operator_token.lexeme, right)
        return BinaryOperation(operator=operator, left=left, right=right), i + 1
    elif token.type is TokenType.NUMBER:
        return Literal(float(token.lexeme)), i + 1
    elif token.type is TokenType.WORD and IDENTIFIER_PATTERN.fullmatch(token.lexeme):
        return Variable(token.lexeme), i + 1
    else:
        raise InvalidTokenError(f"Invalid token: {token.lexeme}", tokens=tokens, error_token_idx=i)
