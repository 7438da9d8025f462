import logging
import math
from dataclasses import dataclass
from typing import Callable, Optional

from parencalc.parser import BinaryOperation, BinaryOperator, Expression, InvalidAssignmentTargetError, Literal, Variable

_logger = logging.getLogger(__name__)

Environment = dict[str, float]

# value of a variable that was never assigned; propagates through arithmetic
POISON = math.nan


@dataclass
class CalcRuntimeError(Exception):
    errmsg: str

    def __str__(self) -> str:
        return f"Runtime error: {self.errmsg}"


def evaluate(expression: Expression, variables: Environment, logger: Optional[logging.Logger] = None) -> float:
    return evaluate_expression(expression, variables, logger or _logger)


def evaluate_expression(expression: Expression, variables: Environment, logger: logging.Logger) -> float:
    if isinstance(expression, Literal):
        return expression.value
    elif isinstance(expression, Variable):
        return variables.get(expression.name, POISON)
    elif isinstance(expression, BinaryOperation):
        if expression.operator is BinaryOperator.ASSIGN:
            if not isinstance(expression.left, Variable):
                raise InvalidAssignmentTargetError(f"Assigning only works for variables, not {expression.left}")
            value = evaluate_expression(expression.right, variables, logger)
            variables[expression.left.name] = value
            logger.debug("%s <- %r", expression.left.name, value)
            return value
        impl = binary_operation_impls.get(expression.operator)
        if impl is None:
            raise CalcRuntimeError(f"Unexpected binary operator: {expression.operator}")
        left_res = evaluate_expression(expression.left, variables, logger)
        right_res = evaluate_expression(expression.right, variables, logger)
        return impl(left_res, right_res)
    else:
        raise CalcRuntimeError(f"Unexpected expression type: {expression!r}")


def _is_odd_integer(x: float) -> bool:
    return math.isfinite(x) and x.is_integer() and x % 2 == 1


def _div(a: float, b: float) -> float:
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def _pow(a: float, b: float) -> float:
    if math.isnan(b) or (abs(a) == 1 and math.isinf(b)):
        return math.nan
    try:
        return math.pow(a, b)
    except ValueError:
        if a == 0:
            # 0 ^ negative
            return math.copysign(math.inf, a) if _is_odd_integer(b) else math.inf
        # negative base, fractional exponent
        return math.nan
    except OverflowError:
        return -math.inf if a < 0 and _is_odd_integer(b) else math.inf


def _mod(a: float, b: float) -> float:
    try:
        return math.fmod(a, b)
    except ValueError:
        # x % 0, inf % y
        return math.nan


binary_operation_impls: dict[BinaryOperator, Callable[[float, float], float]] = {
    BinaryOperator.ADD: lambda a, b: a + b,
    BinaryOperator.SUB: lambda a, b: a - b,
    BinaryOperator.MUL: lambda a, b: a * b,
    BinaryOperator.DIV: _div,
    BinaryOperator.POW: _pow,
    BinaryOperator.MOD: _mod,
}
