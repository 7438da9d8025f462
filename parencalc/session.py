import json
import logging
import math
from collections import deque
from dataclasses import dataclass, field
from typing import Optional

from parencalc.parser import ParserError, parse
from parencalc.runtime import CalcRuntimeError, Environment, evaluate
from parencalc.tokenizer import DEFAULT_CONFIG, Tokenizer, TokenizerConfig
from parencalc.utils import format_number

_logger = logging.getLogger(__name__)

QUIT_COMMANDS = ("quit", "exit")


@dataclass(frozen=True)
class SessionConfig:
    max_history: int = 10
    max_display_lines: int = 100
    strict: bool = False
    tokenizer: TokenizerConfig = DEFAULT_CONFIG


@dataclass
class Response:
    lines: list[str] = field(default_factory=list)
    result: Optional[float] = None
    error: Optional[str] = None
    quit: bool = False


class History:
    """Bounded list of successfully evaluated lines, consecutive repeats collapsed.

    Arrow-key recall is done by the console front end from these items.
    """

    def __init__(self, max_items: int = 10) -> None:
        self.max_items = max_items
        self._items: list[str] = []

    @property
    def items(self) -> list[str]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def push(self, line: str) -> None:
        if not self._items or self._items[-1] != line:
            self._items.append(line)
            del self._items[: max(0, len(self._items) - self.max_items)]


class Session:
    def __init__(self, config: Optional[SessionConfig] = None, logger: Optional[logging.Logger] = None) -> None:
        self.config = config or SessionConfig()
        self.logger = logger or _logger
        self.tokenizer = Tokenizer(self.config.tokenizer)
        self.variables: Environment = dict()
        self.history = History(self.config.max_history)
        self.display: deque[str] = deque(maxlen=self.config.max_display_lines)

    def evaluate_line(self, line: str) -> float:
        """Runs one line through the calculator, errors propagate"""
        tokens = self.tokenizer.tokenize(line)
        expression = parse(tokens, strict=self.config.strict, logger=self.logger)
        return evaluate(expression, self.variables, logger=self.logger)

    def process_line(self, line: str) -> Response:
        line = line.strip()
        if not line:
            return Response()
        if line in QUIT_COMMANDS:
            return Response(lines=["bye!"], quit=True)
        if line == "env":
            return self._show([f">>> ENV = {dump_environment(self.variables)}"])
        if line == "history":
            return self._show([">>> HISTORY:"] + ["\t" + h for h in self.history.items] + ["END"])

        try:
            result = self.evaluate_line(line)
        except (ParserError, CalcRuntimeError) as e:
            self.logger.info("Failed to evaluate %r: %s", line, e.errmsg)
            return Response(error=str(e))
        except RecursionError:
            self.logger.info("Failed to evaluate %r: expression nested too deeply", line)
            return Response(error="Invalid input!")

        self.history.push(line)
        response = self._show([f"<<< {line}", f">>> {format_number(result)}"])
        response.result = result
        return response

    def _show(self, lines: list[str]) -> Response:
        self.display.extend(lines)
        return Response(lines=lines)


def dump_environment(variables: Environment) -> str:
    # NaN and infinities have no JSON spelling
    return json.dumps({name: value if math.isfinite(value) else None for name, value in variables.items()})
