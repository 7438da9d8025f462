import enum
import re
from dataclasses import dataclass, field

from parencalc.utils import PrintableEnum


class TokenType(PrintableEnum):
    NUMBER = enum.auto()
    WORD = enum.auto()
    PLUS = enum.auto()
    MINUS = enum.auto()
    STAR = enum.auto()
    SLASH = enum.auto()
    BRACKET_OPEN = enum.auto()
    BRACKET_CLOSE = enum.auto()
    CARET = enum.auto()
    PERCENT = enum.auto()
    EQUAL = enum.auto()


@dataclass
class Token:
    type: TokenType
    lexeme: str

    @property
    def value(self) -> float | str:
        if self.type is TokenType.NUMBER:
            return float(self.lexeme)
        return self.lexeme

    def __str__(self) -> str:
        return f"<{self.type}>{self.lexeme}"


SINGLE_CHAR_TOKENS = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "(": TokenType.BRACKET_OPEN,
    ")": TokenType.BRACKET_CLOSE,
    "=": TokenType.EQUAL,
    "^": TokenType.CARET,
    "%": TokenType.PERCENT,
}

# no sign: '+' and '-' are always separators
NUMBER_PATTERN = re.compile(r"(\d+\.?\d*|\.\d+)([eE]\d+)?")


@dataclass(frozen=True)
class TokenizerConfig:
    separators: frozenset[str] = field(default=frozenset("()+-*/=^%"))

    def __post_init__(self) -> None:
        unknown = sorted(s for s in self.separators if s not in SINGLE_CHAR_TOKENS)
        if unknown:
            raise ValueError(f"Unsupported separator characters: {unknown}")


DEFAULT_CONFIG = TokenizerConfig()
# '^' and '%' are glued to neighbouring words with this one
LEGACY_CONFIG = TokenizerConfig(separators=frozenset("()+-*/="))


def _word_token(word: str) -> Token:
    if word in SINGLE_CHAR_TOKENS:
        # a spaced operator that is not in the separator set
        return Token(type=SINGLE_CHAR_TOKENS[word], lexeme=word)
    if NUMBER_PATTERN.fullmatch(word):
        return Token(type=TokenType.NUMBER, lexeme=word)
    return Token(type=TokenType.WORD, lexeme=word)


class Tokenizer:
    def __init__(self, config: TokenizerConfig = DEFAULT_CONFIG) -> None:
        self.config = config

    def tokenize(self, code: str) -> list[Token]:
        tokens: list[Token] = []
        word: list[str] = []
        for char in code:
            if char in self.config.separators or char.isspace():
                if word:
                    tokens.append(_word_token("".join(word)))
                    word = []
                if not char.isspace():
                    tokens.append(Token(type=SINGLE_CHAR_TOKENS[char], lexeme=char))
            else:
                word.append(char)
        if word:
            tokens.append(_word_token("".join(word)))
        return tokens


def tokenize(code: str, config: TokenizerConfig = DEFAULT_CONFIG) -> list[Token]:
    return Tokenizer(config).tokenize(code)


def untokenize(tokens: list[Token]) -> str:
    result = " ".join(t.lexeme for t in tokens)

    # ( 1 + 2 ) => (1 + 2)
    result = re.sub(r"\(\s+", "(", result)
    result = re.sub(r"\s+\)", ")", result)
    return result
