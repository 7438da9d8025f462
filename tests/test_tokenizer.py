import pytest

from parencalc.tokenizer import (
    DEFAULT_CONFIG,
    LEGACY_CONFIG,
    Token,
    Tokenizer,
    TokenizerConfig,
    TokenType,
    tokenize,
    untokenize,
)


def test_assignment_tokens() -> None:
    tokens = tokenize("(abc = 42)")
    assert [t.value for t in tokens] == ["(", "abc", "=", 42.0, ")"]
    assert [t.type for t in tokens] == [
        TokenType.BRACKET_OPEN,
        TokenType.WORD,
        TokenType.EQUAL,
        TokenType.NUMBER,
        TokenType.BRACKET_CLOSE,
    ]


@pytest.mark.parametrize(
    "code, expected_lexemes",
    [
        pytest.param("", []),
        pytest.param("   ", []),
        pytest.param("abc", ["abc"]),
        pytest.param("(1+2)", ["(", "1", "+", "2", ")"]),
        pytest.param("( 1\t+  2 )", ["(", "1", "+", "2", ")"]),
        pytest.param("(2^3)", ["(", "2", "^", "3", ")"]),
        pytest.param("(x%y)", ["(", "x", "%", "y", ")"]),
        pytest.param("(a^b%c)", ["(", "a", "^", "b", "%", "c", ")"]),
        pytest.param("((a-b)*c/d)", ["(", "(", "a", "-", "b", ")", "*", "c", "/", "d", ")"]),
        pytest.param("(a1 # 2)", ["(", "a1", "#", "2", ")"]),
        pytest.param("1 2 3", ["1", "2", "3"]),
    ],
)
def test_tokenize_lexemes(code: str, expected_lexemes: list[str]) -> None:
    assert [t.lexeme for t in tokenize(code)] == expected_lexemes


@pytest.mark.parametrize(
    "word, expected_type",
    [
        pytest.param("42", TokenType.NUMBER),
        pytest.param("4.", TokenType.NUMBER),
        pytest.param(".5", TokenType.NUMBER),
        pytest.param("1.5e3", TokenType.NUMBER),
        pytest.param("1E2", TokenType.NUMBER),
        pytest.param("abc", TokenType.WORD),
        pytest.param("inf", TokenType.WORD),
        pytest.param("nan", TokenType.WORD),
        pytest.param("12abc", TokenType.WORD),
        pytest.param("1.2.3", TokenType.WORD),
        pytest.param(".", TokenType.WORD),
    ],
)
def test_word_classification(word: str, expected_type: TokenType) -> None:
    (token,) = tokenize(word)
    assert token.type is expected_type


def test_number_value() -> None:
    assert tokenize("1.5e3")[0].value == 1500.0
    assert tokenize(".5")[0].value == 0.5


def test_legacy_separators_absorb_caret_and_percent() -> None:
    assert [t.lexeme for t in tokenize("(2^3)", LEGACY_CONFIG)] == ["(", "2^3", ")"]
    assert [t.lexeme for t in tokenize("(2 % 3)", LEGACY_CONFIG)] == ["(", "2", "%", "3", ")"]
    assert tokenize("(2 % 3)", LEGACY_CONFIG)[2].type is TokenType.PERCENT
    assert tokenize("(2 ^ 3)", LEGACY_CONFIG)[2].type is TokenType.CARET
    assert tokenize("(2^3)", LEGACY_CONFIG)[1].type is TokenType.WORD


def test_tokenizer_is_reusable() -> None:
    tokenizer = Tokenizer(DEFAULT_CONFIG)
    assert tokenizer.tokenize("(a + b)") == tokenizer.tokenize("(a + b)")
    assert tokenizer.tokenize("c") == [Token(type=TokenType.WORD, lexeme="c")]


def test_config_rejects_unknown_separator() -> None:
    with pytest.raises(ValueError):
        TokenizerConfig(separators=frozenset("()+#"))


def test_untokenize() -> None:
    assert untokenize(tokenize("(ans=(24+(abc*2)))")) == "(ans = (24 + (abc * 2)))"
