from parencalc.parser import ParserError, parse
from parencalc.runtime import Environment, evaluate
from parencalc.tokenizer import tokenize
from parencalc.utils import format_number

variables: Environment = dict()

for code in [
    "(abc = 42)",
    "(ans = (24 + (abc * ((16 / 2) - 5))))",
    "abc",
    "(2^10)",
    "(7%3)",
    "(-7 % 3)",
    "(x = y)",
    "(1 / 0)",
    "((a = 2) * (b = (a + 1)))",
    "(3 + )",
    "(5 + 3",
    "(5 # 3)",
    "(2 = 3)",
    "(1 + 2) 3",
]:
    print("=" * 10)
    print(f"code: {code!r}")
    tokens = tokenize(code)
    print(f"tokens: {' '.join(str(t) for t in tokens)}")

    try:
        expression = parse(tokens)
    except ParserError as e:
        print(e)
        continue
    print(f"ast: {expression}")

    result = evaluate(expression, variables)
    print(f"result: {format_number(result)}")
    print(f"variables: {variables}")
