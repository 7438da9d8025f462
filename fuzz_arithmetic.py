import math
import random
import warnings

from parencalc.parser import parse
from parencalc.runtime import evaluate
from parencalc.tokenizer import tokenize

warnings.filterwarnings("ignore")

# Python's own '%' is a floored modulo and '**' may go complex, so only these are compared
OPERATORS = ["+", "-", "*", "/"]


def generate(depth: int) -> str:
    if depth == 0 or random.random() < 0.3:
        return random.choice([str(random.randint(0, 99)), f"{random.randint(0, 99)}.{random.randint(0, 9)}"])
    return f"({generate(depth - 1)} {random.choice(OPERATORS)} {generate(depth - 1)})"


def eval_py(code: str) -> float | str:
    try:
        return float(eval(code))
    except Exception as e:
        return str(e)


def eval_my(code: str) -> float | str:
    try:
        return evaluate(parse(tokenize(code)), {})
    except Exception as e:
        return str(e)


if __name__ == "__main__":
    while True:
        code = generate(4)

        res_py = eval_py(code)
        if isinstance(res_py, str):
            continue  # division by zero, python raises where we return inf/nan

        res_my = eval_my(code)
        if isinstance(res_my, float) and math.isclose(res_my, res_py):
            continue
        print(f"{code!r}\npy: {res_py}\nmy: {res_my}\n\n")
