"""Tokenize an arithmetic expression in a few lines."""

from lexgen import build_lexer

lexer = build_lexer([
    (r"(?P<NUM>\d+)", {"value": lambda s: str(int(s))}),
    (r"(?P<WS>\s+)", {"skip": True}),
    r"(?P<OP>[-+*/])",
])

for token in lexer("12 + 3 * 007"):
    print(token)
