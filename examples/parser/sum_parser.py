"""Drive a tiny recursive-descent parser from a TokenCursor.

Grammar:
    sum := NUM (PLUS NUM)*
"""

from lexgen import EOF, nearley_lexer

cursor = nearley_lexer([
    r"(?P<NUM>\d+)",
    (r"(?P<WS>\s+)", {"skip": True}),
    r"(?P<PLUS>\+)",
])


def parse_sum(text: str) -> int:
    cursor.reset(text)
    token = cursor.next()
    total = 0
    while True:
        if token.type != "NUM":
            raise SyntaxError(cursor.format_error(token))
        total += int(token.value)
        token = cursor.next()
        if token.type == EOF:
            return total
        if token.type != "PLUS":
            raise SyntaxError(cursor.format_error(token))
        token = cursor.next()


print(parse_sum("1 + 2 +\n 39"))
try:
    parse_sum("1 + ?")
except SyntaxError as exc:
    print(exc)
