"""Tests for TokenCursor, the pull interface used by external parsers."""

from lexgen.config import LexerConfig
from lexgen.cursor import TokenCursor, nearley_lexer
from lexgen.lexer import build_lexer
from lexgen.tokens import EOF, ERROR, Token

ARITHMETIC = [
    r"(?P<NUM>\d+)",
    (r"(?P<WS>\s+)", {"skip": True}),
    r"(?P<PLUS>\+)",
]


def drain(cursor: TokenCursor) -> list[Token]:
    tokens = []
    while (token := cursor.next()) is not None:
        tokens.append(token)
    return tokens


class TestNext:
    """next() hands out tokens, then one EOF, then None."""

    def test_tokens_then_eof(self) -> None:
        cursor = nearley_lexer(ARITHMETIC).reset("12 + 3")
        assert cursor.next() == Token("NUM", "12", 1, 1, 2)
        assert cursor.next() == Token("PLUS", "+", 1, 4, 1)
        assert cursor.next() == Token("NUM", "3", 1, 6, 1)
        assert cursor.next() == Token(EOF, "3", 1, 6, 1)
        assert cursor.next() is None
        assert cursor.next() is None

    def test_eof_copies_last_token_position(self) -> None:
        cursor = nearley_lexer(ARITHMETIC).reset("1\n22")
        eof = drain(cursor)[-1]
        assert (eof.type, eof.value, eof.line, eof.col) == (EOF, "22", 2, 1)

    def test_empty_stream_eof(self) -> None:
        cursor = nearley_lexer(ARITHMETIC).reset("")
        assert cursor.next() == Token(EOF, "", 1, 1, 0)
        assert cursor.next() is None

    def test_empty_stream_eof_uses_start_line(self) -> None:
        cursor = nearley_lexer(ARITHMETIC).reset("   ", {"line": 7})
        assert cursor.next() == Token(EOF, "", 7, 1, 0)

    def test_none_buffer_is_empty(self) -> None:
        cursor = nearley_lexer(ARITHMETIC).reset(None)
        assert cursor.buffer == ""
        assert cursor.next().type == EOF

    def test_next_before_reset(self) -> None:
        cursor = nearley_lexer(ARITHMETIC)
        assert cursor.next().type == EOF
        assert cursor.next() is None

    def test_iteration_includes_eof(self) -> None:
        cursor = nearley_lexer(ARITHMETIC).reset("1+2")
        assert [t.type for t in cursor] == ["NUM", "PLUS", "NUM", EOF]
        assert list(cursor) == []


class TestResetAndSave:
    """reset() starts over; save() peeks; position is the checkpoint."""

    def test_reset_returns_cursor(self) -> None:
        cursor = nearley_lexer(ARITHMETIC)
        assert cursor.reset("1") is cursor

    def test_reset_discards_previous_state(self) -> None:
        cursor = nearley_lexer(ARITHMETIC).reset("1 + 2")
        drain(cursor)
        cursor.reset("7")
        assert cursor.position == 0
        assert cursor.buffer == "7"
        assert [t.value for t in drain(cursor)] == ["7", "7"]

    def test_reset_with_line_info_mapping(self) -> None:
        cursor = nearley_lexer(ARITHMETIC).reset("1\n2", {"line": 5})
        assert [t.line for t in drain(cursor)] == [5, 6, 6]

    def test_reset_with_saved_token(self) -> None:
        cursor = nearley_lexer(ARITHMETIC).reset("1\n2\n3")
        cursor.next()
        saved = cursor.save()
        assert saved.line == 2

        cursor.reset("2\n3", saved)
        assert [(t.value, t.line) for t in drain(cursor)[:-1]] == [("2", 2), ("3", 3)]

    def test_save_peeks_without_advancing(self) -> None:
        cursor = nearley_lexer(ARITHMETIC).reset("1 + 2")
        assert cursor.save() == cursor.save() == Token("NUM", "1", 1, 1, 1)
        assert cursor.position == 0
        cursor.next()
        assert cursor.save().type == "PLUS"
        assert cursor.position == 1

    def test_save_at_end_is_none(self) -> None:
        cursor = nearley_lexer(ARITHMETIC).reset("1")
        cursor.next()
        assert cursor.save() is None
        cursor.next()
        assert cursor.save() is None

    def test_position_counts_eof(self) -> None:
        cursor = nearley_lexer(ARITHMETIC).reset("1 2")
        drain(cursor)
        assert cursor.position == 3

    def test_tokens_snapshot(self) -> None:
        cursor = nearley_lexer(ARITHMETIC).reset("1 2")
        assert cursor.tokens == (Token("NUM", "1", 1, 1, 1), Token("NUM", "2", 1, 3, 1))


class TestTransforms:
    """Transforms run over the whole token list after each reset."""

    def test_single_transform(self) -> None:
        def drop_plus(tokens: list[Token]) -> list[Token]:
            return [t for t in tokens if t.type != "PLUS"]

        cursor = nearley_lexer(ARITHMETIC, transform=drop_plus).reset("1 + 2")
        assert [t.value for t in cursor.tokens] == ["1", "2"]

    def test_transforms_run_in_order(self) -> None:
        def tag(suffix: str):
            return lambda tokens: [t.with_type(t.type + suffix) for t in tokens]

        cursor = nearley_lexer(ARITHMETIC, transform=[tag("1"), tag("2")]).reset("4")
        assert cursor.next().type == "NUM12"

    def test_transform_from_config(self) -> None:
        config = LexerConfig(transforms=(lambda tokens: tokens[::-1],))
        cursor = TokenCursor(build_lexer(ARITHMETIC), config).reset("1 2 3")
        assert [t.value for t in cursor.tokens] == ["3", "2", "1"]

    def test_transform_argument_overrides_config(self) -> None:
        config = LexerConfig(transforms=(lambda tokens: [],))
        cursor = nearley_lexer(ARITHMETIC, transform=lambda tokens: tokens, config=config).reset("1")
        assert len(cursor.tokens) == 1

    def test_transform_result_may_be_any_iterable(self) -> None:
        cursor = nearley_lexer(ARITHMETIC, transform=lambda tokens: iter(tokens)).reset("1 2")
        assert len(cursor.tokens) == 2


class TestHasAndFormatError:
    """Membership and error messages for the parser."""

    def test_has_rule_names(self) -> None:
        cursor = nearley_lexer(ARITHMETIC)
        for name in ("NUM", "WS", "PLUS", ERROR, EOF):
            assert cursor.has(name)

    def test_has_unknown_name(self) -> None:
        assert not nearley_lexer(ARITHMETIC).has("MINUS")

    def test_format_error(self) -> None:
        cursor = nearley_lexer(ARITHMETIC).reset("1 +\n@")
        error = [t for t in cursor.tokens if t.type == ERROR][0]
        assert cursor.format_error(error) == 'Error near "@" in line 2'

    def test_independent_cursors(self) -> None:
        lexer = build_lexer(ARITHMETIC)
        first = TokenCursor(lexer).reset("1 2")
        second = TokenCursor(lexer).reset("3")
        first.next()
        assert second.next().value == "3"
        assert first.next().value == "2"
