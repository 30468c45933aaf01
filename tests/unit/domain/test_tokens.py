"""Unit tests for TokenSequence (domain/tokens.py)."""

import unittest

import pytest

from conventions_linter.domain.tokens import Token, TokenKind, TokenSequence
from tests.linter_test_utils import build_sequence


def _sequence(*kinds: TokenKind) -> TokenSequence:
    return TokenSequence(Token(kind=kind, text="", line=i + 1) for i, kind in enumerate(kinds))


@pytest.mark.unit
class TestTokenSequenceLookups(unittest.TestCase):
    """Bounds-checked access and directional searches."""

    def setUp(self) -> None:
        self.tokens = _sequence(
            TokenKind.OPEN_TAG,
            TokenKind.NAME,
            TokenKind.WHITESPACE,
            TokenKind.COMMENT,
            TokenKind.WHITESPACE,
        )

    def test_get_rejects_out_of_range_and_negative(self) -> None:
        with self.assertRaises(IndexError):
            self.tokens.get(5)
        with self.assertRaises(IndexError):
            self.tokens.get(-1)

    def test_length_and_iteration(self) -> None:
        self.assertEqual(self.tokens.length(), 5)
        self.assertEqual(len(list(self.tokens)), 5)
        self.assertIs(self.tokens[1].kind, TokenKind.NAME)

    def test_find_previous_with_exclude_skips_matching_kinds(self) -> None:
        self.assertEqual(self.tokens.find_previous(TokenKind.WHITESPACE, 4, exclude=True), 3)

    def test_find_previous_accepts_kind_sets(self) -> None:
        found = self.tokens.find_previous({TokenKind.NAME, TokenKind.OPEN_TAG}, 4)
        self.assertEqual(found, 1)

    def test_find_previous_never_walks_below_zero(self) -> None:
        self.assertIsNone(self.tokens.find_previous(TokenKind.CLASS, 4))
        self.assertIsNone(self.tokens.find_previous(TokenKind.OPEN_TAG, -1))

    def test_find_previous_honours_end_bound(self) -> None:
        self.assertIsNone(self.tokens.find_previous(TokenKind.OPEN_TAG, 4, end=1))

    def test_find_previous_clamps_start(self) -> None:
        self.assertEqual(self.tokens.find_previous(TokenKind.WHITESPACE, 99), 4)

    def test_find_next_end_is_exclusive(self) -> None:
        self.assertEqual(self.tokens.find_next(TokenKind.COMMENT, 0), 3)
        self.assertIsNone(self.tokens.find_next(TokenKind.COMMENT, 0, end=3))

    def test_indices_of(self) -> None:
        self.assertEqual(list(self.tokens.indices_of(TokenKind.WHITESPACE)), [2, 4])

    def test_empty_sequence_searches_return_none(self) -> None:
        empty = TokenSequence(())
        self.assertEqual(empty.length(), 0)
        self.assertIsNone(empty.find_previous(TokenKind.WHITESPACE, 0, exclude=True))
        self.assertIsNone(empty.find_next(TokenKind.WHITESPACE, 0))


@pytest.mark.unit
class TestSignatureHelpers(unittest.TestCase):
    """function_name and method_parameters over real Python headers."""

    def _function_index(self, code: str) -> tuple[TokenSequence, int]:
        tokens = build_sequence(code)
        return tokens, next(tokens.indices_of(TokenKind.FUNCTION))

    def test_function_name(self) -> None:
        tokens, index = self._function_index("def compute(a):\n    pass\n")
        self.assertEqual(tokens.function_name(index), "compute")

    def test_parameters_skip_annotations_defaults_and_markers(self) -> None:
        code = (
            "def f(self, a: int = 1, *args, b=lambda x, y: x, **kw) -> None:\n"
            "    pass\n"
        )
        tokens, index = self._function_index(code)
        self.assertEqual(tokens.method_parameters(index), ["self", "a", "args", "b", "kw"])

    def test_parameters_skip_bare_star_and_slash(self) -> None:
        tokens, index = self._function_index("def f(a, /, b, *, c):\n    pass\n")
        self.assertEqual(tokens.method_parameters(index), ["a", "b", "c"])

    def test_parameters_ignore_nested_brackets(self) -> None:
        tokens, index = self._function_index(
            "def f(items: dict[str, int] = {'k': 1}, flag=(1, 2)):\n    pass\n"
        )
        self.assertEqual(tokens.method_parameters(index), ["items", "flag"])

    def test_no_parameters(self) -> None:
        tokens, index = self._function_index("def f():\n    pass\n")
        self.assertEqual(tokens.method_parameters(index), [])
