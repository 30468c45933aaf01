"""Tests for EndOfFileWhitespaceRule."""

import unittest

import pytest

from conventions_linter.domain.rules.end_of_file import EndOfFileWhitespaceRule
from conventions_linter.domain.tokens import Token, TokenKind, TokenSequence
from tests.linter_test_utils import build_sequence


@pytest.mark.unit
class TestEndOfFileWhitespaceRule(unittest.TestCase):
    def setUp(self) -> None:
        self.rule = EndOfFileWhitespaceRule()

    def _check(self, code: str):
        return self.rule.check(build_sequence(code), 0)

    def test_single_trailing_blank_line_is_clean(self) -> None:
        self.assertEqual(self._check("x = 1\n\n"), [])

    def test_no_blank_line(self) -> None:
        violations = self._check("x = 1\n")
        self.assertEqual(len(violations), 1)
        v = violations[0]
        self.assertEqual(v.code, "NotFound")
        self.assertEqual(v.message, "Expected 1 blank line at end of file; 0 found")
        self.assertEqual(v.message_args, ("0",))
        self.assertEqual(v.line, 1)

    def test_no_trailing_newline_at_all(self) -> None:
        violations = self._check("x = 1")
        self.assertEqual([v.code for v in violations], ["NotFound"])

    def test_too_many_blank_lines(self) -> None:
        violations = self._check("x = 1\n\n\n")
        self.assertEqual(len(violations), 1)
        v = violations[0]
        self.assertEqual(v.code, "TooMany")
        self.assertEqual(v.message, 'Expected 1 blank line at end of file; "2" found')
        self.assertEqual(v.line, 1)

    def test_trailing_comment_counts_as_code(self) -> None:
        self.assertEqual([v.code for v in self._check("x = 1\n# end\n")], ["NotFound"])

    def test_empty_file_never_triggers(self) -> None:
        self.assertEqual(self.rule.check(TokenSequence(()), 0), [])
        self.assertEqual(self._check(""), [])

    def test_only_first_open_tag_runs(self) -> None:
        tokens = TokenSequence([
            Token(TokenKind.OPEN_TAG, "", 1),
            Token(TokenKind.NAME, "x", 1),
            Token(TokenKind.OPEN_TAG, "", 2),
            Token(TokenKind.NAME, "y", 2),
        ])
        self.assertEqual(len(self.rule.check(tokens, 0)), 1)
        self.assertEqual(self.rule.check(tokens, 2), [])

    def test_whitespace_only_sequence_does_not_underflow(self) -> None:
        tokens = TokenSequence([
            Token(TokenKind.WHITESPACE, "\n", 1),
            Token(TokenKind.WHITESPACE, "\n", 2),
            Token(TokenKind.WHITESPACE, "\n", 3),
        ])
        violations = self.rule.check(tokens, 0)
        self.assertEqual([v.code for v in violations], ["TooMany"])
        self.assertEqual(violations[0].token_index, 0)
