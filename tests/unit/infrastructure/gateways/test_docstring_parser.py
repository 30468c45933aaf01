"""Tests for DocstringCommentParser."""

import unittest

import pytest

from conventions_linter.domain.exceptions import CommentParseError
from conventions_linter.infrastructure.gateways.docstring_parser import DocstringCommentParser


def _parse(text: str) -> DocstringCommentParser:
    parser = DocstringCommentParser(text)
    parser.parse()
    return parser


@pytest.mark.unit
class TestDescriptions(unittest.TestCase):
    def test_one_line_docstring(self) -> None:
        comment = _parse('"""Compute the total."""').get_comment()
        self.assertIsNotNone(comment)
        self.assertEqual(comment.short_description, "Compute the total.")
        self.assertEqual(comment.content, "Compute the total.")
        self.assertEqual(comment.line, 0)
        self.assertIsNone(comment.blank_lines_before_tags)

    def test_short_and_long_description(self) -> None:
        text = '"""\n    Compute the total.\n    Over all rows.\n\n    Rows without a price are skipped.\n    """'
        comment = _parse(text).get_comment()
        self.assertEqual(comment.line, 1)
        self.assertEqual(comment.short_description, "Compute the total. Over all rows.")
        self.assertEqual(comment.long_description, "Rows without a price are skipped.")
        self.assertEqual(comment.blank_lines_before_long, 1)
        self.assertEqual(comment.end_line, 5)

    def test_counts_blank_lines_between_sections(self) -> None:
        text = '"""Summary.\n\n\n    Long text.\n    @return: Value.\n    """'
        comment = _parse(text).get_comment()
        self.assertEqual(comment.blank_lines_before_long, 2)
        self.assertEqual(comment.blank_lines_before_tags, 0)

    def test_empty_docstring_has_no_comment(self) -> None:
        self.assertIsNone(_parse('""""""').get_comment())
        self.assertIsNone(_parse('"""   \n    """').get_comment())

    def test_tags_without_description(self) -> None:
        comment = _parse('"""\n    @return: Value.\n    """').get_comment()
        self.assertIsNotNone(comment)
        self.assertEqual(comment.short_description, "")
        self.assertEqual(comment.content, "")

    def test_single_quoted_and_raw_strings(self) -> None:
        self.assertEqual(_parse("'Quoted.'").get_comment().content, "Quoted.")
        self.assertEqual(_parse('r"""Raw \\d."""').get_comment().content, "Raw \\d.")


@pytest.mark.unit
class TestTags(unittest.TestCase):
    def test_epydoc_params_and_return(self) -> None:
        text = (
            '"""\n    Add.\n\n'
            "    @param a: First operand.\n"
            "    @param b: Second operand.\n"
            '    @return: The sum.\n    """'
        )
        parser = _parse(text)
        params = parser.get_params()
        self.assertEqual([p.variable_name for p in params], ["a", "b"])
        self.assertEqual(params[0].comment, "First operand.")
        self.assertEqual(params[0].line, 3)
        self.assertEqual(parser.get_return().value, "The sum.")
        self.assertEqual(parser.get_return().line, 5)
        self.assertEqual(parser.get_comment().blank_lines_before_tags, 1)

    def test_sphinx_fields_with_type(self) -> None:
        text = '"""Count.\n\n    :param int count: Number of items.\n    :returns: The total.\n    """'
        parser = _parse(text)
        param = parser.get_params()[0]
        self.assertEqual(param.variable_name, "count")
        self.assertEqual(param.type_name, "int")
        self.assertEqual(param.comment, "Number of items.")
        self.assertEqual(parser.get_return().value, "The total.")

    def test_bare_form_and_aliases(self) -> None:
        text = '"""Run.\n\n    @arg name The name.\n    @argument *rest Extra values.\n    """'
        params = _parse(text).get_params()
        self.assertEqual([(p.variable_name, p.comment) for p in params],
                         [("name", "The name."), ("rest", "Extra values.")])

    def test_colon_inside_bare_form_comment(self) -> None:
        text = '"""Wait.\n\n    @param timeout Seconds to wait (default: 5).\n    """'
        param = _parse(text).get_params()[0]
        self.assertEqual(param.variable_name, "timeout")
        self.assertEqual(param.comment, "Seconds to wait (default: 5).")
        self.assertEqual(param.type_name, "")

    def test_colon_inside_named_form_comment(self) -> None:
        text = '"""Wait.\n\n    :param float timeout: Seconds, e.g. 1: one second.\n    """'
        param = _parse(text).get_params()[0]
        self.assertEqual((param.type_name, param.variable_name), ("float", "timeout"))
        self.assertEqual(param.comment, "Seconds, e.g. 1: one second.")

    def test_continuation_lines_extend_tag(self) -> None:
        text = (
            '"""Run.\n\n    @param a: First\n        line two.\n'
            '    @raises ValueError: When bad.\n        not part of a.\n    """'
        )
        params = _parse(text).get_params()
        self.assertEqual(len(params), 1)
        self.assertEqual(params[0].comment, "First line two.")

    def test_missing_name_and_comment(self) -> None:
        text = '"""Run.\n\n    @param : Something.\n    @param b\n    """'
        params = _parse(text).get_params()
        self.assertEqual(params[0].variable_name, "")
        self.assertEqual(params[1].variable_name, "b")
        self.assertEqual(params[1].comment, "")

    def test_empty_return_tag(self) -> None:
        ret = _parse('"""Run.\n\n    @return\n    """').get_return()
        self.assertIsNotNone(ret)
        self.assertEqual(ret.value, "")

    def test_only_first_return_tag_is_kept(self) -> None:
        ret = _parse('"""Run.\n\n    @return: One.\n    @returns: Two.\n    """').get_return()
        self.assertEqual(ret.value, "One.")

    def test_accessors_before_parse(self) -> None:
        parser = DocstringCommentParser('"""Doc."""')
        self.assertIsNone(parser.get_comment())
        self.assertEqual(parser.get_params(), [])
        self.assertIsNone(parser.get_return())


@pytest.mark.unit
class TestParseErrors(unittest.TestCase):
    def test_non_text_literal(self) -> None:
        with self.assertRaisesRegex(CommentParseError, "expected text, got bytes"):
            _parse('b"""Doc."""')

    def test_malformed_literal(self) -> None:
        with self.assertRaises(CommentParseError):
            _parse("foo(")
