"""Function doc comment rules.

BaseFunctionCommentRule carries the baseline checks (presence, parsing,
description spacing, parameter tags, return tag). FunctionCommentRule wraps a
base instance and adds capitalization checks, the {@inheritdoc} exemption and
a @return requirement that only applies to functions returning a value.
"""

import re
import string
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Optional

from conventions_linter.domain.comments import DocComment
from conventions_linter.domain.constants import (
    DEFAULT_IGNORED_PARAMS,
    DEFAULT_RETURN_EXEMPT_METHODS,
    UNKNOWN_PARAM_NAME,
)
from conventions_linter.domain.exceptions import CommentParseError
from conventions_linter.domain.protocols import CommentParserFactory, CommentParserProtocol
from conventions_linter.domain.rules import Violation
from conventions_linter.domain.tokens import TokenKind, TokenSequence


@dataclass(frozen=True)
class FunctionCommentContext:
    """Everything one invocation needs, passed explicitly instead of kept on the rule."""

    tokens: TokenSequence
    function_index: int
    comment_index: int
    comment: DocComment
    parser: CommentParserProtocol

    @property
    def comment_line(self) -> int:
        return self.tokens.get(self.comment_index).line

    def line_of(self, relative_line: int) -> int:
        """Absolute line of a line number relative to the comment token."""
        return self.comment_line + relative_line


ContextCheck = Callable[[FunctionCommentContext], list[Violation]]


class BaseFunctionCommentRule:
    """
    Baseline doc comment checks for functions.

    Verifies that:
    - A comment exists and is a docstring.
    - The comment parses and is not empty.
    - There is a short description, with one blank line before the long
      description and before the tags.
    - Parameter tags match the signature by position, and have comments.
    - A @return tag exists and is not empty.
    """

    code_missing: str = "Missing"
    code_wrong_style: str = "WrongStyle"
    code_failed_parse: str = "FailedParse"
    code_empty: str = "Empty"
    code_missing_short: str = "MissingShort"
    code_spacing_before_short: str = "SpacingBeforeShort"
    code_spacing_between: str = "SpacingBetween"
    code_spacing_before_tags: str = "SpacingBeforeTags"
    code_missing_param_name: str = "MissingParamName"
    code_param_name_no_match: str = "ParamNameNoMatch"
    code_param_name_no_case_match: str = "ParamNameNoCaseMatch"
    code_extra_param_comment: str = "ExtraParamComment"
    code_missing_param_comment: str = "MissingParamComment"
    code_missing_param_tag: str = "MissingParamTag"
    code_missing_return: str = "MissingReturn"
    code_missing_return_type: str = "MissingReturnType"
    description: str = "Parses and verifies the doc comments for functions."

    MESSAGES: dict[str, str] = {
        "Missing": "Missing function doc comment",
        "WrongStyle": "You must use a docstring for a function comment",
        "FailedParse": "Function doc comment could not be parsed: %s",
        "Empty": "Function doc comment is empty",
        "MissingShort": "Missing short description in function doc comment",
        "SpacingBeforeShort": "Extra newline(s) found before function comment short description",
        "SpacingBetween": "There must be exactly one blank line between descriptions in function comment",
        "SpacingBeforeTags": "There must be exactly one blank line before the tags in function comment",
        "MissingParamName": "Missing parameter name at position %s",
        "ParamNameNoMatch": "Doc comment for var %s does not match actual variable name %s at position %s",
        "ParamNameNoCaseMatch": (
            "Doc comment for var %s does not match case of actual variable name %s at position %s"
        ),
        "ExtraParamComment": "Superfluous doc comment at position %s",
        "MissingParamComment": 'Missing comment for param "%s" at position %s',
        "MissingParamTag": 'Doc comment for "%s" missing',
        "MissingReturn": "Missing @return tag in function comment",
        "MissingReturnType": "Return value missing for @return tag in function comment",
    }

    _BODY_SKIP: frozenset[TokenKind] = frozenset({TokenKind.WHITESPACE, TokenKind.TERMINATOR})
    _COMMENT_SKIP: frozenset[TokenKind] = _BODY_SKIP | {TokenKind.COMMENT}

    def __init__(
        self,
        parser_factory: CommentParserFactory,
        ignored_params: Iterable[str] = DEFAULT_IGNORED_PARAMS,
        return_exempt_methods: Iterable[str] = DEFAULT_RETURN_EXEMPT_METHODS,
    ) -> None:
        self._parser_factory = parser_factory
        self._ignored_params = frozenset(ignored_params)
        self._return_exempt_methods = frozenset(return_exempt_methods)

    def _violation(
        self,
        code: str,
        tokens: TokenSequence,
        token_index: int,
        message_args: tuple[str, ...] = (),
        line: Optional[int] = None,
    ) -> Violation:
        return Violation.from_token(
            code=code,
            template=self.MESSAGES[code],
            tokens=tokens,
            token_index=token_index,
            message_args=message_args,
            line=line,
        )

    def first_body_token(self, tokens: TokenSequence, function_index: int) -> Optional[int]:
        """
        First token of the function body.

        A trailing comment on the header line is ignored. Full-line comments
        are skipped only when a docstring follows them, since the string is
        still the function's __doc__.
        """
        function = tokens.get(function_index)
        opener = function.scope_opener
        if opener is None:
            return None
        end = None if function.scope_closer is None else function.scope_closer + 1
        header_line = tokens.get(opener).line

        index = tokens.find_next(self._BODY_SKIP, opener + 1, end, exclude=True)
        while (
            index is not None
            and tokens.get(index).kind is TokenKind.COMMENT
            and tokens.get(index).line == header_line
        ):
            index = tokens.find_next(self._BODY_SKIP, index + 1, end, exclude=True)

        if index is not None and tokens.get(index).kind is TokenKind.COMMENT:
            statement = tokens.find_next(self._COMMENT_SKIP, index + 1, end, exclude=True)
            if statement is not None and tokens.get(statement).kind is TokenKind.DOC_COMMENT:
                return statement
        return index

    def find_comment(self, tokens: TokenSequence, function_index: int) -> Optional[int]:
        """Index of the function's doc comment token, or None."""
        index = self.first_body_token(tokens, function_index)
        if index is not None and tokens.get(index).kind is TokenKind.DOC_COMMENT:
            return index
        return None

    def open_comment(
        self, tokens: TokenSequence, function_index: int
    ) -> tuple[Optional[FunctionCommentContext], list[Violation]]:
        """Locate and parse the doc comment. Returns no context when checks cannot continue."""
        if tokens.get(function_index).scope_opener is None:
            return None, []

        first = self.first_body_token(tokens, function_index)
        if first is None or tokens.get(first).kind is not TokenKind.DOC_COMMENT:
            if first is not None and tokens.get(first).kind is TokenKind.COMMENT:
                return None, [self._violation(self.code_wrong_style, tokens, first)]
            return None, [self._violation(self.code_missing, tokens, function_index)]

        parser = self._parser_factory(tokens.get(first).text)
        try:
            parser.parse()
        except CommentParseError as exc:
            return None, [
                self._violation(self.code_failed_parse, tokens, first, (str(exc),))
            ]

        comment = parser.get_comment()
        if comment is None:
            return None, [self._violation(self.code_empty, tokens, first)]

        context = FunctionCommentContext(
            tokens=tokens,
            function_index=function_index,
            comment_index=first,
            comment=comment,
            parser=parser,
        )
        return context, []

    def check_descriptions(self, context: FunctionCommentContext) -> list[Violation]:
        """Short description presence and blank-line spacing between sections."""
        comment = context.comment
        tokens = context.tokens
        anchor = context.comment_index
        if not comment.short_description.strip():
            return [self._violation(self.code_missing_short, tokens, anchor)]

        violations: list[Violation] = []
        line = context.line_of(comment.line)
        if comment.line > 1:
            violations.append(
                self._violation(self.code_spacing_before_short, tokens, anchor, line=line)
            )
        if comment.long_description and comment.blank_lines_before_long != 1:
            violations.append(
                self._violation(self.code_spacing_between, tokens, anchor, line=line)
            )
        if comment.blank_lines_before_tags is not None and comment.blank_lines_before_tags != 1:
            violations.append(
                self._violation(self.code_spacing_before_tags, tokens, anchor, line=line)
            )
        return violations

    def process_params(self, context: FunctionCommentContext) -> list[Violation]:
        """Match parameter tags against the signature by position."""
        tokens = context.tokens
        anchor = context.comment_index
        real_names = [
            name
            for name in tokens.method_parameters(context.function_index)
            if name not in self._ignored_params
        ]
        params = context.parser.get_params()

        violations: list[Violation] = []
        found: list[str] = []
        for position, param in enumerate(params, start=1):
            line = context.line_of(param.line)
            param_name = param.variable_name or UNKNOWN_PARAM_NAME
            if position <= len(real_names):
                real_name = real_names[position - 1]
                found.append(real_name)
                if param.variable_name and real_name != param.variable_name:
                    code = self.code_param_name_no_match
                    if real_name.lower() == param.variable_name.lower():
                        code = self.code_param_name_no_case_match
                    violations.append(
                        self._violation(
                            code, tokens, anchor, (param_name, real_name, str(position)), line
                        )
                    )
            else:
                violations.append(
                    self._violation(
                        self.code_extra_param_comment, tokens, anchor, (str(position),), line
                    )
                )

            if not param.variable_name:
                violations.append(
                    self._violation(
                        self.code_missing_param_name, tokens, anchor, (str(position),), line
                    )
                )
            if not param.comment.strip():
                violations.append(
                    self._violation(
                        self.code_missing_param_comment,
                        tokens,
                        anchor,
                        (param_name, str(position)),
                        line,
                    )
                )

        missing_line = context.line_of(params[-1].line if params else context.comment.line)
        for real_name in real_names:
            if real_name not in found:
                violations.append(
                    self._violation(
                        self.code_missing_param_tag, tokens, anchor, (real_name,), missing_line
                    )
                )
        return violations

    def process_return(self, context: FunctionCommentContext) -> list[Violation]:
        """Require a non-empty @return tag, except for constructors and destructors."""
        tokens = context.tokens
        if tokens.function_name(context.function_index) in self._return_exempt_methods:
            return []

        return_tag = context.parser.get_return()
        if return_tag is None:
            return [
                self._violation(
                    self.code_missing_return,
                    tokens,
                    context.comment_index,
                    line=context.line_of(context.comment.end_line),
                )
            ]
        if not return_tag.value.strip():
            return [
                self._violation(
                    self.code_missing_return_type,
                    tokens,
                    context.comment_index,
                    line=context.line_of(return_tag.line),
                )
            ]
        return []

    def run_steps(
        self, tokens: TokenSequence, function_index: int, steps: Iterable[ContextCheck]
    ) -> list[Violation]:
        """Open the comment, then collect the violations of each step in order."""
        context, violations = self.open_comment(tokens, function_index)
        if context is None:
            return violations
        for step in steps:
            violations.extend(step(context))
        return violations

    def process(self, tokens: TokenSequence, function_index: int) -> list[Violation]:
        """Run every baseline check for one function."""
        return self.run_steps(
            tokens,
            function_index,
            (self.process_params, self.process_return, self.check_descriptions),
        )


class FunctionCommentRule:
    """
    Extends the baseline checks by delegation.

    - The description and every parameter comment must start with an uppercase letter.
    - A comment that is only {@inheritdoc} skips parameter and return checks.
    - @return is only required when the body returns a value.
    """

    code_comment_upper: str = "MissingCommentUpper"
    code_param_comment_upper: str = "MissingParamCommentUpper"
    description: str = "Verifies capitalization, inherited docs and return tags of function comments."

    MESSAGES: dict[str, str] = {
        "MissingCommentUpper": "Comment must start with an uppercase",
        "MissingParamCommentUpper": 'Comment of "%s" must start with an uppercase',
    }

    INHERIT_DOC_PATTERN = re.compile(r"\{@inheritdoc\}", re.IGNORECASE)

    _PRECEDING_KINDS: frozenset[TokenKind] = frozenset(
        {
            TokenKind.COMMENT,
            TokenKind.DOC_COMMENT,
            TokenKind.CLASS,
            TokenKind.FUNCTION,
            TokenKind.OPEN_TAG,
        }
    )
    # Python puts an inline comment before the statement terminator.
    _RETURN_SKIP: frozenset[TokenKind] = frozenset({TokenKind.WHITESPACE, TokenKind.COMMENT})

    def __init__(self, base: BaseFunctionCommentRule) -> None:
        self._base = base

    def check(self, tokens: TokenSequence, index: int) -> list[Violation]:
        """Check the doc comment of the function declared at index."""
        if tokens.find_previous(self._PRECEDING_KINDS, index - 1) is None:
            return []
        return self._base.run_steps(
            tokens,
            index,
            (
                self.process_params,
                self.process_return,
                self._base.check_descriptions,
                self.check_capitalization,
            ),
        )

    def check_capitalization(self, context: FunctionCommentContext) -> list[Violation]:
        if self.starts_with_uppercase(context.comment.content):
            return []
        return [
            Violation.from_token(
                code=self.code_comment_upper,
                template=self.MESSAGES[self.code_comment_upper],
                tokens=context.tokens,
                token_index=context.comment_index,
                line=context.line_of(context.comment.line),
            )
        ]

    def is_inherit_doc(self, context: FunctionCommentContext) -> bool:
        """True if the comment is an {@inheritdoc}."""
        return self.INHERIT_DOC_PATTERN.search(context.comment.content) is not None

    def process_params(self, context: FunctionCommentContext) -> list[Violation]:
        if self.is_inherit_doc(context):
            return []

        violations = self._base.process_params(context)
        for param in context.parser.get_params():
            param_comment = param.comment.strip()
            if param_comment and not self.starts_with_uppercase(param_comment):
                violations.append(
                    Violation.from_token(
                        code=self.code_param_comment_upper,
                        template=self.MESSAGES[self.code_param_comment_upper],
                        tokens=context.tokens,
                        token_index=context.comment_index,
                        message_args=(param.variable_name or UNKNOWN_PARAM_NAME,),
                        line=context.line_of(param.line),
                    )
                )
        return violations

    def process_return(self, context: FunctionCommentContext) -> list[Violation]:
        """Delegate the @return check only if some return statement yields a value."""
        if self.is_inherit_doc(context):
            return []

        tokens = context.tokens
        function = tokens.get(context.function_index)
        if function.scope_opener is None or function.scope_closer is None:
            return []

        # Iterate over all return statements; the first one returning a value triggers the check.
        start = function.scope_opener
        end = function.scope_closer + 1
        return_index = tokens.find_next(TokenKind.RETURN, start, end)
        while return_index is not None:
            if self.is_matching_return(tokens, return_index):
                return self._base.process_return(context)
            return_index = tokens.find_next(TokenKind.RETURN, return_index + 1, end)
        return []

    @classmethod
    def is_matching_return(cls, tokens: TokenSequence, return_index: int) -> bool:
        """True if the return statement at return_index returns an expression."""
        following = tokens.find_next(cls._RETURN_SKIP, return_index + 1, exclude=True)
        if following is None:
            return False
        return tokens.get(following).kind is not TokenKind.TERMINATOR

    @staticmethod
    def starts_with_uppercase(text: str) -> bool:
        """Empty text counts as capitalized. Case mapping is ASCII only."""
        return not text or text[0] not in string.ascii_lowercase
