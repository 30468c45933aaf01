"""Docstring parser for epydoc (@param) and Sphinx (:param:) field tags."""

import ast
import re
from typing import Optional

from conventions_linter.domain.comments import DocComment, ParamTag, ReturnTag
from conventions_linter.domain.exceptions import CommentParseError


class DocstringCommentParser:
    """
    Parses the source text of one docstring token.

    Line numbers are relative to the first line of the token, so blank lines
    at the top of the docstring are kept rather than trimmed.
    """

    TAG_PATTERN = re.compile(r"^[@:](?P<tag>[A-Za-z]\w*)(?P<rest>.*)$")
    # "[type] name: comment"; a colon further into the text belongs to the comment.
    NAMED_PARAM_PATTERN = re.compile(
        r"^\s*(?:(?:(?P<type>\S+)\s+)?(?P<name>\**\w+))?\s*:(?P<comment>.*)$", re.DOTALL
    )
    PARAM_TAGS: frozenset[str] = frozenset({"param", "parameter", "arg", "argument"})
    RETURN_TAGS: frozenset[str] = frozenset({"return", "returns"})

    def __init__(self, text: str) -> None:
        self._text = text
        self._comment: Optional[DocComment] = None
        self._params: list[ParamTag] = []
        self._return: Optional[ReturnTag] = None

    def parse(self) -> None:
        """Evaluate the literal and split it into descriptions and tags."""
        try:
            value = ast.literal_eval(self._text)
        except (ValueError, SyntaxError) as exc:
            raise CommentParseError(f"invalid string literal ({exc})") from exc
        if not isinstance(value, str):
            raise CommentParseError(f"expected text, got {type(value).__name__}")

        lines = self._dedent(value.split("\n"))
        tag_start = next(
            (i for i, line in enumerate(lines) if self.TAG_PATTERN.match(line.strip())), None
        )
        description = lines if tag_start is None else lines[:tag_start]
        if tag_start is not None:
            self._parse_tags(lines, tag_start)

        filled = [i for i, line in enumerate(description) if line]
        if not filled and tag_start is None:
            self._comment = None
            return

        short_description = ""
        long_description = ""
        blank_lines_before_long = 0
        blank_lines_before_tags: Optional[int] = None
        content = ""
        start = tag_start if tag_start is not None else 0
        if filled:
            start, last = filled[0], filled[-1]
            short_end = start
            while short_end + 1 <= last and description[short_end + 1]:
                short_end += 1
            short_description = " ".join(description[start : short_end + 1])
            if short_end < last:
                long_start = next(i for i in filled if i > short_end)
                blank_lines_before_long = long_start - short_end - 1
                long_description = "\n".join(description[long_start : last + 1])
            content = "\n".join(description[start : last + 1])
            if tag_start is not None:
                blank_lines_before_tags = tag_start - last - 1

        self._comment = DocComment(
            content=content,
            line=start,
            short_description=short_description,
            long_description=long_description,
            blank_lines_before_long=blank_lines_before_long,
            blank_lines_before_tags=blank_lines_before_tags,
            parameters=tuple(self._params),
            return_tag=self._return,
            end_line=len(lines) - 1,
        )

    def get_comment(self) -> Optional[DocComment]:
        return self._comment

    def get_params(self) -> list[ParamTag]:
        return list(self._params)

    def get_return(self) -> Optional[ReturnTag]:
        return self._return

    @staticmethod
    def _dedent(lines: list[str]) -> list[str]:
        """Strip the common indentation of all lines after the first, keeping every line."""
        lines = [line.rstrip() for line in lines]
        indents = [len(line) - len(line.lstrip()) for line in lines[1:] if line]
        margin = min(indents) if indents else 0
        return [lines[0].lstrip()] + [line[margin:] for line in lines[1:]]

    def _parse_tags(self, lines: list[str], tag_start: int) -> None:
        # (tag, text parts, line); continuation lines extend the current tag.
        current: Optional[tuple[str, list[str], int]] = None
        collected: list[tuple[str, list[str], int]] = []
        for index in range(tag_start, len(lines)):
            line = lines[index].strip()
            match = self.TAG_PATTERN.match(line)
            if match:
                tag = match.group("tag").lower()
                if tag in self.PARAM_TAGS or tag in self.RETURN_TAGS:
                    current = (tag, [match.group("rest")], index)
                    collected.append(current)
                else:
                    current = None
            elif line and current is not None:
                current[1].append(line)

        for tag, parts, line_no in collected:
            rest = " ".join(parts)
            if tag in self.RETURN_TAGS:
                if self._return is None:
                    self._return = ReturnTag(value=rest.strip().lstrip(":").strip(), line=line_no)
                continue
            self._params.append(self._parse_param(rest, line_no))

    @classmethod
    def _parse_param(cls, rest: str, line_no: int) -> ParamTag:
        """'[type] name: comment' or 'name comment'."""
        match = cls.NAMED_PARAM_PATTERN.match(rest)
        if match:
            name = match.group("name") or ""
            type_name = match.group("type") or ""
            comment = match.group("comment")
        else:
            words = rest.split(None, 1)
            name = words[0] if words else ""
            comment = words[1] if len(words) > 1 else ""
            type_name = ""
        return ParamTag(
            variable_name=name.lstrip("*"),
            comment=comment.strip(),
            line=line_no,
            type_name=type_name,
        )
