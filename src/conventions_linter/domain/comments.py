"""Parsed view over a function doc comment. Produced fresh per invocation by a comment parser."""

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class ParamTag:
    """One parameter tag. line is relative to the first line of the comment token."""

    variable_name: str
    comment: str
    line: int
    type_name: str = ""


@dataclass(frozen=True)
class ReturnTag:
    """The return tag of a doc comment."""

    value: str
    line: int


@dataclass(frozen=True)
class DocComment:
    """
    Description and tags of a doc comment.

    content is the short description plus the long description. All line
    numbers are relative to the first line of the comment token.
    """

    content: str
    line: int
    short_description: str = ""
    long_description: str = ""
    blank_lines_before_long: int = 0
    blank_lines_before_tags: Optional[int] = None
    """None when the comment has no tags or no description."""
    parameters: tuple[ParamTag, ...] = field(default_factory=tuple)
    return_tag: Optional[ReturnTag] = None
    end_line: int = 0
