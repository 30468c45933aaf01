"""Immutable token model shared by the host gateway and the rules."""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class TokenKind(Enum):
    """Token classes the rules care about. Everything else is NAME/OPERATOR/OTHER."""

    OPEN_TAG = "open_tag"
    WHITESPACE = "whitespace"
    COMMENT = "comment"
    DOC_COMMENT = "doc_comment"
    FUNCTION = "function"
    CLASS = "class"
    RETURN = "return"
    TERMINATOR = "terminator"
    STRING = "string"
    NAME = "name"
    OPERATOR = "operator"
    NUMBER = "number"
    OTHER = "other"


KindFilter = Union[TokenKind, Iterable[TokenKind]]


@dataclass(frozen=True)
class Token:
    """A classified lexical unit. Scope and parenthesis fields are sequence indices."""

    kind: TokenKind
    text: str
    line: int
    column: int = 0
    scope_opener: Optional[int] = None
    scope_closer: Optional[int] = None
    """Index of the last token inside the scope (inclusive)."""
    parenthesis_opener: Optional[int] = None
    parenthesis_closer: Optional[int] = None


class TokenSequence:
    """
    Ordered, read-only view over the tokens of one file.

    Lookups are bounds-checked: walks never leave [0, length()).
    """

    def __init__(self, tokens: Iterable[Token]) -> None:
        self._tokens: tuple[Token, ...] = tuple(tokens)

    def __len__(self) -> int:
        return len(self._tokens)

    def __iter__(self) -> Iterator[Token]:
        return iter(self._tokens)

    def __getitem__(self, index: int) -> Token:
        return self.get(index)

    def get(self, index: int) -> Token:
        """Return the token at index. Negative indices are rejected."""
        if index < 0 or index >= len(self._tokens):
            raise IndexError(f"Token index {index} out of range (0..{len(self._tokens) - 1})")
        return self._tokens[index]

    def length(self) -> int:
        return len(self._tokens)

    @staticmethod
    def _as_kinds(kinds: KindFilter) -> frozenset[TokenKind]:
        if isinstance(kinds, TokenKind):
            return frozenset({kinds})
        return frozenset(kinds)

    def find_previous(
        self,
        kinds: KindFilter,
        start: int,
        end: Optional[int] = None,
        exclude: bool = False,
    ) -> Optional[int]:
        """
        Walk backward from start to end (inclusive) and return the first match.

        With exclude=True the first token whose kind is NOT in kinds matches.
        """
        wanted = self._as_kinds(kinds)
        start = min(start, len(self._tokens) - 1)
        stop = max(end if end is not None else 0, 0)
        for index in range(start, stop - 1, -1):
            if (self._tokens[index].kind in wanted) != exclude:
                return index
        return None

    def find_next(
        self,
        kinds: KindFilter,
        start: int,
        end: Optional[int] = None,
        exclude: bool = False,
    ) -> Optional[int]:
        """Walk forward from start to end (exclusive) and return the first match."""
        wanted = self._as_kinds(kinds)
        stop = len(self._tokens) if end is None else min(end, len(self._tokens))
        for index in range(max(start, 0), stop):
            if (self._tokens[index].kind in wanted) != exclude:
                return index
        return None

    def indices_of(self, kind: TokenKind) -> Iterator[int]:
        """Yield the index of every token of the given kind."""
        for index, token in enumerate(self._tokens):
            if token.kind is kind:
                yield index

    def function_name(self, index: int) -> str:
        """Name declared by the FUNCTION (or CLASS) token at index, or ''."""
        name_index = self.find_next(TokenKind.NAME, index + 1)
        if name_index is None:
            return ""
        opener = self.get(index).parenthesis_opener
        if opener is not None and name_index > opener:
            return ""
        return self.get(name_index).text

    def method_parameters(self, index: int) -> list[str]:
        """
        Parameter names declared between the function's parentheses.

        Only names at bracket depth 1 that start a parameter are taken, so
        annotations and default values are ignored. Star prefixes are dropped
        and the bare '*' and '/' markers are skipped.
        """
        function = self.get(index)
        opener = function.parenthesis_opener
        closer = function.parenthesis_closer
        if opener is None or closer is None:
            return []

        names: list[str] = []
        depth = 0
        expecting_name = False
        in_lambda = False
        for position in range(opener, closer + 1):
            token = self._tokens[position]
            if token.kind is TokenKind.WHITESPACE or token.kind is TokenKind.COMMENT:
                continue
            if token.kind is TokenKind.OPERATOR and token.text in ("(", "[", "{"):
                depth += 1
                if depth == 1:
                    expecting_name = True
                continue
            if token.kind is TokenKind.OPERATOR and token.text in (")", "]", "}"):
                depth -= 1
                continue
            if depth != 1:
                continue
            if in_lambda:
                if token.kind is TokenKind.OPERATOR and token.text == ":":
                    in_lambda = False
                continue
            if token.kind is TokenKind.NAME and token.text == "lambda":
                in_lambda = True
                expecting_name = False
                continue
            if token.kind is TokenKind.OPERATOR and token.text == ",":
                expecting_name = True
                continue
            if not expecting_name:
                continue
            if token.kind is TokenKind.OPERATOR and token.text in ("*", "**"):
                continue
            if token.kind is TokenKind.OPERATOR and token.text == "/":
                expecting_name = False
                continue
            if token.kind is TokenKind.NAME:
                names.append(token.text)
            expecting_name = False
        return names
