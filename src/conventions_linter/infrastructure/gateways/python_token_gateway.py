"""Python token gateway: maps tokenize output onto the rules' TokenSequence."""

import tokenize
from collections.abc import Iterable
from typing import Optional

from conventions_linter.domain.protocols import TokenGatewayProtocol
from conventions_linter.domain.tokens import Token, TokenKind, TokenSequence


class PythonTokenGateway(TokenGatewayProtocol):
    """
    Classifies tokenize tokens and resolves def/class structure.

    Zero-width tokens (ENCODING, DEDENT, ENDMARKER) are dropped so that the
    last token of a file sits on the last line that actually holds text. A
    synthetic OPEN_TAG is placed at index 0 of every non-empty file. Scope and
    parenthesis fields of FUNCTION/CLASS tokens hold sequence indices.
    """

    DROPPED_TYPES: frozenset[int] = frozenset(
        {tokenize.ENCODING, tokenize.DEDENT, tokenize.ENDMARKER}
    )
    KEYWORD_KINDS: dict[str, TokenKind] = {
        "def": TokenKind.FUNCTION,
        "class": TokenKind.CLASS,
        "return": TokenKind.RETURN,
    }
    OPENING_BRACKETS: tuple[str, ...] = ("(", "[", "{")
    CLOSING_BRACKETS: tuple[str, ...] = (")", "]", "}")

    _BODY_SKIP: frozenset[int] = frozenset(
        {tokenize.NEWLINE, tokenize.NL, tokenize.COMMENT, tokenize.INDENT}
    )

    def build_sequence(self, tokens: Iterable[tokenize.TokenInfo]) -> TokenSequence:
        """Build the sequence for one file. An empty or blank input yields an empty sequence."""
        raw = list(tokens)
        # raw index -> sequence index (0 is the synthetic open tag)
        positions: dict[int, int] = {}
        for raw_index, tok in enumerate(raw):
            if tok.type not in self.DROPPED_TYPES:
                positions[raw_index] = len(positions) + 1
        if not positions:
            return TokenSequence(())

        structures: dict[int, dict[str, Optional[int]]] = {}
        doc_strings: set[int] = set()
        for raw_index, tok in enumerate(raw):
            if tok.type != tokenize.NAME or tok.string not in ("def", "class"):
                continue
            structure = self._resolve_declaration(raw, raw_index)
            structures[raw_index] = {
                key: None if value is None else positions[value]
                for key, value in structure.items()
            }
            doc_index = self._find_doc_string(
                raw, structure["scope_opener"], structure["scope_closer"]
            )
            if doc_index is not None:
                doc_strings.add(doc_index)

        sequence = [Token(kind=TokenKind.OPEN_TAG, text="", line=1)]
        for raw_index, tok in enumerate(raw):
            if raw_index not in positions:
                continue
            kind = TokenKind.DOC_COMMENT if raw_index in doc_strings else self.classify(tok)
            sequence.append(
                Token(
                    kind=kind,
                    text=tok.string,
                    line=tok.start[0],
                    column=tok.start[1],
                    **structures.get(raw_index, {}),
                )
            )
        return TokenSequence(sequence)

    def classify(self, tok: tokenize.TokenInfo) -> TokenKind:
        """Kind of a single token, without structural context."""
        if tok.type in (tokenize.NL, tokenize.INDENT):
            return TokenKind.WHITESPACE
        if tok.type == tokenize.NEWLINE:
            return TokenKind.TERMINATOR
        if tok.type == tokenize.COMMENT:
            return TokenKind.COMMENT
        if tok.type == tokenize.NAME:
            return self.KEYWORD_KINDS.get(tok.string, TokenKind.NAME)
        if tok.type == tokenize.OP:
            return TokenKind.TERMINATOR if tok.string == ";" else TokenKind.OPERATOR
        if tok.type == tokenize.NUMBER:
            return TokenKind.NUMBER
        if tok.type == tokenize.STRING:
            return TokenKind.STRING
        return TokenKind.OTHER

    def _resolve_declaration(
        self, raw: list[tokenize.TokenInfo], keyword_index: int
    ) -> dict[str, Optional[int]]:
        """Raw indices of the scope and parenthesis tokens of a def/class header."""
        structure: dict[str, Optional[int]] = {
            "scope_opener": None,
            "scope_closer": None,
            "parenthesis_opener": None,
            "parenthesis_closer": None,
        }
        depth = 0
        for index in range(keyword_index + 1, len(raw)):
            tok = raw[index]
            if tok.type == tokenize.NEWLINE:
                break
            if tok.type != tokenize.OP:
                continue
            if tok.string in self.OPENING_BRACKETS:
                if depth == 0 and tok.string == "(" and structure["parenthesis_opener"] is None:
                    structure["parenthesis_opener"] = index
                depth += 1
            elif tok.string in self.CLOSING_BRACKETS:
                depth -= 1
                if (
                    depth == 0
                    and structure["parenthesis_opener"] is not None
                    and structure["parenthesis_closer"] is None
                ):
                    structure["parenthesis_closer"] = index
            elif tok.string == ":" and depth == 0:
                structure["scope_opener"] = index
                break

        opener = structure["scope_opener"]
        if opener is None:
            return structure

        after = self._next_index(raw, opener + 1, frozenset({tokenize.COMMENT}))
        if after is not None and raw[after].type == tokenize.NEWLINE:
            structure["scope_closer"] = self._block_closer(raw, after)
        else:
            newline = self._next_index(raw, opener + 1, frozenset(), wanted=tokenize.NEWLINE)
            structure["scope_closer"] = newline if newline is not None else self._last_kept(raw)
        return structure

    def _block_closer(self, raw: list[tokenize.TokenInfo], newline_index: int) -> int:
        """Last kept token before the DEDENT that closes the block opened after newline_index."""
        depth = 0
        last_kept = newline_index
        for index in range(newline_index + 1, len(raw)):
            tok_type = raw[index].type
            if tok_type == tokenize.INDENT:
                depth += 1
            elif tok_type == tokenize.DEDENT:
                depth -= 1
                if depth == 0:
                    return last_kept
                continue
            elif depth == 0 and tok_type not in (tokenize.NL, tokenize.COMMENT):
                # No indented body follows the header.
                return newline_index
            if tok_type not in self.DROPPED_TYPES:
                last_kept = index
        return last_kept

    def _find_doc_string(
        self,
        raw: list[tokenize.TokenInfo],
        opener: Optional[int],
        closer: Optional[int],
    ) -> Optional[int]:
        """Raw index of a string literal that forms the first body statement on its own."""
        if opener is None or closer is None:
            return None
        index = self._next_index(raw, opener + 1, self._BODY_SKIP, end=closer + 1)
        if index is None or raw[index].type != tokenize.STRING:
            return None
        following = self._next_index(raw, index + 1, frozenset({tokenize.COMMENT}))
        if following is None:
            return None
        tok = raw[following]
        if tok.type == tokenize.NEWLINE or (tok.type == tokenize.OP and tok.string == ";"):
            return index
        return None

    @staticmethod
    def _next_index(
        raw: list[tokenize.TokenInfo],
        start: int,
        skip: frozenset[int],
        end: Optional[int] = None,
        wanted: Optional[int] = None,
    ) -> Optional[int]:
        stop = len(raw) if end is None else min(end, len(raw))
        for index in range(start, stop):
            tok_type = raw[index].type
            if wanted is not None:
                if tok_type == wanted:
                    return index
            elif tok_type not in skip:
                return index
        return None

    def _last_kept(self, raw: list[tokenize.TokenInfo]) -> int:
        for index in range(len(raw) - 1, -1, -1):
            if raw[index].type not in self.DROPPED_TYPES:
                return index
        return 0
