"""Domain models for rules and violations."""

from dataclasses import dataclass
from typing import Optional, Protocol

from conventions_linter.domain.tokens import TokenSequence

__all__ = [
    "TokenRule",
    "Violation",
]


@dataclass(frozen=True)
class Violation:
    """A rule violation anchored at a token of the sequence that produced it."""

    code: str
    message: str
    token_index: int
    line: int
    message_args: tuple[str, ...] = ()
    """Substitutions for the Pylint message template."""

    @classmethod
    def from_token(
        cls,
        *,
        code: str,
        template: str,
        tokens: TokenSequence,
        token_index: int,
        message_args: tuple[str, ...] = (),
        line: Optional[int] = None,
    ) -> "Violation":
        """
        Build a Violation, formatting template with message_args.

        line defaults to the anchor token's line. Raises IndexError when
        token_index is not part of tokens.
        """
        token = tokens.get(token_index)
        message = template % message_args if message_args else template
        return cls(
            code=code,
            message=message,
            token_index=token_index,
            line=token.line if line is None else line,
            message_args=message_args,
        )


class TokenRule(Protocol):
    """Stateless rule invoked once per matching token occurrence."""

    description: str

    def check(self, tokens: TokenSequence, index: int) -> list[Violation]:
        """Inspect the token at index and return violations."""
        ...
