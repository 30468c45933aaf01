from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Optional, Protocol

from conventions_linter.domain.registry_types import RuleRegistryEntry

if TYPE_CHECKING:
    import tokenize

    from conventions_linter.domain.comments import DocComment, ParamTag, ReturnTag
    from conventions_linter.domain.tokens import TokenSequence


class CommentParserProtocol(Protocol):
    """Parses the source text of one doc comment token. One instance per invocation."""

    def parse(self) -> None:
        """Parse the comment. Raises CommentParseError on malformed input."""
        ...

    def get_comment(self) -> Optional["DocComment"]:
        """Return the parsed comment, or None when the comment is empty."""
        ...

    def get_params(self) -> list["ParamTag"]:
        ...

    def get_return(self) -> Optional["ReturnTag"]:
        ...


CommentParserFactory = Callable[[str], CommentParserProtocol]


class TokenGatewayProtocol(Protocol):
    """Turns host tokens into the immutable TokenSequence the rules read."""

    def build_sequence(self, tokens: Iterable["tokenize.TokenInfo"]) -> "TokenSequence":
        ...


class RuleRegistryProtocol(Protocol):
    """Protocol for the rule registry (message templates and symbols)."""

    def get_registry(self) -> dict[str, RuleRegistryEntry]:
        ...

    def get_entry(self, msgid: str) -> Optional[RuleRegistryEntry]:
        ...
