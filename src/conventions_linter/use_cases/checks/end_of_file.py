"""End-of-file whitespace check (C9101, C9102)."""

import tokenize
from collections.abc import Mapping
from typing import TYPE_CHECKING, Optional

from pylint.checkers import BaseTokenChecker

if TYPE_CHECKING:
    from pylint.lint import PyLinter

from conventions_linter.domain.protocols import TokenGatewayProtocol
from conventions_linter.domain.registry_types import RuleRegistryEntry
from conventions_linter.domain.rule_msgs import RuleMsgBuilder
from conventions_linter.domain.rules.end_of_file import EndOfFileWhitespaceRule
from conventions_linter.domain.tokens import TokenKind


class EndOfFileWhitespaceChecker(BaseTokenChecker):
    """C9101-C9102: one blank line at end of file. Thin: delegates to EndOfFileWhitespaceRule."""

    name: str = "conventions-end-of-file"
    CODES = ["C9101", "C9102"]

    def __init__(
        self,
        linter: "PyLinter",
        token_gateway: TokenGatewayProtocol,
        registry: Mapping[str, RuleRegistryEntry],
        rule: Optional[EndOfFileWhitespaceRule] = None,
    ) -> None:
        self.msgs = RuleMsgBuilder.build_msgs_for_codes(
            registry, self.CODES)  # type: ignore[assignment]
        super().__init__(linter)
        self._symbols = RuleMsgBuilder.build_symbol_map(registry, self.CODES)
        self._token_gateway = token_gateway
        self._rule = rule or EndOfFileWhitespaceRule()

    def process_tokens(self, tokens: list[tokenize.TokenInfo]) -> None:
        """Delegate to the domain rule for each open tag; report each violation via add_message."""
        sequence = self._token_gateway.build_sequence(tokens)
        for index in sequence.indices_of(TokenKind.OPEN_TAG):
            for v in self._rule.check(sequence, index):
                self.add_message(
                    self._symbols.get(v.code, v.code),
                    line=v.line,
                    args=v.message_args or None,
                )
