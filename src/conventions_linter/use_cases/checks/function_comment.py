"""Function doc comment checks (C9201-C9218)."""

import tokenize
from collections.abc import Mapping
from typing import TYPE_CHECKING

from pylint.checkers import BaseTokenChecker

if TYPE_CHECKING:
    from pylint.lint import PyLinter

from conventions_linter.domain.protocols import TokenGatewayProtocol
from conventions_linter.domain.registry_types import RuleRegistryEntry
from conventions_linter.domain.rule_msgs import RuleMsgBuilder
from conventions_linter.domain.rules.function_comment import FunctionCommentRule
from conventions_linter.domain.tokens import TokenKind


class FunctionCommentChecker(BaseTokenChecker):
    """C9201-C9218: function docstrings. Thin: delegates to FunctionCommentRule."""

    name: str = "conventions-function-comment"
    CODES = [
        "C9201",
        "C9202",
        "W9203",
        "C9204",
        "C9205",
        "C9206",
        "C9207",
        "C9208",
        "C9209",
        "C9210",
        "C9211",
        "C9212",
        "C9213",
        "C9214",
        "C9215",
        "C9216",
        "C9217",
        "C9218",
    ]

    def __init__(
        self,
        linter: "PyLinter",
        token_gateway: TokenGatewayProtocol,
        registry: Mapping[str, RuleRegistryEntry],
        rule: FunctionCommentRule,
    ) -> None:
        self.msgs = RuleMsgBuilder.build_msgs_for_codes(
            registry, self.CODES)  # type: ignore[assignment]
        super().__init__(linter)
        self._symbols = RuleMsgBuilder.build_symbol_map(registry, self.CODES)
        self._token_gateway = token_gateway
        self._rule = rule

    def process_tokens(self, tokens: list[tokenize.TokenInfo]) -> None:
        """Delegate to the domain rule for each function; report each violation via add_message."""
        sequence = self._token_gateway.build_sequence(tokens)
        for index in sequence.indices_of(TokenKind.FUNCTION):
            for v in self._rule.check(sequence, index):
                self.add_message(
                    self._symbols.get(v.code, v.code),
                    line=v.line,
                    args=v.message_args or None,
                )
