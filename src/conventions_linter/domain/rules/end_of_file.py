"""End-of-file whitespace rule (NotFound, TooMany)."""

from conventions_linter.domain.rules import Violation
from conventions_linter.domain.tokens import TokenKind, TokenSequence


class EndOfFileWhitespaceRule:
    """Checks that exactly one blank line trails the last code token. Stateless."""

    code_not_found: str = "NotFound"
    code_too_many: str = "TooMany"
    description: str = "Checks that there is a single blank line at the end of a file."

    MESSAGE_NOT_FOUND: str = "Expected 1 blank line at end of file; %s found"
    MESSAGE_TOO_MANY: str = 'Expected 1 blank line at end of file; "%s" found'

    def check(self, tokens: TokenSequence, index: int) -> list[Violation]:
        """Run once per file: only the first open tag triggers the scan."""
        if index != 0 and tokens.find_previous(TokenKind.OPEN_TAG, index - 1) is not None:
            return []
        if tokens.length() == 0:
            return []

        last = tokens.length() - 1
        last_line = tokens.get(last).line

        code_index = tokens.find_previous(TokenKind.WHITESPACE, last, exclude=True)
        if code_index is None:
            code_index = 0
        last_code_line = tokens.get(code_index).line

        blank_lines = last_line - last_code_line
        if blank_lines == 0:
            return [
                Violation.from_token(
                    code=self.code_not_found,
                    template=self.MESSAGE_NOT_FOUND,
                    tokens=tokens,
                    token_index=code_index,
                    message_args=("0",),
                )
            ]
        if blank_lines > 1:
            return [
                Violation.from_token(
                    code=self.code_too_many,
                    template=self.MESSAGE_TOO_MANY,
                    tokens=tokens,
                    token_index=code_index,
                    message_args=(str(blank_lines),),
                )
            ]
        return []
