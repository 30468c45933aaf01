"""Shared constants: registry prefix, configuration defaults."""

RULE_PREFIX: str = "conventions."

CONFIG_SECTION: str = "conventions-linter"

DEFAULT_COMMENT_PARSER: str = (
    "conventions_linter.infrastructure.gateways.docstring_parser:DocstringCommentParser"
)

DEFAULT_IGNORED_PARAMS: tuple[str, ...] = ("self", "cls")

# Constructor and destructor never document a return value.
DEFAULT_RETURN_EXEMPT_METHODS: tuple[str, ...] = ("__init__", "__del__")

UNKNOWN_PARAM_NAME: str = "[ UNKNOWN ]"
