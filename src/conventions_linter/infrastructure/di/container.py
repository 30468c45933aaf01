from typing import TYPE_CHECKING, Any, Optional, cast

from conventions_linter.domain.config import ConfigurationLoader
from conventions_linter.domain.rules.end_of_file import EndOfFileWhitespaceRule
from conventions_linter.domain.rules.function_comment import (
    BaseFunctionCommentRule,
    FunctionCommentRule,
)
from conventions_linter.infrastructure.config_file_loader import ConfigFileLoader
from conventions_linter.infrastructure.gateways.comment_parser_resolver import (
    CommentParserResolver,
)
from conventions_linter.infrastructure.gateways.python_token_gateway import PythonTokenGateway
from conventions_linter.infrastructure.services.rule_registry import RuleRegistryService

if TYPE_CHECKING:
    from conventions_linter.domain.protocols import (
        CommentParserFactory,
        RuleRegistryProtocol,
        TokenGatewayProtocol,
    )


class ConventionsContainer:
    """Dependency Injection Container for the conventions linter."""

    _instance: Optional["ConventionsContainer"] = None

    def __init__(self) -> None:
        self._singletons: dict[str, Any] = {}
        self._register_defaults()

    def _register_defaults(self) -> None:
        """Register default implementations for protocols."""
        config_loader = ConfigurationLoader(ConfigFileLoader.load_config_from_fs())
        self.register_singleton("ConfigurationLoader", config_loader)
        self.register_singleton("PythonTokenGateway", PythonTokenGateway())
        self.register_singleton("RuleRegistryService", RuleRegistryService())
        # The comment parser is resolved lazily so a bad path only fails registration.

    def register_singleton(self, key: str, instance: Any) -> None:
        """Register a singleton instance."""
        self._singletons[key] = instance

    def get(self, key: str) -> Any:
        """Retrieve a dependency by key. Prefer explicit get_* methods for type safety."""
        if key in self._singletons:
            return self._singletons[key]
        raise ValueError(f"Dependency '{key}' not registered.")

    def get_config_loader(self) -> ConfigurationLoader:
        """Return the configuration loader."""
        return cast(ConfigurationLoader, self.get("ConfigurationLoader"))

    def get_token_gateway(self) -> "TokenGatewayProtocol":
        """Return the Python token gateway."""
        return cast("TokenGatewayProtocol", self.get("PythonTokenGateway"))

    def get_rule_registry(self) -> "RuleRegistryProtocol":
        """Return the rule registry service."""
        return cast("RuleRegistryProtocol", self.get("RuleRegistryService"))

    def get_comment_parser_factory(self) -> "CommentParserFactory":
        """Return the configured comment parser class. Raises CollaboratorUnavailableError."""
        if "CommentParserFactory" not in self._singletons:
            path = self.get_config_loader().comment_parser
            self.register_singleton("CommentParserFactory", CommentParserResolver.resolve(path))
        return cast("CommentParserFactory", self.get("CommentParserFactory"))

    def get_end_of_file_rule(self) -> EndOfFileWhitespaceRule:
        """Return the end-of-file whitespace rule."""
        return EndOfFileWhitespaceRule()

    def get_function_comment_rule(self) -> FunctionCommentRule:
        """Return the function comment rule wired to the configured parser and settings."""
        config_loader = self.get_config_loader()
        base = BaseFunctionCommentRule(
            self.get_comment_parser_factory(),
            ignored_params=config_loader.ignored_params,
            return_exempt_methods=config_loader.return_exempt_methods,
        )
        return FunctionCommentRule(base)

    @classmethod
    def get_instance(cls) -> "ConventionsContainer":
        """Get or create global container instance."""
        if cls._instance is None:
            cls._instance = ConventionsContainer()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset the singleton instance (primarily for testing)."""
        cls._instance = None
