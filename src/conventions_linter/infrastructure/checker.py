"""
Pylint plugin entry point - composition root for the checker plugin.
Lives in infrastructure as it creates the container and wires dependencies.
"""

from pylint.lint import PyLinter

from conventions_linter.infrastructure.di.container import ConventionsContainer
from conventions_linter.use_cases.checks.end_of_file import EndOfFileWhitespaceChecker
from conventions_linter.use_cases.checks.function_comment import FunctionCommentChecker


def register(linter: PyLinter) -> None:
    """Register checkers. A comment parser that cannot be loaded aborts registration."""
    container = ConventionsContainer.get_instance()
    token_gateway = container.get_token_gateway()
    registry = container.get_rule_registry().get_registry()
    function_comment_rule = container.get_function_comment_rule()

    linter.register_checker(EndOfFileWhitespaceChecker(
        linter, token_gateway=token_gateway, registry=registry,
        rule=container.get_end_of_file_rule()))
    linter.register_checker(FunctionCommentChecker(
        linter, token_gateway=token_gateway, registry=registry,
        rule=function_comment_rule))
