"""Resolves the configured comment parser class from a 'module:attr' path."""

import importlib
import logging

from conventions_linter.domain.exceptions import CollaboratorUnavailableError
from conventions_linter.domain.protocols import CommentParserFactory


class CommentParserResolver:
    """Imports comment parser classes. Failure is fatal for plugin registration."""

    @staticmethod
    def resolve(path: str) -> CommentParserFactory:
        """Return the callable named by path ('package.module:ClassName')."""
        module_name, sep, attr = path.partition(":")
        if not sep or not module_name or not attr:
            raise CollaboratorUnavailableError(
                f"Comment parser '{path}' must be given as 'module:attribute'."
            )
        try:
            module = importlib.import_module(module_name)
        except ImportError as exc:
            raise CollaboratorUnavailableError(
                f"Comment parser module '{module_name}' could not be imported: {exc}"
            ) from exc

        factory = getattr(module, attr, None)
        if factory is None or not callable(factory):
            raise CollaboratorUnavailableError(
                f"Comment parser '{attr}' not found in module '{module_name}'."
            )
        logging.debug("Resolved comment parser %s", path)
        return factory
