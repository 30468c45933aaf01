"""Exceptions raised by the plugin. Lint findings are never exceptions; they are Violations."""


class ConventionsLinterError(Exception):
    """Base class for plugin errors."""


class CollaboratorUnavailableError(ConventionsLinterError):
    """A required collaborator (e.g. the comment parser) cannot be loaded. Aborts registration."""


class CommentParseError(ConventionsLinterError):
    """A doc comment could not be parsed. Reported as a FailedParse violation."""
