"""Custom exceptions for Build Tag Generator."""


class BuildTagError(Exception):
    """Base class for errors raised while generating a build tag."""


class ConfigurationError(BuildTagError):
    """Raised when the tag request configuration is invalid."""


class SourceControlError(BuildTagError):
    """Raised when the commit hash or branch ref cannot be resolved."""


class TagQueryError(BuildTagError):
    """Raised when listing existing tags fails for one scope."""

    def __init__(self, message: str, scope: str = None):
        self.scope = scope
        super().__init__(message)
