"""
Exceptions raised by the loader.
"""

from .options import SourceType


class LoaderError(Exception):
    """Base class for loader errors."""


class UnsupportedLoaderError(LoaderError):
    """Raised when a content type is not handled by the loader."""

    def __init__(self, content_type):
        super().__init__(f"The loader for {content_type} is not supported")
        self.content_type = content_type


class InvalidSourceTypeError(LoaderError):
    """Raised when a source kind is not permitted by the current options."""

    source_type: SourceType = None

    def __init__(self, message: str = None):
        if not message:
            kind = self.source_type.value if self.source_type else "source"
            message = f"Can not load a {kind} with this loader."
        super().__init__(message)


class InvalidSourceTypeFile(InvalidSourceTypeError):
    """A file source was given where only strings are allowed."""

    source_type = SourceType.FILE


class InvalidSourceTypeString(InvalidSourceTypeError):
    """A string source was given where strings are not allowed."""

    source_type = SourceType.STRING
