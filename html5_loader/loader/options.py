"""
Loader options.
This module turns the option mapping passed to a loader into read-only settings.
"""

import logging
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional

logger = logging.getLogger(__name__)


class SourceType(Enum):
    """Kinds of source a loader can be asked to read."""
    STRING = 'string'
    FILE = 'file'


class Options:
    """
    Read-only loader settings.

    Values are resolved once from the option mapping; unknown keys are
    ignored. Source type detection uses an injected predicate that decides
    whether a source is markup (a string) or a reference to a file.
    """

    IS_FRAGMENT = 'is_fragment'
    DISABLE_HTML_NAMESPACE = 'disable_html_ns'
    IMPLICIT_NAMESPACES = 'implicit_namespaces'
    IS_FILE = 'is_file'
    IS_STRING = 'is_string'
    ALLOW_FILE = 'allow_file'
    ALLOW_STRING = 'allow_string'
    ENCODING = 'encoding'
    FORCE_ENCODING = 'force_encoding'

    DEFAULTS: Dict[str, Any] = {
        IS_FRAGMENT: False,
        DISABLE_HTML_NAMESPACE: False,
        IMPLICIT_NAMESPACES: None,
        IS_FILE: False,
        IS_STRING: False,
        ALLOW_FILE: False,
        ALLOW_STRING: True,
        ENCODING: None,
        FORCE_ENCODING: False,
    }

    def __init__(self, options: Optional[Mapping[str, Any]] = None,
                 identify_string_source: Optional[Callable[[Any], bool]] = None):
        """
        Initialize the settings.

        Args:
            options: Option mapping supplied by the caller
            identify_string_source: Predicate returning True when a source is markup
        """
        values = dict(self.DEFAULTS)
        for key, value in (options or {}).items():
            if key in values:
                values[key] = value
            else:
                logger.debug(f"Ignoring unknown loader option '{key}'")

        implicit_namespaces = values[self.IMPLICIT_NAMESPACES]
        if isinstance(implicit_namespaces, Mapping):
            implicit_namespaces = dict(implicit_namespaces)
        else:
            implicit_namespaces = None

        object.__setattr__(self, '_values', {
            self.IS_FRAGMENT: bool(values[self.IS_FRAGMENT]),
            self.DISABLE_HTML_NAMESPACE: bool(values[self.DISABLE_HTML_NAMESPACE]),
            self.IMPLICIT_NAMESPACES: implicit_namespaces,
            self.IS_FILE: bool(values[self.IS_FILE]),
            self.IS_STRING: bool(values[self.IS_STRING]),
            self.ALLOW_FILE: bool(values[self.ALLOW_FILE]),
            self.ALLOW_STRING: bool(values[self.ALLOW_STRING]),
            self.ENCODING: values[self.ENCODING] or None,
            self.FORCE_ENCODING: bool(values[self.FORCE_ENCODING]),
        })
        object.__setattr__(self, '_identify_string_source', identify_string_source)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is read-only")

    def __getitem__(self, key: str) -> Any:
        value = self._values[key]
        # Hand out copies so the stored mapping stays untouched
        return dict(value) if isinstance(value, dict) else value

    def __contains__(self, key: str) -> bool:
        return key in self._values

    def __repr__(self) -> str:
        return f"Options({self._values!r})"

    @property
    def is_fragment(self) -> bool:
        return self._values[self.IS_FRAGMENT]

    @property
    def disable_html_ns(self) -> bool:
        return self._values[self.DISABLE_HTML_NAMESPACE]

    @property
    def implicit_namespaces(self) -> Optional[Dict[str, str]]:
        return self[self.IMPLICIT_NAMESPACES]

    @property
    def allow_file(self) -> bool:
        return self._values[self.ALLOW_FILE]

    @property
    def allow_string(self) -> bool:
        return self._values[self.ALLOW_STRING]

    @property
    def encoding(self) -> Optional[str]:
        return self._values[self.ENCODING]

    @property
    def force_encoding(self) -> bool:
        return self._values[self.FORCE_ENCODING]

    def get_source_type(self, source: Any) -> SourceType:
        """
        Decide whether a source is markup or a file reference.

        The ``is_file`` and ``is_string`` options take precedence over the
        predicate. Without a predicate every other source is a file.

        Args:
            source: The source passed to the loader

        Returns:
            SourceType: The resolved source type
        """
        if self._values[self.IS_FILE]:
            return SourceType.FILE
        if self._values[self.IS_STRING]:
            return SourceType.STRING
        if self._identify_string_source is not None and self._identify_string_source(source):
            return SourceType.STRING
        return SourceType.FILE

    def is_allowed(self, source_type: SourceType, throw_exception: bool = True) -> bool:
        """
        Check that a source type may be loaded with these options.

        Args:
            source_type: The resolved source type
            throw_exception: Raise instead of returning False

        Returns:
            bool: True if the source type is allowed

        Raises:
            InvalidSourceTypeFile: If files are not allowed
            InvalidSourceTypeString: If strings are not allowed
        """
        from .exceptions import InvalidSourceTypeFile, InvalidSourceTypeString

        error = None
        if source_type == SourceType.FILE and not self.allow_file:
            error = InvalidSourceTypeFile()
        elif source_type == SourceType.STRING and not self.allow_string:
            error = InvalidSourceTypeString()

        if error is None:
            return True
        if throw_exception:
            raise error
        return False


def starts_with_markup(source: Any) -> bool:
    """
    Default source predicate: a string whose first non-blank character is ``<``.

    Args:
        source: The source passed to the loader

    Returns:
        bool: True if the source looks like markup
    """
    if isinstance(source, str):
        return source.lstrip().startswith('<')
    if isinstance(source, (bytes, bytearray)):
        return bytes(source).lstrip().startswith(b'<')
    return False
