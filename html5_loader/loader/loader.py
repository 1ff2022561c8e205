"""
HTML5 loader.
This module loads a DOM document from an HTML5 string or file by delegating
parsing to the HTML5 parser engine and adapting its output to the host DOM.
"""

import logging
from typing import Any, Callable, Dict, Mapping, Optional, Union

from ..dom import Document, DocumentFragment
from ..parser import HTML5Parser
from ..utils.logging import PerformanceLogger
from .exceptions import InvalidSourceTypeFile, UnsupportedLoaderError
from .options import Options, SourceType, starts_with_markup
from .result import NodeSequence, Result
from .supports import FRAGMENT_CONTENT_TYPES, Supports

logger = logging.getLogger(__name__)

XHTML_NAMESPACE = 'http://www.w3.org/1999/xhtml'
FRAGMENT_CONTENT_TYPE = 'text/html5-fragment'


class Loader(Supports):
    """
    Load a DOM document from an HTML5 string or file.

    A new parser engine and new settings are created for every call, so a
    loader instance can be shared freely.
    """

    IS_FRAGMENT = Options.IS_FRAGMENT
    DISABLE_HTML_NAMESPACE = Options.DISABLE_HTML_NAMESPACE
    IMPLICIT_NAMESPACES = Options.IMPLICIT_NAMESPACES

    def __init__(self, parser_factory: Callable[[], Any] = HTML5Parser, config=None,
                 identify_string_source: Callable[[Any], bool] = starts_with_markup):
        """
        Initialize the loader.

        Args:
            parser_factory: Callable returning a parser engine
            config: Optional Config whose ``loader`` section provides default options
            identify_string_source: Predicate deciding if a source is markup
        """
        self.parser_factory = parser_factory
        self.config = config
        self.identify_string_source = identify_string_source

    def load(self, source, content_type: str,
             options: Optional[Mapping[str, Any]] = None) -> Union[Document, Result]:
        """
        Load a document from a string or file.

        Args:
            source: HTML markup, a path or an open file
            content_type: One of the supported content types
            options: Loader options

        Returns:
            Document for document loads, Result for fragment loads

        Raises:
            UnsupportedLoaderError: If the content type is not supported
            InvalidSourceTypeError: If the source kind is not allowed
        """
        if not self.supports(content_type):
            raise UnsupportedLoaderError(content_type)

        html5 = self.parser_factory()
        settings = self.get_options(options)
        if self.is_fragment(content_type, settings):
            logger.debug(f"Loading {content_type} as fragment")
            return self._return_html5_fragment(source, html5, settings)

        source_type = settings.get_source_type(source)
        settings.is_allowed(source_type)
        logger.debug(f"Loading {content_type} document from {source_type.value}")
        return self._load_html(source, source_type, html5, settings)

    def load_fragment(self, source, content_type: str,
                      options: Optional[Mapping[str, Any]] = None) -> Optional[DocumentFragment]:
        """
        Load a fragment from a string.

        Args:
            source: HTML markup
            content_type: One of the supported content types
            options: Loader options

        Returns:
            The loaded fragment, or None if the content type is not supported
        """
        if not self.supports(content_type):
            return None

        html5 = self.parser_factory()
        settings = self.get_options(options)
        document = Document()
        fragment = document.import_node(self._parse_fragment(source, html5, settings), deep=True)
        return fragment

    def is_fragment(self, content_type: str, settings: Options) -> bool:
        """Check if a load should produce a fragment."""
        return content_type in FRAGMENT_CONTENT_TYPES or settings.is_fragment

    def get_options(self, options: Optional[Mapping[str, Any]] = None) -> Options:
        """
        Build the settings for a single load.

        Defaults come from the ``loader`` section of the configuration, if
        any, and are overridden by the options passed in.

        Args:
            options: Loader options

        Returns:
            Options: The resolved settings
        """
        merged: Dict[str, Any] = {}
        if self.config is not None:
            merged.update(self.config.get('loader', {}) or {})
        merged.update(options or {})
        return Options(merged, identify_string_source=self.identify_string_source)

    def get_library_options(self, settings: Options) -> Dict[str, Any]:
        """
        Project the settings onto parser engine options.

        A non-empty ``implicit_namespaces`` mapping replaces the options
        entirely; it is not merged with ``disable_html_ns``.

        Args:
            settings: The resolved settings

        Returns:
            The option mapping for the parser engine
        """
        library_options = {'disable_html_ns': bool(settings.disable_html_ns)}
        implicit_namespaces = settings.implicit_namespaces
        if implicit_namespaces:
            library_options = implicit_namespaces
        return library_options

    def handle_document(self, document) -> Document:
        """
        Adapt parser output to the host document type.

        Only the root element of a foreign document is imported; other
        top-level nodes are dropped.

        Args:
            document: Parser output

        Returns:
            Document: A host document
        """
        if not isinstance(document, Document):
            imported = Document()
            root = getattr(document, 'documentElement', None)
            if root is not None:
                imported.append_child(imported.import_node(root, deep=True))
            document = imported
        return document

    def _parse_fragment(self, source, html5, settings: Options):
        # Fragments are only ever parsed from markup
        if settings[Options.IS_FILE]:
            raise InvalidSourceTypeFile("Fragments can only be loaded from a string.")
        return html5.load_html_fragment(source, self.get_library_options(settings))

    def _return_html5_fragment(self, source, html5, settings: Options) -> Result:
        fragment = self._parse_fragment(source, html5, settings)
        document = Document()
        document.append_child(document.import_node(fragment, deep=True))
        document.register_namespace('html', XHTML_NAMESPACE)
        return Result(document, FRAGMENT_CONTENT_TYPE, NodeSequence(document, 'node()', document))

    def _load_from_string_or_file(self, source, source_type: SourceType, html5, settings: Options):
        library_options = self.get_library_options(settings)
        if source_type == SourceType.FILE:
            return html5.load_html_file(source, library_options,
                                        encoding=settings.encoding,
                                        force_encoding=settings.force_encoding)
        return html5.load_html(source, library_options)

    def _load_html(self, source, source_type: SourceType, html5, settings: Options) -> Document:
        with PerformanceLogger(logger, "html5").measure("parse"):
            document = self._load_from_string_or_file(source, source_type, html5, settings)

        document = self.handle_document(document)
        document.register_namespace('html', XHTML_NAMESPACE)
        return document
