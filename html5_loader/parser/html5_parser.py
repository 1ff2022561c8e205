"""
HTML5 parser engine.
This module wraps html5lib; the loader treats it as the external engine that
does all tokenization and tree construction.
"""

import logging
from typing import Any, Dict, Mapping, Optional

import html5lib

logger = logging.getLogger(__name__)

DISABLE_HTML_NAMESPACE = 'disable_html_ns'


class HTML5Parser:
    """
    HTML5 parser using html5lib with the ``dom`` tree builder.

    Every entry point accepts a library option mapping. The key
    ``disable_html_ns`` controls whether HTML elements are put into the XHTML
    namespace; every other ``str`` to ``str`` entry binds a prefix, and
    elements named ``prefix:local`` with a bound prefix are moved into that
    namespace.
    """

    TREE_BUILDER = "dom"

    def __init__(self, strict: bool = False):
        """
        Initialize the HTML5 parser.

        Args:
            strict: Raise html5lib's ParseError on the first parse error
        """
        self.strict = strict
        self.errors = []

    def load_html(self, source, options: Optional[Mapping[str, Any]] = None):
        """
        Parse a full document from a string.

        Args:
            source: HTML markup as ``str`` or ``bytes``
            options: Library options

        Returns:
            xml.dom.minidom.Document: The parsed document
        """
        options = options or {}
        parser = self._create_parser(options)
        document = parser.parse(source)
        self._finish(parser, document, options)
        return document

    def load_html_file(self, source, options: Optional[Mapping[str, Any]] = None,
                       encoding: Optional[str] = None, force_encoding: bool = False):
        """
        Parse a full document from a file.

        Args:
            source: A path, or an open file object
            options: Library options
            encoding: Encoding to assume when the document does not declare one
            force_encoding: Use ``encoding`` regardless of what the document declares

        Returns:
            xml.dom.minidom.Document: The parsed document

        Raises:
            OSError: If the file cannot be opened
        """
        options = options or {}
        parser = self._create_parser(options)

        stream_options = {}
        if encoding:
            stream_options['override_encoding' if force_encoding else 'likely_encoding'] = encoding

        if hasattr(source, 'read'):
            document = parser.parse(source, **stream_options)
        else:
            logger.debug(f"Opening {source} for parsing")
            with open(source, 'rb') as stream:
                document = parser.parse(stream, **stream_options)

        self._finish(parser, document, options)
        return document

    def load_html_fragment(self, source, options: Optional[Mapping[str, Any]] = None,
                           container: str = "div"):
        """
        Parse a fragment from a string.

        Args:
            source: HTML markup as ``str`` or ``bytes``
            options: Library options
            container: Context element the fragment is parsed in

        Returns:
            xml.dom.minidom.DocumentFragment: The parsed nodes
        """
        options = options or {}
        parser = self._create_parser(options)
        fragment = parser.parseFragment(source, container=container)
        self._finish(parser, fragment, options)
        return fragment

    def _create_parser(self, options: Mapping[str, Any]) -> html5lib.HTMLParser:
        namespace_html_elements = not bool(options.get(DISABLE_HTML_NAMESPACE, False))
        return html5lib.HTMLParser(
            tree=html5lib.getTreeBuilder(self.TREE_BUILDER),
            strict=self.strict,
            namespaceHTMLElements=namespace_html_elements,
        )

    def _finish(self, parser: html5lib.HTMLParser, tree, options: Mapping[str, Any]) -> None:
        self.errors = list(parser.errors)
        if self.errors:
            logger.debug(f"html5lib reported {len(self.errors)} parse errors")

        bindings = self._namespace_bindings(options)
        if bindings:
            self._apply_namespaces(tree, bindings)

    @staticmethod
    def _namespace_bindings(options: Mapping[str, Any]) -> Dict[str, str]:
        return {prefix: uri for prefix, uri in options.items()
                if prefix != DISABLE_HTML_NAMESPACE and isinstance(prefix, str) and isinstance(uri, str)}

    def _apply_namespaces(self, node, bindings: Dict[str, str]) -> None:
        for child in node.childNodes:
            if child.nodeType == child.ELEMENT_NODE and ':' in child.tagName:
                prefix = child.tagName.split(':', 1)[0]
                if prefix in bindings:
                    child.namespaceURI = bindings[prefix]
                    child.prefix = prefix
            self._apply_namespaces(child, bindings)
