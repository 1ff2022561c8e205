"""
html5_loader - Load DOM documents from HTML5 strings and files.

Parsing is delegated to html5lib; the loader adapts its output to the host
DOM in ``html5_loader.dom``.
"""

from typing import Any, Mapping, Optional

# Package information
__version__ = "1.0.0"
__author__ = "html5_loader developers"
__description__ = "Load DOM documents from HTML5 strings and files"

from html5_loader.dom import Document, DocumentFragment, Element, Node, NodeType
from html5_loader.loader import (
    Loader, Options, Result, SourceType, LoaderError, UnsupportedLoaderError, InvalidSourceTypeError,
    InvalidSourceTypeFile, InvalidSourceTypeString,
)


def load(source, content_type: str = 'html5', options: Optional[Mapping[str, Any]] = None):
    """Load a document or fragment with a default Loader."""
    return Loader().load(source, content_type, options)


def load_fragment(source, content_type: str = 'html5-fragment', options: Optional[Mapping[str, Any]] = None):
    """Load a fragment with a default Loader."""
    return Loader().load_fragment(source, content_type, options)


__all__ = [
    'load', 'load_fragment', 'Loader', 'Options', 'Result', 'SourceType', 'Document', 'DocumentFragment',
    'Element', 'Node', 'NodeType', 'LoaderError', 'UnsupportedLoaderError', 'InvalidSourceTypeError',
    'InvalidSourceTypeFile', 'InvalidSourceTypeString',
]
