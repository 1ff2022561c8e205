"""
Loader for HTML5 documents and fragments.
"""

from .exceptions import (
    LoaderError, UnsupportedLoaderError, InvalidSourceTypeError, InvalidSourceTypeFile, InvalidSourceTypeString,
)
from .options import Options, SourceType, starts_with_markup
from .result import NodeSequence, Result
from .supports import Supports, SUPPORTED_CONTENT_TYPES, FRAGMENT_CONTENT_TYPES
from .loader import Loader, XHTML_NAMESPACE

__all__ = [
    'Loader', 'Options', 'SourceType', 'Result', 'NodeSequence', 'Supports',
    'LoaderError', 'UnsupportedLoaderError', 'InvalidSourceTypeError', 'InvalidSourceTypeFile',
    'InvalidSourceTypeString', 'SUPPORTED_CONTENT_TYPES', 'FRAGMENT_CONTENT_TYPES', 'XHTML_NAMESPACE',
    'starts_with_markup'
]
