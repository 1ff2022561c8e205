"""
Host DOM for loaded HTML5 sources.
This package provides the document type the loader adapts parser output into.
"""

from .node import Node, NodeType
from .element import Element
from .attr import Attr
from .text import Text
from .comment import Comment
from .fragment import DocumentFragment
from .document import Document
from .selector_engine import SelectorEngine
from .xpath import XPathEvaluator, XPathError

__all__ = [
    'Node', 'NodeType', 'Element', 'Attr', 'Text', 'Comment', 'DocumentFragment', 'Document',
    'SelectorEngine', 'XPathEvaluator', 'XPathError'
]
