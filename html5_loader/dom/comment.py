"""
Comment nodes for the host DOM.
"""

from .node import NodeType
from .text import CharacterData


class Comment(CharacterData):
    """The contents of a ``<!-- ... -->`` block, without the delimiters."""

    NODE_TYPE = NodeType.COMMENT_NODE
    NODE_NAME = "#comment"
