"""
Document fragment implementation for the host DOM.
"""

from typing import Optional
from .node import Node, NodeType


class DocumentFragment(Node):
    """
    A lightweight container for a sequence of sibling nodes.

    Appending a fragment to another node moves its children and leaves the
    fragment empty.
    """

    def __init__(self, owner_document: Optional['Document'] = None):
        super().__init__(NodeType.DOCUMENT_FRAGMENT_NODE, owner_document)
        self.node_name = "#document-fragment"

    def query_selector(self, selector: str) -> Optional['Element']:
        """Find the first element in this fragment matching a CSS selector."""
        matches = self.query_selector_all(selector)
        return matches[0] if matches else None

    def query_selector_all(self, selector: str):
        """Find all elements in this fragment matching a CSS selector."""
        if self.owner_document is None:
            return []
        return self.owner_document.query_selector_all_from_node(self, selector)

    def clone_node(self, deep: bool = False) -> 'DocumentFragment':
        clone = DocumentFragment(self.owner_document)
        if deep:
            for child in self.child_nodes:
                clone.append_child(child.clone_node(deep=True))
        return clone
