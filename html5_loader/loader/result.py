"""
Loader results for content that is not a complete document.
"""

from typing import Iterator, List, Optional

from ..dom import Document, Node


class NodeSequence:
    """
    A lazily evaluated node-set query.

    Every access re-runs the query against the document, so the sequence can
    be iterated any number of times and reflects the current tree.
    """

    def __init__(self, document: Document, expression: str = '/node()', context: Optional[Node] = None):
        self._document = document
        self._expression = expression
        self._context = context

    @property
    def expression(self) -> str:
        return self._expression

    def to_list(self) -> List[Node]:
        """Evaluate the query and return the selected nodes."""
        return self._document.evaluate(self._expression, self._context)

    def __iter__(self) -> Iterator[Node]:
        return iter(self.to_list())

    def __len__(self) -> int:
        return len(self.to_list())

    def __getitem__(self, index):
        return self.to_list()[index]

    def __repr__(self) -> str:
        return f"NodeSequence({self._expression!r})"


class Result:
    """
    A loaded document together with its content type and the nodes that
    make up the loaded content.
    """

    def __init__(self, document: Document, content_type: str, nodes: NodeSequence):
        """
        Initialize a result.

        Args:
            document: The document owning the loaded nodes
            content_type: Content type label of the loaded content
            nodes: The selection of loaded nodes
        """
        self._document = document
        self._content_type = content_type
        self._nodes = nodes

    @property
    def document(self) -> Document:
        return self._document

    @property
    def content_type(self) -> str:
        return self._content_type

    @property
    def nodes(self) -> NodeSequence:
        return self._nodes

    def __repr__(self) -> str:
        return f"<Result {self._content_type}>"
