"""
Character data nodes: text, and the base shared with comments.
"""

from typing import Optional

from .node import Node, NodeType, TEXT_NODE_TYPES


class CharacterData(Node):
    """A leaf node whose value is a string kept in ``node_value``."""

    NODE_TYPE = NodeType.TEXT_NODE
    NODE_NAME = "#text"

    def __init__(self, data: Optional[str], owner_document: Optional['Document'] = None):
        super().__init__(self.NODE_TYPE, owner_document)
        self.node_name = self.NODE_NAME
        self.node_value = data or ""

    @property
    def data(self) -> str:
        return self.node_value

    @data.setter
    def data(self, value: Optional[str]) -> None:
        self.node_value = value or ""

    @property
    def length(self) -> int:
        return len(self.node_value)

    @property
    def text_content(self) -> str:
        return self.node_value

    def append_data(self, data: str) -> None:
        self.node_value += data

    def clone_node(self, deep: bool = False) -> 'CharacterData':
        return type(self)(self.node_value, self.owner_document)


class Text(CharacterData):
    """A run of character data inside an element or fragment."""

    @property
    def whole_text(self) -> str:
        """The data of this node joined with all adjacent text siblings."""
        if self.parent_node is None:
            return self.node_value

        siblings = self.parent_node.child_nodes
        start = end = self._index_in(siblings)
        while start > 0 and siblings[start - 1].node_type in TEXT_NODE_TYPES:
            start -= 1
        while end + 1 < len(siblings) and siblings[end + 1].node_type in TEXT_NODE_TYPES:
            end += 1
        return "".join(node.node_value for node in siblings[start:end + 1])

    def split_text(self, offset: int) -> 'Text':
        """
        Split the node in two at ``offset``.

        This node keeps the data before the offset. A new node holding the
        rest is returned and, if this node has a parent, inserted right after it.

        Raises:
            ValueError: If the offset lies outside the data
        """
        if not 0 <= offset <= self.length:
            raise ValueError(f"Offset {offset} outside text of length {self.length}")

        tail = Text(self.node_value[offset:], self.owner_document)
        self.node_value = self.node_value[:offset]
        if self.parent_node is not None:
            self.parent_node.insert_before(tail, self.next_sibling)
        return tail
