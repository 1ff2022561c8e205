"""
Node implementation for the host DOM.

Each node keeps a list of its children and a reference to its parent; first,
last and sibling links are derived from the parent's child list.
"""

from enum import IntEnum
from typing import Iterator, List, Optional


class NodeType(IntEnum):
    """Node types as defined in the DOM specification."""
    ELEMENT_NODE = 1
    ATTRIBUTE_NODE = 2
    TEXT_NODE = 3
    CDATA_SECTION_NODE = 4
    ENTITY_REFERENCE_NODE = 5
    ENTITY_NODE = 6
    PROCESSING_INSTRUCTION_NODE = 7
    COMMENT_NODE = 8
    DOCUMENT_NODE = 9
    DOCUMENT_TYPE_NODE = 10
    DOCUMENT_FRAGMENT_NODE = 11
    NOTATION_NODE = 12


TEXT_NODE_TYPES = (NodeType.TEXT_NODE, NodeType.CDATA_SECTION_NODE)


class Node:
    """
    Base class of documents, fragments, elements and character data.

    Attributes:
        node_type: One of ``NodeType``
        owner_document: The document the node belongs to, if any
        parent_node: The node this node is a child of, if any
        child_nodes: The children in document order
        node_name: ``#text``, ``#document``, a tag name, ...
        node_value: Character data for text and comment nodes, else None
    """

    def __init__(self, node_type: NodeType, owner_document: Optional['Document'] = None):
        self.node_type = node_type
        self.owner_document = owner_document
        self.parent_node: Optional['Node'] = None
        self.child_nodes: List['Node'] = []
        self.node_name: str = "#node"
        self.node_value: Optional[str] = None

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.node_name}>"

    # Derived links

    def _index_in(self, nodes: List['Node']) -> int:
        for index, node in enumerate(nodes):
            if node is self:
                return index
        return -1

    def _sibling(self, offset: int) -> Optional['Node']:
        if self.parent_node is None:
            return None
        siblings = self.parent_node.child_nodes
        index = self._index_in(siblings) + offset
        return siblings[index] if 0 <= index < len(siblings) else None

    @property
    def first_child(self) -> Optional['Node']:
        return self.child_nodes[0] if self.child_nodes else None

    @property
    def last_child(self) -> Optional['Node']:
        return self.child_nodes[-1] if self.child_nodes else None

    @property
    def previous_sibling(self) -> Optional['Node']:
        return self._sibling(-1)

    @property
    def next_sibling(self) -> Optional['Node']:
        return self._sibling(1)

    @property
    def children(self) -> List['Element']:
        """Child elements, skipping text and comments."""
        return [child for child in self.child_nodes if child.node_type == NodeType.ELEMENT_NODE]

    @property
    def child_element_count(self) -> int:
        return len(self.children)

    @property
    def first_element_child(self) -> Optional['Element']:
        return next(iter(self.children), None)

    @property
    def last_element_child(self) -> Optional['Element']:
        children = self.children
        return children[-1] if children else None

    # Mutation

    def append_child(self, child: 'Node') -> 'Node':
        """
        Append a node as the last child.

        A document fragment is not inserted itself; its children are moved
        here and the fragment is left empty. A node that already has a parent
        is detached from it first.

        Args:
            child: The node to append

        Returns:
            The appended node
        """
        return self.insert_before(child, None)

    def insert_before(self, new_child: 'Node', reference_child: Optional['Node'] = None) -> 'Node':
        """
        Insert a node before one of this node's children.

        Args:
            new_child: The node (or fragment) to insert
            reference_child: The child to insert before; None appends

        Returns:
            The inserted node

        Raises:
            ValueError: If ``reference_child`` is not a child of this node, or
                ``new_child`` is this node or one of its ancestors
        """
        if new_child.contains(self):
            raise ValueError("A node can not be inserted into itself or its descendants")
        if reference_child is not None and reference_child._index_in(self.child_nodes) < 0:
            raise ValueError("Reference child not found in child nodes")

        if new_child.node_type == NodeType.DOCUMENT_FRAGMENT_NODE:
            moved = list(new_child.child_nodes)
            for node in moved:
                new_child.remove_child(node)
            for node in moved:
                self._insert(node, reference_child)
            return new_child

        if new_child is reference_child:
            return new_child
        if new_child.parent_node is not None:
            new_child.parent_node.remove_child(new_child)
        self._insert(new_child, reference_child)
        return new_child

    def _insert(self, node: 'Node', reference_child: Optional['Node']) -> None:
        if reference_child is None:
            self.child_nodes.append(node)
        else:
            self.child_nodes.insert(reference_child._index_in(self.child_nodes), node)
        node.parent_node = self

    def remove_child(self, child: 'Node') -> 'Node':
        """
        Detach a child node.

        Raises:
            ValueError: If the node is not a child of this node
        """
        index = child._index_in(self.child_nodes)
        if index < 0:
            raise ValueError("Child not found in child nodes")
        del self.child_nodes[index]
        child.parent_node = None
        return child

    def replace_child(self, new_child: 'Node', old_child: 'Node') -> 'Node':
        """Put ``new_child`` where ``old_child`` is and return ``old_child``."""
        if old_child._index_in(self.child_nodes) < 0:
            raise ValueError("Old child not found in child nodes")
        if new_child is not old_child:
            self.insert_before(new_child, old_child)
            self.remove_child(old_child)
        return old_child

    def has_child_nodes(self) -> bool:
        return bool(self.child_nodes)

    # Copying and comparison

    def clone_node(self, deep: bool = False) -> 'Node':
        """Copy this node, with its subtree if ``deep`` is set."""
        clone = Node(self.node_type, self.owner_document)
        clone.node_name = self.node_name
        clone.node_value = self.node_value
        if deep:
            for child in self.child_nodes:
                clone.append_child(child.clone_node(deep=True))
        return clone

    def is_equal_node(self, other: Optional['Node']) -> bool:
        """Structural equality: same type, name, value and equal children."""
        if not isinstance(other, Node):
            return False
        if (self.node_type, self.node_name, self.node_value) != (other.node_type, other.node_name, other.node_value):
            return False
        return (len(self.child_nodes) == len(other.child_nodes)
                and all(a.is_equal_node(b) for a, b in zip(self.child_nodes, other.child_nodes)))

    def contains(self, other: Optional['Node']) -> bool:
        """True if this node is ``other`` or one of its ancestors."""
        while other is not None:
            if other is self:
                return True
            other = other.parent_node
        return False

    # Traversal

    def iter_descendants(self) -> Iterator['Node']:
        """Yield all descendants in document order."""
        for child in self.child_nodes:
            yield child
            yield from child.iter_descendants()

    @property
    def text_content(self) -> str:
        """The concatenated data of all descendant text nodes."""
        return "".join(node.node_value or "" for node in self.iter_descendants()
                       if node.node_type in TEXT_NODE_TYPES)
