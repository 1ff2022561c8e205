"""
Document implementation for the host DOM.
This module implements the document type loaded HTML5 sources are adapted into.
"""

import logging
from typing import Any, Dict, List, Optional, Union

from .node import Node, NodeType
from .element import Element, serialize_node
from .text import Text
from .comment import Comment
from .fragment import DocumentFragment
from .selector_engine import SelectorEngine
from .xpath import XPathEvaluator

logger = logging.getLogger(__name__)


class Document(Node):
    """
    Document node implementation for the DOM.

    A document starts empty. Besides the usual factory methods it carries a
    namespace registry (prefix to URI bindings) used to resolve prefixes in
    node-set queries, and it can import nodes from foreign trees such as the
    ``xml.dom.minidom`` documents html5lib builds.
    """

    def __init__(self):
        """Initialize a new, empty Document object."""
        super().__init__(NodeType.DOCUMENT_NODE)
        self.node_name = "#document"

        self._namespaces: Dict[str, str] = {}
        self._selector_engine = SelectorEngine()
        self._xpath: Optional[XPathEvaluator] = None

        logger.debug("Empty document created")

    @property
    def document_element(self) -> Optional[Element]:
        """Get the first element child of the document."""
        return self.first_element_child

    # Factories

    def create_element(self, tag_name: str, namespace: Optional[str] = None) -> Element:
        """
        Create a new element with the specified qualified name.

        Args:
            tag_name: The qualified name of the element
            namespace: Optional namespace URI

        Returns:
            The new element
        """
        return Element(tag_name, namespace, self)

    def create_text_node(self, data: str) -> Text:
        """Create a new text node owned by this document."""
        return Text(data, self)

    def create_comment(self, data: str) -> Comment:
        """Create a new comment node owned by this document."""
        return Comment(data, self)

    def create_document_fragment(self) -> DocumentFragment:
        """Create a new, empty document fragment owned by this document."""
        return DocumentFragment(self)

    # Namespace registry

    def register_namespace(self, prefix: str, namespace_uri: str) -> None:
        """
        Bind a prefix to a namespace URI for queries on this document.

        Args:
            prefix: The namespace prefix
            namespace_uri: The namespace URI
        """
        self._namespaces[prefix] = namespace_uri
        logger.debug(f"Registered namespace {prefix} -> {namespace_uri}")

    def lookup_namespace(self, prefix: str) -> Optional[str]:
        """
        Resolve a registered prefix.

        Args:
            prefix: The namespace prefix

        Returns:
            The namespace URI, or None if the prefix is not registered
        """
        return self._namespaces.get(prefix)

    @property
    def namespaces(self) -> Dict[str, str]:
        """Get a copy of the registered prefix bindings."""
        return dict(self._namespaces)

    # Import

    def import_node(self, node, deep: bool = False) -> Node:
        """
        Import a node from another document into this one.

        Host nodes are cloned. Foreign nodes are read through the
        ``xml.dom`` interface (``nodeType``, ``tagName``, ``namespaceURI``,
        ``attributes``, ``childNodes``, ``data``). Doctypes and other node
        types without a host counterpart are not imported.

        Args:
            node: The node to import
            deep: Whether to import the subtree as well

        Returns:
            The imported node, owned by this document but not yet attached

        Raises:
            TypeError: If the node cannot be represented in this document
        """
        if isinstance(node, Node):
            clone = node.clone_node(deep)
            self._adopt(clone)
            return clone

        imported = self._import_foreign(node, deep)
        if imported is None:
            raise TypeError(f"Cannot import node of type {getattr(node, 'nodeType', type(node).__name__)}")
        return imported

    def _adopt(self, node: Node) -> None:
        node.owner_document = self
        for child in node.child_nodes:
            self._adopt(child)

    def _import_foreign(self, node, deep: bool) -> Optional[Node]:
        node_type = getattr(node, 'nodeType', None)

        if node_type == NodeType.ELEMENT_NODE:
            element = self.create_element(node.tagName, node.namespaceURI or None)
            attributes = node.attributes
            if attributes is not None:
                for index in range(attributes.length):
                    attr = attributes.item(index)
                    element.set_attribute(attr.name, attr.value, attr.namespaceURI or None)
            if deep:
                self._import_children(node, element)
            return element

        if node_type in (NodeType.TEXT_NODE, NodeType.CDATA_SECTION_NODE):
            return self.create_text_node(node.data)

        if node_type == NodeType.COMMENT_NODE:
            return self.create_comment(node.data)

        if node_type in (NodeType.DOCUMENT_FRAGMENT_NODE, NodeType.DOCUMENT_NODE):
            fragment = self.create_document_fragment()
            if deep:
                self._import_children(node, fragment)
            return fragment

        logger.debug(f"Skipping foreign node of type {node_type}")
        return None

    def _import_children(self, source, target: Node) -> None:
        for child in source.childNodes:
            imported = self._import_foreign(child, deep=True)
            if imported is not None:
                target.append_child(imported)

    # Queries

    def evaluate(self, expression: str, context: Optional[Node] = None,
                 namespaces: Optional[Dict[str, str]] = None) -> Any:
        """
        Evaluate an XPath expression against this document.

        Args:
            expression: An expression such as ``//html:p`` or ``count(//html:p)``
            context: Context node (defaults to the document)
            namespaces: Additional prefix bindings for this evaluation only

        Returns:
            The selected nodes in document order, or a number, string or boolean

        Raises:
            XPathError: If the expression can not be evaluated
        """
        if self._xpath is None:
            self._xpath = XPathEvaluator(self)
        return self._xpath.evaluate(expression, context, namespaces)

    def get_elements_by_tag_name(self, tag_name: str) -> List[Element]:
        """Get all elements in the document with the given qualified name."""
        match_all = tag_name == "*"
        return [node for node in self.iter_descendants()
                if node.node_type == NodeType.ELEMENT_NODE
                and (match_all or node.tag_name == tag_name)]

    def get_element_by_id(self, element_id: str) -> Optional[Element]:
        """Get the first element carrying the given ID."""
        for element in self.get_elements_by_tag_name("*"):
            if element.id == element_id:
                return element
        return None

    def query_selector(self, selector: str) -> Optional[Element]:
        """
        Find the first element matching the specified selector.

        Args:
            selector: CSS selector string

        Returns:
            The first matching element, or None if not found
        """
        matches = self.query_selector_all(selector)
        return matches[0] if matches else None

    def query_selector_all(self, selector: str) -> List[Element]:
        """
        Find all elements matching the specified selector.

        Args:
            selector: CSS selector string

        Returns:
            List of matching elements
        """
        return self.query_selector_all_from_node(self, selector)

    def query_selector_all_from_node(self, node: Node, selector: str) -> List[Element]:
        """
        Find all elements matching the selector in a subtree.

        Args:
            node: The root node of the subtree
            selector: CSS selector string

        Returns:
            List of matching elements
        """
        return self._selector_engine.select(selector, node)

    def element_matches(self, element: Element, selector: str) -> bool:
        """Check if an element matches a CSS selector."""
        return self._selector_engine.matches(element, selector)

    # Output

    def save_html(self, node: Optional[Union[Node, List[Node]]] = None) -> str:
        """
        Serialize the document, a node or a list of nodes as HTML.

        Args:
            node: What to serialize (defaults to the whole document)

        Returns:
            The HTML string
        """
        if node is None:
            node = self.child_nodes
        if isinstance(node, Node):
            node = [node]
        return "".join(serialize_node(item) for item in node)

    def debug_structure(self) -> str:
        """
        Generate a debug representation of the document structure.

        Returns:
            A string representation of the document structure
        """
        result = ["Document Structure:"]
        result.append(f"Namespaces: {self._namespaces}")
        result.append(f"Has document_element: {self.document_element is not None}")
        result.append(f"Top-level nodes: {len(self.child_nodes)}")

        element_count = 0
        text_count = 0
        comment_count = 0
        for node in self.iter_descendants():
            if node.node_type == NodeType.ELEMENT_NODE:
                element_count += 1
            elif node.node_type == NodeType.TEXT_NODE:
                text_count += 1
            elif node.node_type == NodeType.COMMENT_NODE:
                comment_count += 1

        result.append(f"Element count: {element_count}")
        result.append(f"Text node count: {text_count}")
        result.append(f"Comment count: {comment_count}")

        result.append("\nElement tree (first 10 levels):")

        def print_element_tree(node: Node, level: int = 0, max_level: int = 10) -> None:
            if level > max_level:
                return
            indent = "  " * level
            namespace = f" {{{node.namespace_uri}}}" if node.namespace_uri else ""
            result.append(f"{indent}{node.tag_name}{namespace}")
            for child in node.children:
                print_element_tree(child, level + 1, max_level)

        for child in self.children:
            print_element_tree(child)

        return "\n".join(result)
