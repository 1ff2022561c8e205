"""
Element implementation for the host DOM.
This module implements the DOM Element interface for loaded HTML5 documents.
"""

from typing import Dict, List, Optional, Set
import logging

from .node import Node, NodeType
from .attr import Attr

logger = logging.getLogger(__name__)

# Set of HTML5 void elements (self-closing tags)
HTML5_VOID_ELEMENTS = {
    'area', 'base', 'br', 'col', 'embed', 'hr', 'img', 'input',
    'link', 'meta', 'param', 'source', 'track', 'wbr'
}

# Elements whose text children are serialized without escaping
HTML5_RAW_TEXT_ELEMENTS = {
    'script', 'style', 'xmp', 'iframe', 'noembed', 'noframes', 'plaintext'
}


def escape_text(text: str) -> str:
    return text.replace("&", "&amp;").replace("\u00a0", "&nbsp;").replace("<", "&lt;").replace(">", "&gt;")


def escape_attribute(value: str) -> str:
    return value.replace("&", "&amp;").replace("\u00a0", "&nbsp;").replace('"', "&quot;")


class Element(Node):
    """
    Element node implementation for the DOM.

    The element keeps its qualified name as produced by the parser together
    with the namespace it was created in.
    """

    def __init__(self,
                 tag_name: str,
                 namespace: Optional[str] = None,
                 owner_document: Optional['Document'] = None):
        """
        Initialize a new Element.

        Args:
            tag_name: Qualified name of the element (e.g. "div", "svg", "foo:bar")
            namespace: Optional namespace URI
            owner_document: The document that owns this element
        """
        super().__init__(NodeType.ELEMENT_NODE, owner_document)

        self.tag_name = tag_name
        self.node_name = tag_name
        self.namespace_uri = namespace
        self.prefix: Optional[str] = None
        self.local_name = tag_name
        if ':' in tag_name:
            self.prefix, self.local_name = tag_name.split(':', 1)

        self.attributes: Dict[str, Attr] = {}

    @property
    def id(self) -> str:
        """Get or set the ID of the element."""
        return self.get_attribute('id') or ""

    @id.setter
    def id(self, value: str) -> None:
        self.set_attribute('id', value)

    @property
    def class_name(self) -> str:
        """Get or set the class attribute of the element."""
        return self.get_attribute('class') or ""

    @class_name.setter
    def class_name(self, value: str) -> None:
        self.set_attribute('class', value)

    @property
    def class_list(self) -> Set[str]:
        """Get the set of classes applied to this element."""
        return {cls for cls in self.class_name.split() if cls}

    @property
    def is_void_element(self) -> bool:
        return self.local_name in HTML5_VOID_ELEMENTS

    @property
    def previous_element_sibling(self) -> Optional['Element']:
        sibling = self.previous_sibling
        while sibling is not None and sibling.node_type != NodeType.ELEMENT_NODE:
            sibling = sibling.previous_sibling
        return sibling

    @property
    def next_element_sibling(self) -> Optional['Element']:
        sibling = self.next_sibling
        while sibling is not None and sibling.node_type != NodeType.ELEMENT_NODE:
            sibling = sibling.next_sibling
        return sibling

    def has_attribute(self, name: str) -> bool:
        """
        Check if the element has the specified attribute.

        Args:
            name: The qualified attribute name

        Returns:
            True if the attribute exists, False otherwise
        """
        return name in self.attributes

    def get_attribute(self, name: str) -> Optional[str]:
        """
        Get the value of an attribute.

        Args:
            name: The qualified attribute name

        Returns:
            The attribute value, or None if the attribute doesn't exist
        """
        return self.attributes[name].value if name in self.attributes else None

    def get_attribute_node(self, name: str) -> Optional[Attr]:
        """Get an attribute node by its qualified name."""
        return self.attributes.get(name)

    def set_attribute(self, name: str, value: str, namespace: Optional[str] = None) -> None:
        """
        Set an attribute value.

        Args:
            name: The qualified attribute name
            value: The attribute value
            namespace: Optional namespace URI of the attribute
        """
        if name in self.attributes:
            self.attributes[name].value = value
        else:
            self.attributes[name] = Attr(name, value, self, namespace_uri=namespace)

    def set_attribute_node(self, attr: Attr) -> Optional[Attr]:
        """
        Set an attribute node.

        Args:
            attr: The attribute node to set

        Returns:
            The attribute node that was replaced, if any
        """
        old_attr = self.attributes.get(attr.name)
        attr.owner_element = self
        self.attributes[attr.name] = attr
        return old_attr

    def remove_attribute(self, name: str) -> None:
        """Remove an attribute by its qualified name."""
        if name in self.attributes:
            attr = self.attributes.pop(name)
            attr.owner_element = None

    def has_attributes(self) -> bool:
        """Check if the element has any attributes."""
        return bool(self.attributes)

    def get_elements_by_tag_name(self, tag_name: str) -> List['Element']:
        """
        Get all descendant elements with the given qualified name.

        Args:
            tag_name: The name to match, or "*" for every element

        Returns:
            List of matching elements in document order
        """
        match_all = tag_name == "*"
        return [node for node in self.iter_descendants()
                if node.node_type == NodeType.ELEMENT_NODE
                and (match_all or node.tag_name == tag_name)]

    def get_elements_by_class_name(self, class_name: str) -> List['Element']:
        """Get all descendant elements carrying the given class."""
        return [element for element in self.get_elements_by_tag_name("*")
                if class_name in element.class_list]

    def matches(self, selector: str) -> bool:
        """
        Check if this element matches a CSS selector.

        Args:
            selector: The CSS selector

        Returns:
            True if the element matches, False otherwise
        """
        if self.owner_document is None:
            logger.debug(f"Element {self.tag_name} has no owner document, cannot match '{selector}'")
            return False
        return self.owner_document.element_matches(self, selector)

    def closest(self, selector: str) -> Optional['Element']:
        """Find the nearest inclusive ancestor matching a CSS selector."""
        current = self
        while current is not None and current.node_type == NodeType.ELEMENT_NODE:
            if current.matches(selector):
                return current
            current = current.parent_node
        return None

    def query_selector(self, selector: str) -> Optional['Element']:
        """Find the first descendant element matching a CSS selector."""
        matches = self.query_selector_all(selector)
        return matches[0] if matches else None

    def query_selector_all(self, selector: str) -> List['Element']:
        """Find all descendant elements matching a CSS selector."""
        if self.owner_document is None:
            return []
        return [element for element in self.owner_document.query_selector_all_from_node(self, selector)
                if element is not self]

    def clone_node(self, deep: bool = False) -> 'Element':
        """
        Clone this element.

        Args:
            deep: Whether to clone child nodes as well

        Returns:
            The cloned element
        """
        clone = type(self)(self.tag_name, self.namespace_uri, self.owner_document)

        for attr in self.attributes.values():
            clone.set_attribute_node(attr.clone())

        if deep:
            for child in self.child_nodes:
                clone.append_child(child.clone_node(deep=True))

        return clone

    @property
    def inner_html(self) -> str:
        """Serialize the children of this element as HTML."""
        raw_text = self.local_name in HTML5_RAW_TEXT_ELEMENTS
        return "".join(serialize_node(child, raw_text) for child in self.child_nodes)

    @property
    def outer_html(self) -> str:
        """Serialize this element, including itself, as HTML."""
        attributes = "".join(f' {name}="{escape_attribute(attr.value)}"'
                             for name, attr in self.attributes.items())
        if self.is_void_element:
            return f"<{self.tag_name}{attributes}>"
        return f"<{self.tag_name}{attributes}>{self.inner_html}</{self.tag_name}>"


def serialize_node(node: Node, raw_text: bool = False) -> str:
    """
    Serialize a single node as HTML.

    Args:
        node: The node to serialize
        raw_text: Whether text children are emitted without escaping

    Returns:
        The HTML string
    """
    if node.node_type == NodeType.ELEMENT_NODE:
        return node.outer_html
    if node.node_type == NodeType.TEXT_NODE:
        return node.node_value if raw_text else escape_text(node.node_value)
    if node.node_type == NodeType.COMMENT_NODE:
        return f"<!--{node.node_value}-->"
    if node.node_type == NodeType.DOCUMENT_TYPE_NODE:
        return f"<!DOCTYPE {node.node_name}>"
    return "".join(serialize_node(child) for child in node.child_nodes)
