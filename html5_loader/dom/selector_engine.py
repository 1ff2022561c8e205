"""
CSS selector matching for the host DOM.
Selectors are parsed with cssselect and the parse tree is walked against host elements.
"""

import re
import logging
from typing import Any, Dict, List

import cssselect
from cssselect.parser import (
    Attrib, Class, CombinedSelector, Element as ElementSelector, Hash, Negation, Pseudo, Selector,
)

from .node import Node, NodeType

logger = logging.getLogger(__name__)

HTML_NAMESPACE = 'http://www.w3.org/1999/xhtml'


class SelectorEngine:
    """
    Matches CSS selectors against host elements.

    Simple selectors (a bare tag, id or class) are answered directly; anything
    else is parsed with cssselect and matched against every candidate element.
    """

    def __init__(self):
        """Initialize the selector engine."""
        self._simple_regex = re.compile(r'^([#.]?)([a-zA-Z0-9_-]+)$')

        # selector text -> parsed selector group
        self._selector_cache: Dict[str, List[Selector]] = {}

    def select(self, selector: str, root_node: Node) -> List['Element']:
        """
        Find all elements matching a CSS selector.

        Args:
            selector: The CSS selector string
            root_node: The root node to search from

        Returns:
            List of matching elements in document order

        Raises:
            cssselect.SelectorSyntaxError: If the selector cannot be parsed
        """
        elements = self._get_all_element_descendants(root_node)

        simple = self._simple_regex.match(selector.strip())
        if simple:
            return [el for el in elements if self._matches_simple(el, simple.group(1), simple.group(2))]

        parsed_selectors = self._get_parsed_selector(selector)
        return [el for el in elements
                if any(self._matches_selector_tree(el, parsed.parsed_tree) for parsed in parsed_selectors)]

    def matches(self, element: 'Element', selector: str) -> bool:
        """
        Check if an element matches a CSS selector.

        Args:
            element: The element to check
            selector: The CSS selector

        Returns:
            True if the element matches the selector, False otherwise
        """
        simple = self._simple_regex.match(selector.strip())
        if simple:
            return self._matches_simple(element, simple.group(1), simple.group(2))

        return any(self._matches_selector_tree(element, parsed.parsed_tree)
                   for parsed in self._get_parsed_selector(selector))

    def _get_parsed_selector(self, selector: str) -> List[Selector]:
        """
        Parse a selector group once and reuse it.

        Args:
            selector: The CSS selector string

        Returns:
            Parsed selector group
        """
        if selector not in self._selector_cache:
            logger.debug(f"Parsing selector '{selector}'")
            self._selector_cache[selector] = cssselect.parse(selector)

        return self._selector_cache[selector]

    def _matches_simple(self, element: 'Element', marker: str, name: str) -> bool:
        if marker == '#':
            return element.id == name
        if marker == '.':
            return name in element.class_list
        return self._matches_tag(element, name)

    @staticmethod
    def _matches_tag(element: 'Element', name: str) -> bool:
        # HTML element names compare case-insensitively, foreign ones exactly
        if element.namespace_uri in (None, HTML_NAMESPACE):
            return element.local_name.lower() == name.lower()
        return element.local_name == name

    def _get_all_element_descendants(self, node: Node) -> List['Element']:
        """
        Get all element descendants of a node.

        Args:
            node: The node to get descendants from

        Returns:
            List of element descendants, including the node itself when it is an element
        """
        elements = [node] if node.node_type == NodeType.ELEMENT_NODE else []
        elements.extend(child for child in node.iter_descendants()
                        if child.node_type == NodeType.ELEMENT_NODE)
        return elements

    def _matches_selector_tree(self, element: 'Element', selector_tree: Any) -> bool:
        """
        Match an element against a selector tree.

        Args:
            element: The element to check
            selector_tree: The selector tree

        Returns:
            True if the element matches, False otherwise
        """
        if element is None or element.node_type != NodeType.ELEMENT_NODE:
            return False

        if isinstance(selector_tree, ElementSelector):
            tag = selector_tree.element
            return self._matches_tag(element, tag) if tag else True

        elif isinstance(selector_tree, Hash):
            return (element.id == selector_tree.id and
                    self._matches_selector_tree(element, selector_tree.selector))

        elif isinstance(selector_tree, Class):
            return (selector_tree.class_name in element.class_list and
                    self._matches_selector_tree(element, selector_tree.selector))

        elif isinstance(selector_tree, Attrib):
            return (self._matches_attribute(element, selector_tree) and
                    self._matches_selector_tree(element, selector_tree.selector))

        elif isinstance(selector_tree, Pseudo):
            return (self._matches_pseudo(element, selector_tree.ident.lower()) and
                    self._matches_selector_tree(element, selector_tree.selector))

        elif isinstance(selector_tree, Negation):
            return (not self._matches_selector_tree(element, selector_tree.subselector) and
                    self._matches_selector_tree(element, selector_tree.selector))

        elif isinstance(selector_tree, CombinedSelector):
            # The right-hand side describes the element itself
            if not self._matches_selector_tree(element, selector_tree.subselector):
                return False

            combinator = selector_tree.combinator
            left = selector_tree.selector

            if combinator == ' ':  # Descendant
                parent = element.parent_node
                while parent is not None and parent.node_type == NodeType.ELEMENT_NODE:
                    if self._matches_selector_tree(parent, left):
                        return True
                    parent = parent.parent_node
                return False

            elif combinator == '>':  # Child
                return self._matches_selector_tree(element.parent_node, left)

            elif combinator == '+':  # Adjacent sibling
                return self._matches_selector_tree(element.previous_element_sibling, left)

            elif combinator == '~':  # General sibling
                sibling = element.previous_element_sibling
                while sibling is not None:
                    if self._matches_selector_tree(sibling, left):
                        return True
                    sibling = sibling.previous_element_sibling
                return False

            logger.warning(f"Unknown combinator: {combinator}")
            return False

        logger.warning(f"Unsupported selector type: {type(selector_tree).__name__}")
        return False

    @staticmethod
    def _matches_attribute(element: 'Element', selector_tree: Attrib) -> bool:
        attr_name = selector_tree.attrib
        if not element.has_attribute(attr_name):
            return False

        operator = selector_tree.operator
        if operator == 'exists':
            return True

        # cssselect >= 1.2 wraps the value in a Token
        expected = getattr(selector_tree.value, 'value', selector_tree.value)
        actual = element.get_attribute(attr_name)

        if operator == '=':
            return actual == expected
        elif operator == '~=':
            return expected in actual.split()
        elif operator == '|=':
            return actual == expected or actual.startswith(f"{expected}-")
        elif operator == '^=':
            return bool(expected) and actual.startswith(expected)
        elif operator == '$=':
            return bool(expected) and actual.endswith(expected)
        elif operator == '*=':
            return bool(expected) and expected in actual
        return False

    @staticmethod
    def _matches_pseudo(element: 'Element', name: str) -> bool:
        parent = element.parent_node
        if name == 'first-child':
            return element.previous_element_sibling is None
        elif name == 'last-child':
            return element.next_element_sibling is None
        elif name == 'only-child':
            return element.previous_element_sibling is None and element.next_element_sibling is None
        elif name == 'empty':
            return not any(child.node_type in (NodeType.ELEMENT_NODE, NodeType.TEXT_NODE)
                           for child in element.child_nodes)
        elif name == 'root':
            return parent is not None and parent.node_type == NodeType.DOCUMENT_NODE

        logger.warning(f"Unsupported pseudo-class: {name}")
        return False
