"""
XPath queries over the host DOM.

Expressions are evaluated by lxml. Every evaluation copies the tree that holds
the context node into an lxml tree, runs the expression there and maps the
selected lxml nodes back to the host nodes they were copied from.
"""

import logging
import re
from typing import Any, Dict, List, Optional, Tuple

from lxml import etree

from .node import Node, NodeType, TEXT_NODE_TYPES
from .attr import XMLNS_NAMESPACE

logger = logging.getLogger(__name__)

# Stands in for the document node when the top level is not a single element
CONTAINER_TAG = '{urn:x-html5-loader}document'

_INVALID_XML_CHARS = re.compile("[^\t\n\r\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")
_INVALID_NAME_CHARS = re.compile(r'[^\w.-]')


class XPathError(ValueError):
    """Raised for expressions lxml can not compile or evaluate."""


def _xml_text(value: Optional[str]) -> str:
    return _INVALID_XML_CHARS.sub("\ufffd", value or "")


def _xml_name(name: str) -> str:
    name = _INVALID_NAME_CHARS.sub('_', name)
    if not name or not (name[0].isalpha() or name[0] == '_'):
        name = '_' + name
    return name


def _comment_text(value: Optional[str]) -> str:
    text = _xml_text(value)
    while '--' in text:
        text = text.replace('--', '- -')
    if text.endswith('-'):
        text += ' '
    return text


def _root_of(node: Node) -> Node:
    while node.parent_node is not None:
        node = node.parent_node
    return node


def _has_single_root(node: Node) -> bool:
    # lxml documents allow only comments next to the root element
    top = node.child_nodes
    elements = [child for child in top if child.node_type == NodeType.ELEMENT_NODE]
    return len(elements) == 1 and all(
        child.node_type in (NodeType.ELEMENT_NODE, NodeType.COMMENT_NODE) for child in top)


class _Mirror:
    """An lxml copy of a host tree and the way back to the host nodes."""

    def __init__(self, root: Node, contained: bool):
        self.root = root
        self.to_host: Dict[Any, Node] = {}
        self.from_host: Dict[Node, Any] = {}
        self.text_nodes: Dict[Tuple[Any, str], Node] = {}
        self.attributes: Dict[Tuple[Any, str], Any] = {}
        self.container = None

        if root.node_type == NodeType.ELEMENT_NODE:
            self.tree = etree.ElementTree(self._element(root))
        elif contained or root.node_type in TEXT_NODE_TYPES + (NodeType.COMMENT_NODE,) \
                or not _has_single_root(root):
            self.container = etree.Element(CONTAINER_TAG)
            if root.node_type in (NodeType.DOCUMENT_NODE, NodeType.DOCUMENT_FRAGMENT_NODE):
                self._append_children(self.container, root)
            else:
                self._append_children(self.container, root, [root])
            self.tree = etree.ElementTree(self.container)
        else:
            self.tree = etree.ElementTree(self._top_level(root))

    def _top_level(self, root: Node):
        element = next(child for child in root.child_nodes if child.node_type == NodeType.ELEMENT_NODE)
        main = self._element(element)
        position = element._index_in(root.child_nodes)
        for comment in root.child_nodes[:position]:
            main.addprevious(self._comment(comment))
        for comment in reversed(root.child_nodes[position + 1:]):
            main.addnext(self._comment(comment))
        return main

    def _register(self, mirrored, node: Node):
        self.to_host[mirrored] = node
        self.from_host[node] = mirrored
        return mirrored

    def _comment(self, node: Node):
        return self._register(etree.Comment(_comment_text(node.node_value)), node)

    def _create(self, node: Node):
        local_name = _xml_name(node.local_name)
        if node.namespace_uri:
            nsmap = {node.prefix: node.namespace_uri} if node.prefix else {None: node.namespace_uri}
            try:
                return etree.Element(f'{{{node.namespace_uri}}}{local_name}', nsmap=nsmap)
            except ValueError:
                try:
                    return etree.Element(f'{{{node.namespace_uri}}}{local_name}')
                except ValueError:
                    logger.debug(f"Namespace {node.namespace_uri!r} of {node.tag_name} dropped in XPath copy")
        return etree.Element(_xml_name(node.tag_name))

    def _element(self, node: Node):
        mirrored = self._register(self._create(node), node)
        for name, attr in node.attributes.items():
            if attr.namespace_uri == XMLNS_NAMESPACE:
                continue
            key = _xml_name(name)
            if attr.namespace_uri:
                key = f'{{{attr.namespace_uri}}}{_xml_name(attr.local_name)}'
            try:
                mirrored.set(key, _xml_text(attr.value))
            except ValueError:
                key = _xml_name(name)
                mirrored.set(key, _xml_text(attr.value))
            self.attributes[(mirrored, key)] = attr
        self._append_children(mirrored, node)
        return mirrored

    def _append_children(self, parent, node: Node, children: Optional[List[Node]] = None) -> None:
        last = None
        for child in node.child_nodes if children is None else children:
            if child.node_type == NodeType.ELEMENT_NODE:
                last = self._element(child)
                parent.append(last)
            elif child.node_type == NodeType.COMMENT_NODE:
                last = self._comment(child)
                parent.append(last)
            elif child.node_type in TEXT_NODE_TYPES:
                self._add_text(parent, last, child)

    def _add_text(self, parent, last, node: Node) -> None:
        # Adjacent host text nodes share one lxml text run, mapped to the first
        data = _xml_text(node.node_value)
        if last is None:
            parent.text = (parent.text or '') + data
            key = (parent, 'text')
        else:
            last.tail = (last.tail or '') + data
            key = (last, 'tail')
        self.text_nodes.setdefault(key, node)

    def context_for(self, node: Node):
        if node is self.root and node.node_type in (NodeType.DOCUMENT_NODE, NodeType.DOCUMENT_FRAGMENT_NODE):
            return self.container if self.container is not None else self.tree
        return self.from_host.get(node)

    def host_item(self, item):
        """Map one item of an lxml node-set result, or None for the container."""
        if isinstance(item, str) and hasattr(item, 'getparent'):
            parent = item.getparent()
            if getattr(item, 'is_attribute', False):
                return self.attributes.get((parent, item.attrname))
            if getattr(item, 'is_tail', False):
                return self.text_nodes.get((parent, 'tail'))
            if getattr(item, 'is_text', False):
                return self.text_nodes.get((parent, 'text'))
            return str(item)
        if item is self.container:
            return None
        return self.to_host.get(item, item)


class XPathEvaluator:
    """
    Evaluate XPath 1.0 expressions against a host document.

    Node-set results come back as host nodes in document order: elements,
    text nodes, comments and ``Attr`` objects. Number, string and boolean
    results are returned as they are. The document node itself is never part
    of a result.

    Without a context, a document whose top level is a single element (plus
    comments) is copied as it is, so absolute paths behave exactly. When the
    document is passed as the context, or its top level holds text or several
    elements, a container element stands in for the document node: relative
    paths from the document select exactly its top-level nodes, while absolute
    paths see the container as the only top-level element.
    """

    def __init__(self, document):
        self.document = document

    def namespaces(self, extra: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        """The prefix bindings passed to lxml: the document registry, then ``extra``."""
        bindings = dict(self.document.namespaces)
        bindings.update(extra or {})
        return {prefix: uri for prefix, uri in bindings.items() if prefix and uri}

    def evaluate(self, expression: str, context: Optional[Node] = None,
                 namespaces: Optional[Dict[str, str]] = None) -> Any:
        """
        Evaluate an expression.

        Args:
            expression: XPath 1.0 expression
            context: Context node; None evaluates against the document
            namespaces: Additional prefix bindings for this evaluation only

        Returns:
            A list of host nodes for node-set results, else the number, string or boolean

        Raises:
            XPathError: If the expression is malformed, uses an unbound prefix
                or the context node can not be a context
        """
        node = self.document if context is None else context
        root = _root_of(node)
        mirror = _Mirror(root, contained=context is root)
        target = mirror.context_for(node)
        if target is None:
            raise XPathError(f"A {node.node_name} node can not be the context of an expression")

        try:
            result = target.xpath(expression, namespaces=self.namespaces(namespaces))
        except etree.XPathError as e:
            raise XPathError(f"{e}: {expression!r}") from e

        if isinstance(result, list):
            items = (mirror.host_item(item) for item in result)
            return [item for item in items if item is not None]
        if isinstance(result, str):
            return str(result)
        return result
