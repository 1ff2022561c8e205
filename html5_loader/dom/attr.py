"""
Attr implementation for the host DOM.
"""

from typing import Optional

XML_NAMESPACE = 'http://www.w3.org/XML/1998/namespace'
XLINK_NAMESPACE = 'http://www.w3.org/1999/xlink'
XMLNS_NAMESPACE = 'http://www.w3.org/2000/xmlns/'


class Attr:
    """
    Attribute node implementation for the DOM.

    This class represents an attribute of an Element node.
    """

    def __init__(self, name: str, value: str, owner_element: Optional['Element'] = None,
                 namespace_uri: Optional[str] = None):
        """
        Initialize a new attribute.

        Args:
            name: The qualified attribute name
            value: The attribute value
            owner_element: The element that owns this attribute
            namespace_uri: Explicit namespace URI, derived from the prefix when omitted
        """
        self.name = name
        self.value = value
        self.owner_element = owner_element
        self.namespace_uri: Optional[str] = namespace_uri
        self.prefix: Optional[str] = None
        self.local_name = name

        if ':' in name:
            self.prefix, self.local_name = name.split(':', 1)

        if self.namespace_uri is None:
            if self.prefix == 'xml':
                self.namespace_uri = XML_NAMESPACE
            elif self.prefix == 'xlink':
                self.namespace_uri = XLINK_NAMESPACE
            elif self.prefix == 'xmlns' or name == 'xmlns':
                self.namespace_uri = XMLNS_NAMESPACE

    def __repr__(self) -> str:
        return f"<Attr {self.name}={self.value!r}>"

    def clone(self) -> 'Attr':
        """
        Clone this attribute.

        Returns:
            A new Attr instance with the same name, value and namespace
        """
        return Attr(self.name, self.value, namespace_uri=self.namespace_uri)
