"""
XML element tree traversal.

Walks an `xml.etree.ElementTree` element depth first and passes every
attribute value and text node through a substitution function. In
ElementTree the text nodes of an element are its `text` and the `tail` of
each of its children.

Only string content changes: tags, attribute names, element identity and
ordering are left untouched.
"""

from typing import Callable
from xml.etree.ElementTree import Element


def tree_walk(element: Element, substitute: Callable[[str], str]) -> None:
    """Filter `element` and its descendants in place.

    Args:
        element: Root of the tree to filter
        substitute: Function applied to every attribute value and text node
    """
    for key, value in list(element.attrib.items()):
        element.set(key, substitute(value))

    if element.text is not None:
        element.text = substitute(element.text)

    for child in element:
        tree_walk(child, substitute)
        if child.tail is not None:
            child.tail = substitute(child.tail)
