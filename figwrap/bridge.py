# Converts between ElementTree style elements and figwrap.tree nodes.
#
# Works with both xml.etree (what Python-Markdown hands to tree processors)
# and lxml.etree (what lxml.html parses into). Their text/tail model becomes
# explicit Text nodes here and is folded back on the way out.

import logging
from xml.etree import ElementTree

import lxml.etree
import lxml.html

from .tree import Root, Element, Text, Comment

logger = logging.getLogger(__name__)

COMMENT_TAGS = (ElementTree.Comment, lxml.etree.Comment)


class HtmlElements:
    """ lxml factories bound to the HTML parser.

        lxml.etree.Element rejects names lxml.html happily parses, such as
        <o:p> or xlink:href. Elements made by the HTML parser accept them. """
    Element = staticmethod(lxml.html.Element)
    Comment = staticmethod(lxml.etree.Comment)


def from_etree(element):
    """ converts element and its descendants, but not its tail.

        Returns None for nodes that have no counterpart (processing
        instructions, entities). """
    if element.tag in COMMENT_TAGS:
        return Comment(element.text or "")
    if not isinstance(element.tag, str):
        logger.debug("Dropping non-element node %r", element)
        return None
    return Element(element.tag, _properties(element.attrib), children_from_etree(element))


def children_from_etree(element):
    children = []
    if element.text:
        children.append(Text(element.text))
    for child in element:
        node = from_etree(child)
        if node is not None:
            children.append(node)
        if child.tail:
            children.append(Text(child.tail))
    return children


def root_from_etree(element):
    """ a Root holding the children of a container element """
    return Root(children_from_etree(element))


def root_from_fragments(fragments):
    """ a Root from lxml.html.fragments_fromstring output, which may start
        with a string of leading text """
    root = Root()
    for fragment in fragments:
        if isinstance(fragment, str):
            root.children.append(Text(fragment))
            continue
        node = from_etree(fragment)
        if node is not None:
            root.children.append(node)
        if fragment.tail:
            root.children.append(Text(fragment.tail))
    return root


def _properties(attrib):
    properties = {}
    for key, value in attrib.items():
        if key == "class":
            properties[key] = value.split()
        else:
            properties[key] = value
    return properties


def attribute_value(value):
    """ property value to attribute string, None means leave it out """
    if value is None or value is False:
        return None
    if value is True:
        return ""
    if isinstance(value, (list, tuple)):
        return " ".join(str(v) for v in value if v is not None and not isinstance(v, bool))
    return str(value)


def to_etree(node, etree=ElementTree):
    """ builds an element (and its descendants) with the given ElementTree
        implementation. Use HtmlElements for lxml output """
    if isinstance(node, Comment):
        return etree.Comment(node.value)

    element = etree.Element(node.tag_name)
    for key, value in node.properties.items():
        v = attribute_value(value)
        if v is not None:
            element.set(key, v)
    fill_etree(element, node.children, etree)
    return element


def fill_etree(element, children, etree=ElementTree):
    """ appends children to element, text nodes go to text and tail """
    last = None
    for child in children:
        if isinstance(child, Text):
            if last is None:
                element.text = _join(element.text, child.value)
            else:
                last.tail = _join(last.tail, child.value)
        elif isinstance(child, (Element, Comment)):
            last = to_etree(child, etree)
            element.append(last)
        else:
            logger.debug("Dropping unsupported node %r", child)


def _join(existing, value):
    # keep str subclasses such as markdown's AtomicString when possible
    if not existing:
        return value
    return existing + value
