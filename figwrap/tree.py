# A small document tree with real text nodes.
#
# ElementTree keeps text in .text and .tail which makes moving an element
# around awkward, so the figure transform works on this instead. bridge.py
# converts in both directions.


class Node:
    type = None


class Root(Node):
    """ Top of a document. Holds children, is never replaced """
    type = "root"

    def __init__(self, children=None):
        self.children = list(children) if children else []

    def __repr__(self):
        return "Root(" + ", ".join(repr(c) for c in self.children) + ")"


class Element(Node):
    """ A tagged node with a property dict and ordered children """
    type = "element"

    def __init__(self, tag_name, properties=None, children=None):
        self.tag_name = tag_name
        self.properties = dict(properties) if properties else {}
        self.children = list(children) if children else []

    def __repr__(self):
        props = ""
        if self.properties:
            props = "{" + ", ".join(k + "=" + repr(v) for k, v in self.properties.items()) + "}"
        return self.tag_name + props + "(" + ", ".join(repr(c) for c in self.children) + ")"


class Text(Node):
    type = "text"

    def __init__(self, value):
        self.value = value

    def __repr__(self):
        return "Text(" + repr(self.value) + ")"


class Comment(Node):
    type = "comment"

    def __init__(self, value):
        self.value = value

    def __repr__(self):
        return "Comment(" + repr(self.value) + ")"


def is_element(node, tag_name=None):
    if not isinstance(node, Element):
        return False
    return (tag_name is None) or (node.tag_name == tag_name)


def has_children(node):
    return isinstance(getattr(node, "children", None), list)


def index_of(children, node):
    """ position of node in children, compared by identity. -1 if missing """
    for i, child in enumerate(children):
        if child is node:
            return i
    return -1


def walk(tree):
    """ yields (node, ancestors) for every node below tree in document order.

        ancestors is a tuple running from tree down to the node's parent.
        Uses an explicit stack so deeply nested documents are fine. """
    stack = []
    if has_children(tree):
        path = (tree,)
        for child in reversed(tree.children):
            stack.append((child, path))

    while len(stack) > 0:
        node, ancestors = stack.pop()
        yield node, ancestors
        if has_children(node):
            path = ancestors + (node,)
            for child in reversed(node.children):
                stack.append((child, path))


def text_content(node):
    """ concatenated text of all text nodes below node """
    if isinstance(node, Text):
        return node.value
    return "".join(n.value for n, _ in walk(node) if isinstance(n, Text))
