# Turns images into figures with captions taken from the alt text.
#
#    <p>Look: <img alt="A cool image" src="image.jpg"> nice.</p>
# becomes
#    <p>Look: </p>
#    <figure>
#        <img alt="A cool image" src="image.jpg">
#        <figcaption>A cool image</figcaption>
#    </figure>
#    <p> nice.</p>
#
# Images inside links are left alone, so are images without alt text unless
# allow_empty_caption is set.

import logging

from .figureconfig import FigureConfig
from .tree import Element, Text, is_element, has_children, index_of, walk

logger = logging.getLogger(__name__)

IMAGE_TAG = "img"
LINK_TAG = "a"
PARAGRAPH_TAG = "p"
FIGURE_TAG = "figure"
CAPTION_TAG = "figcaption"


def transform(tree, config=None):
    """ Wraps every eligible image below tree in a <figure>, in place.

        The first pass only reads the tree: it records every node's parent
        and collects the images that are not inside a link. The second pass
        wraps them in document order. Splicing updates the parent map, so an
        image that an earlier split moved into a new paragraph is still
        found. Nothing is raised, images that cannot be placed are skipped.
    """
    if config is None:
        config = FigureConfig()

    parents = {}
    images = []
    for node, ancestors in walk(tree):
        parents[id(node)] = ancestors[-1]
        if not is_element(node, IMAGE_TAG):
            continue
        if inside_link(ancestors):
            logger.debug("Skipping image inside a link: %r", node.properties.get("src"))
            continue
        images.append(node)

    wrapped = 0
    for image in images:
        if wrap_image(image, parents, config):
            wrapped += 1
    logger.debug("Wrapped %d of %d images", wrapped, len(images))


def inside_link(ancestors):
    for ancestor in reversed(ancestors):
        if is_element(ancestor, LINK_TAG):
            return True
    return False


def _is_token(value):
    return isinstance(value, (str, int, float)) and not isinstance(value, bool)


def _class_option(value):
    if isinstance(value, str) and value:
        return value
    return None


def alt_text(image):
    """ the alt attribute as a string, "" when missing or not text """
    value = image.properties.get("alt")
    if not _is_token(value):
        return ""
    return str(value)


def class_list(value):
    """ normalises a class attribute value to a list of tokens """
    if isinstance(value, (list, tuple)):
        return [v for v in value if _is_token(v)]
    if _is_token(value):
        return [value]
    return []


def add_class(element, class_name):
    classes = class_list(element.properties.get("class"))
    if class_name not in classes:
        classes.append(class_name)
    # no empty class=""
    element.properties["class"] = classes if len(classes) > 0 else None


def make_caption(text, config):
    class_name = _class_option(config.caption_class_name)
    properties = {"class": class_name} if class_name else {}
    return Element(CAPTION_TAG, properties, [Text(text)])


def make_figure(image, caption, config):
    class_name = _class_option(config.figure_class_name)
    properties = {"class": class_name} if class_name else {}
    figure = Element(FIGURE_TAG, properties, [image])
    if caption is not None:
        figure.children.append(caption)
    return figure


def wrap_image(image, parents, config):
    """ wraps a single image, returns True if the tree was changed.

        parents maps id(node) to the node's current parent and is kept up
        to date with every splice made here. """
    parent = parents.get(id(image))
    if parent is None or not has_children(parent):
        logger.debug("Skipping image without a parent")
        return False

    index = index_of(parent.children, image)
    if index == -1:
        logger.debug("Skipping image not found in its parent")
        return False

    text = alt_text(image)
    if not text and config.allow_empty_caption is not True:
        return False

    # a <figure> can't live inside a <p>, the paragraph gets split around it
    # and the figure goes up a level. Resolve that before touching anything.
    split_paragraph = is_element(parent, PARAGRAPH_TAG)
    grandparent = None
    parent_index = -1
    if split_paragraph:
        grandparent = parents.get(id(parent))
        if grandparent is None or not has_children(grandparent):
            logger.debug("Skipping image in a paragraph without a parent")
            return False
        parent_index = index_of(grandparent.children, parent)
        if parent_index == -1:
            logger.debug("Skipping image in a paragraph not found in its parent")
            return False

    image_class_name = _class_option(config.image_class_name)
    if image_class_name:
        add_class(image, image_class_name)

    caption = make_caption(text, config) if text else None
    figure = make_figure(image, caption, config)
    parents[id(image)] = figure
    if caption is not None:
        parents[id(caption)] = figure

    if not split_paragraph:
        parent.children[index] = figure
        parents[id(figure)] = parent
        return True

    before = parent.children[:index]
    after = parent.children[index + 1:]

    replacement = []
    if len(before) > 0:
        replacement.append(_paragraph(before, grandparent, parents))
    replacement.append(figure)
    parents[id(figure)] = grandparent
    if len(after) > 0:
        replacement.append(_paragraph(after, grandparent, parents))

    grandparent.children[parent_index:parent_index + 1] = replacement
    # the old paragraph is gone, its id may be reused
    del parents[id(parent)]
    return True


def _paragraph(children, grandparent, parents):
    p = Element(PARAGRAPH_TAG, {}, children)
    parents[id(p)] = grandparent
    for child in children:
        parents[id(child)] = p
    return p
