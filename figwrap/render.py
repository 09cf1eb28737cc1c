""" parse -> transform -> serialize.

    HTML goes through lxml.html, markdown through Python-Markdown first.
    Fragments come back as fragments. A full document (starting with
    <html> or a doctype) keeps its doctype and <head>, only its <body> is
    transformed.
"""

import html
import re

import lxml.html
import markdown

from . import bridge
from . import figure
from .markdown_extensions import figure_caption
from .tree import Root, Text

DEFAULT_MARKDOWN_EXTENSIONS = ["fenced_code"]

# same test lxml.html uses to decide it was given a whole document
FULL_DOCUMENT_RE = re.compile(r"^\s*<(?:html|!doctype)", re.I)

# don't invent a doctype for documents that have none
document_parser = lxml.html.HTMLParser(default_doctype=False)


def is_full_document(markup):
    return bool(FULL_DOCUMENT_RE.match(markup))


def parse_fragment(markup):
    """ parses an HTML fragment into a Root """
    if not markup.strip():
        return Root([Text(markup)]) if markup else Root()
    tree = bridge.root_from_fragments(lxml.html.fragments_fromstring(markup))

    # fragments_fromstring drops leading text that is only whitespace
    leading = markup[:len(markup) - len(markup.lstrip())]
    if leading and not (tree.children and isinstance(tree.children[0], Text)):
        tree.children.insert(0, Text(leading))
    return tree


def serialize_fragment(tree):
    wrapper = bridge.HtmlElements.Element("div")
    bridge.fill_etree(wrapper, tree.children, bridge.HtmlElements)

    output = ""
    if wrapper.text:
        output = html.escape(wrapper.text, quote=False)
    # tostring includes each child's tail
    return output + "".join(lxml.html.tostring(child, encoding="unicode") for child in wrapper)


def render_document(markup, config=None):
    """ transforms the <body> of a whole HTML document """
    doc = lxml.html.document_fromstring(markup, parser=document_parser)
    body = doc.find("body")
    if body is not None:
        tree = bridge.root_from_etree(body)
        figure.transform(tree, config)

        for child in list(body):
            body.remove(child)
        body.text = None
        bridge.fill_etree(body, tree.children, bridge.HtmlElements)

    # serializing the ElementTree keeps the doctype
    return lxml.html.tostring(doc.getroottree(), encoding="unicode")


def render_html(markup, config=None):
    if is_full_document(markup):
        return render_document(markup, config)
    tree = parse_fragment(markup)
    figure.transform(tree, config)
    return serialize_fragment(tree)


def render_markdown(text, config=None, raw_html=True, extensions=None):
    """ renders markdown to HTML with images wrapped in figures.

        raw_html=True transforms the rendered HTML, which also catches <img>
        tags written as raw HTML in the source. raw_html=False runs the
        transform inside markdown as a tree processor. """
    if extensions is None:
        extensions = DEFAULT_MARKDOWN_EXTENSIONS
    extensions = list(extensions)

    if raw_html:
        return render_html(markdown.markdown(text, extensions=extensions), config)

    if config is None:
        extension = figure_caption.FigureCaptionExtension()
    else:
        extension = figure_caption.FigureCaptionExtension(**config.to_dict())
    return markdown.markdown(text, extensions=extensions + [extension])
