# Markdown extension that turns <img> tags into <figure> tags with captions
#
#    ![This is a cool image](image.jpg)
# becomes
#    <figure>
#        <img alt="This is a cool image" src="image.jpg" />
#        <figcaption>This is a cool image</figcaption>
#    </figure>
#
# Raw HTML is stashed by markdown before tree processors run, so <img> tags
# written as HTML are not seen here. figwrap.render.render_markdown handles
# those by transforming the rendered HTML instead.

from xml.etree import ElementTree as etree

from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor

from .. import bridge
from .. import figure
from ..figureconfig import FigureConfig


class FigureCaptionTreeProcessor(Treeprocessor):
    def __init__(self, md, config=None):
        super().__init__(md)
        self.config = config if config is not None else FigureConfig()

    def run(self, root):
        # etree has no text nodes, so convert, transform and write back
        tree = bridge.root_from_etree(root)
        figure.transform(tree, self.config)

        for child in list(root):
            root.remove(child)
        root.text = None
        bridge.fill_etree(root, tree.children, etree)


class FigureCaptionExtension(Extension):
    """ Extension to wrap images in <figure> with a <figcaption> """

    def __init__(self, **kwargs):
        self.config = {
            "figure_class_name": ["", "Class added to <figure> elements"],
            "image_class_name": ["", "Class added to <img> elements"],
            "caption_class_name": ["", "Class added to <figcaption> elements"],
            "allow_empty_caption": [False, "Wrap images without alt text"],
        }
        super().__init__(**kwargs)

    def figure_config(self):
        return FigureConfig.from_dict(self.getConfigs())

    def extendMarkdown(self, md):
        # after inline (20) has built the <img> elements, before prettify (10)
        md.treeprocessors.register(FigureCaptionTreeProcessor(md, self.figure_config()),
                                   "figure_caption", 15)


def makeExtension(**kwargs):
    return FigureCaptionExtension(**kwargs)
