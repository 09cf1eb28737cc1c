import logging

from figwrap.figure import (
    transform,
    alt_text,
    class_list,
    add_class,
    wrap_image,
)
from figwrap.figureconfig import FigureConfig
from figwrap.tree import Root, Element, Text


def img(alt="Alt text", **properties):
    properties = dict(properties)
    properties.setdefault("src", "image.png")
    if alt is not None:
        properties["alt"] = alt
    return Element("img", properties)


def tags(nodes):
    return [n.tag_name if isinstance(n, Element) else n.value for n in nodes]


class TestWrapping:

    def test_literal_scenario_default_config(self):
        image = img()
        tree = Root([Element("p", {}, [image])])

        transform(tree)

        assert len(tree.children) == 1
        figure = tree.children[0]
        assert figure.tag_name == "figure"
        assert figure.properties == {}
        assert figure.children[0] is image
        assert image.properties == {"src": "image.png", "alt": "Alt text"}
        caption = figure.children[1]
        assert caption.tag_name == "figcaption"
        assert caption.properties == {}
        assert len(caption.children) == 1
        assert isinstance(caption.children[0], Text)
        assert caption.children[0].value == "Alt text"

    def test_class_names(self):
        image = img()
        tree = Root([Element("p", {}, [image])])
        config = FigureConfig(figure_class_name="custom-figure",
                              image_class_name="custom-image",
                              caption_class_name="custom-caption")

        transform(tree, config)

        figure = tree.children[0]
        assert figure.properties == {"class": "custom-figure"}
        assert image.properties["class"] == ["custom-image"]
        assert figure.children[1].properties == {"class": "custom-caption"}

    def test_non_paragraph_parent_is_replaced_in_place(self):
        image = img()
        div = Element("div", {}, [Text("a"), image, Text("b")])
        tree = Root([div])

        transform(tree)

        assert tree.children == [div]
        assert tags(div.children) == ["a", "figure", "b"]
        assert div.children[1].children[0] is image

    def test_image_at_root(self):
        image = img()
        tree = Root([image])

        transform(tree)

        assert tags(tree.children) == ["figure"]

    def test_other_attributes_are_preserved(self):
        image = img(title="Title text")
        tree = Root([Element("p", {}, [image])])

        transform(tree)

        assert image.properties == {"src": "image.png", "alt": "Alt text", "title": "Title text"}

    def test_numeric_alt_becomes_caption(self):
        image = img(alt=42)
        tree = Root([image])

        transform(tree)

        assert tree.children[0].children[1].children[0].value == "42"


class TestSkipping:

    def test_empty_alt_is_skipped_by_default(self):
        image = img(alt="")
        p = Element("p", {}, [image])
        tree = Root([p])

        transform(tree, FigureConfig(image_class_name="x", figure_class_name="y"))

        assert tree.children == [p]
        assert p.children == [image]
        assert image.properties == {"src": "image.png", "alt": ""}

    def test_missing_alt_is_skipped(self):
        image = img(alt=None)
        tree = Root([image])

        transform(tree)

        assert tree.children == [image]

    def test_boolean_alt_counts_as_missing(self):
        image = img(alt=True)
        tree = Root([image])

        transform(tree)

        assert tree.children == [image]

    def test_empty_alt_allowed_gives_figure_without_caption(self):
        image = img(alt="")
        tree = Root([Element("p", {}, [image])])

        transform(tree, FigureConfig(allow_empty_caption=True))

        figure = tree.children[0]
        assert figure.tag_name == "figure"
        assert figure.children == [image]

    def test_allow_empty_caption_needs_true(self):
        image = img(alt="")
        tree = Root([image])

        transform(tree, FigureConfig(allow_empty_caption="yes"))

        assert tree.children == [image]

    def test_image_inside_link_is_untouched(self):
        image = img()
        link = Element("a", {"href": "http://example.com"}, [image])
        p = Element("p", {}, [link])
        tree = Root([p])

        transform(tree, FigureConfig(image_class_name="x"))

        assert tree.children == [p]
        assert p.children == [link]
        assert link.children == [image]
        assert "class" not in image.properties

    def test_image_deep_inside_link_is_untouched(self):
        image = img()
        span = Element("span", {}, [Element("em", {}, [image])])
        tree = Root([Element("div", {}, [Element("a", {}, [span])])])

        transform(tree)

        assert span.children[0].children == [image]

    def test_non_image_elements_pass_through(self):
        div = Element("div", {"class": ["box"]}, [Text("Not an image")])
        p = Element("p", {}, [Text("Some text.")])
        tree = Root([div, Text("\n"), p])

        transform(tree, FigureConfig(figure_class_name="f", image_class_name="i"))

        assert tree.children[0] is div
        assert tree.children[2] is p
        assert div.properties == {"class": ["box"]}
        assert tags(div.children) == ["Not an image"]
        assert tags(p.children) == ["Some text."]

    def test_paragraph_without_grandparent_is_untouched(self):
        image = img()
        p = Element("p", {}, [Text("a"), image])

        transform(p, FigureConfig(image_class_name="x"))

        assert p.children[1] is image
        assert "class" not in image.properties

    def test_wrap_image_not_in_parent(self):
        image = img()
        div = Element("div")
        parents = {id(image): div}

        assert wrap_image(image, parents, FigureConfig()) is False
        assert div.children == []

    def test_skips_are_logged(self, caplog):
        caplog.set_level(logging.DEBUG, logger="figwrap.figure")
        tree = Root([Element("a", {}, [img()])])

        transform(tree)

        assert "inside a link" in caplog.text


class TestParagraphSplit:

    def test_text_before_and_after(self):
        a, b = Text("A"), Text("B")
        image = img()
        tree = Root([Element("p", {}, [a, image, b])])

        transform(tree)

        assert tags(tree.children) == ["p", "figure", "p"]
        assert tree.children[0].children == [a]
        assert tree.children[1].children[0] is image
        assert tree.children[2].children == [b]

    def test_no_leading_paragraph(self):
        tree = Root([Element("p", {}, [img(), Text("B")])])

        transform(tree)

        assert tags(tree.children) == ["figure", "p"]

    def test_no_trailing_paragraph(self):
        tree = Root([Element("p", {}, [Text("A"), img()])])

        transform(tree)

        assert tags(tree.children) == ["p", "figure"]

    def test_only_child(self):
        tree = Root([Element("p", {}, [img()])])

        transform(tree)

        assert tags(tree.children) == ["figure"]

    def test_grandparent_siblings_keep_order(self):
        h1 = Element("h1", {}, [Text("Heading")])
        last = Element("p", {}, [Text("end")])
        body = Element("body", {}, [h1, Element("p", {}, [Text("A"), img(), Text("B")]), last])
        tree = Root([body])

        transform(tree)

        assert tags(body.children) == ["h1", "p", "figure", "p", "p"]
        assert body.children[0] is h1
        assert body.children[-1] is last

    def test_split_paragraphs_have_no_attributes(self):
        tree = Root([Element("p", {"class": ["lead"]}, [Text("A"), img(), Text("B")])])

        transform(tree)

        assert tree.children[0].properties == {}
        assert tree.children[2].properties == {}

    def test_new_paragraphs_hold_original_nodes(self):
        em = Element("em", {}, [Text("x")])
        span = Element("span", {}, [Text("Caption")])
        tree = Root([Element("p", {}, [em, img(), span])])

        transform(tree)

        assert tree.children[0].children[0] is em
        assert tree.children[2].children[0] is span

    def test_two_images_in_one_paragraph(self):
        first, second = img("One"), img("Two")
        tree = Root([Element("p", {}, [Text("t1"), first, Text("t2"), second, Text("t3")])])

        transform(tree)

        assert tags(tree.children) == ["p", "figure", "p", "figure", "p"]
        assert tree.children[1].children[0] is first
        assert tree.children[3].children[0] is second
        assert tags(tree.children[0].children) == ["t1"]
        assert tags(tree.children[2].children) == ["t2"]
        assert tags(tree.children[4].children) == ["t3"]

    def test_adjacent_images_in_one_paragraph(self):
        tree = Root([Element("p", {}, [img("One"), img("Two")])])

        transform(tree)

        assert tags(tree.children) == ["figure", "figure"]


class TestMultipleImages:

    def test_each_image_wrapped(self):
        tree = Root([
            Element("p", {}, [img("Image One", src="image1.png")]),
            Text("\n"),
            Element("p", {}, [Text("Some text.")]),
            Text("\n"),
            Element("p", {}, [img("Image Two", src="image2.png")]),
        ])

        transform(tree)

        assert tags(tree.children) == ["figure", "\n", "p", "\n", "figure"]
        assert tree.children[0].children[1].children[0].value == "Image One"
        assert tree.children[4].children[1].children[0].value == "Image Two"

    def test_ineligible_image_does_not_block_others(self):
        skipped = img("")
        tree = Root([Element("p", {}, [skipped]), Element("p", {}, [img("Two")])])

        transform(tree)

        assert tags(tree.children) == ["p", "figure"]
        assert tree.children[0].children == [skipped]

    def test_transform_twice_on_fresh_trees(self):
        config = FigureConfig(figure_class_name="f")
        for _ in range(2):
            tree = Root([img()])
            transform(tree, config)
            assert tree.children[0].properties == {"class": "f"}


class TestClassMerging:

    def test_existing_class_string(self):
        image = img(**{"class": "existing-class"})
        transform(Root([image]), FigureConfig(image_class_name="new-image-class"))
        assert image.properties["class"] == ["existing-class", "new-image-class"]

    def test_existing_class_list(self):
        image = img(**{"class": ["a", "b"]})
        transform(Root([image]), FigureConfig(image_class_name="c"))
        assert image.properties["class"] == ["a", "b", "c"]

    def test_no_duplicate(self):
        image = img(**{"class": ["a", "custom-image"]})
        transform(Root([image]), FigureConfig(image_class_name="custom-image"))
        assert image.properties["class"] == ["a", "custom-image"]

    def test_add_class_twice(self):
        image = img()
        add_class(image, "x")
        add_class(image, "x")
        assert image.properties["class"] == ["x"]

    def test_class_list_normalisation(self):
        assert class_list(None) == []
        assert class_list("a") == ["a"]
        assert class_list(3) == [3]
        assert class_list(True) == []
        assert class_list(["a", 1, None, False, "b"]) == ["a", 1, "b"]

    def test_empty_class_option_adds_nothing(self):
        image = img()
        transform(Root([image]), FigureConfig(image_class_name="", figure_class_name=7))
        assert "class" not in image.properties

    def test_alt_text(self):
        assert alt_text(img("hello")) == "hello"
        assert alt_text(img(None)) == ""
        assert alt_text(img(["a"])) == ""
