"""Tests for element description helpers."""

from rumcore.interaction import get_element_as_string, get_element_content
from rumcore.models import Element


class TestElementAsString:
    """Tests for get_element_as_string."""

    def test_children_become_ellipsis(self):
        element = Element(
            tag_name="BUTTON",
            attributes={"class": "btn", "id": "save"},
            has_child_nodes=True,
        )
        assert get_element_as_string(element) == '<button class="btn" id="save">...</button>'

    def test_empty_element(self):
        assert get_element_as_string(Element(tag_name="DIV")) == "<div></div>"

    def test_void_element(self):
        element = Element(tag_name="INPUT", attributes={"type": "submit"})
        assert get_element_as_string(element) == '<input type="submit">'

    def test_attribute_escaping(self):
        element = Element(tag_name="A", attributes={"title": 'say "hi" & bye'})
        assert (
            get_element_as_string(element)
            == '<a title="say &quot;hi&quot; &amp; bye"></a>'
        )


class TestElementContent:
    """Tests for get_element_content."""

    def test_text_content_first(self):
        element = Element(
            tag_name="BUTTON",
            text_content="  Save  ",
            attributes={"aria-label": "Save document"},
        )
        assert get_element_content(element) == "Save"

    def test_submit_input_value(self):
        element = Element(
            tag_name="INPUT",
            attributes={"type": "submit", "title": "fallback"},
            value="Send",
            text_content="",
        )
        assert get_element_content(element) == "Send"

    def test_text_input_value_is_ignored(self):
        element = Element(
            tag_name="INPUT",
            attributes={"type": "text", "placeholder": "Search"},
            value="typed by user",
        )
        assert get_element_content(element) == "Search"

    def test_attribute_order(self):
        element = Element(
            tag_name="IMG",
            attributes={"title": "Title", "alt": "Alt text", "placeholder": "p"},
        )
        assert get_element_content(element) == "Alt text"

    def test_blank_candidates_are_skipped(self):
        element = Element(
            tag_name="SPAN",
            text_content="   ",
            attributes={"aria-label": "\n", "title": "Tooltip"},
        )
        assert get_element_content(element) == "Tooltip"

    def test_falls_back_to_ancestors(self):
        grandparent = Element(tag_name="NAV", attributes={"aria-label": "Main menu"})
        parent = Element(tag_name="DIV", parent=grandparent)
        element = Element(tag_name="I", attributes={"class": "icon"}, parent=parent)

        assert get_element_content(element) == "Main menu"

    def test_nothing_found(self):
        element = Element(tag_name="DIV", parent=Element(tag_name="BODY"))
        assert get_element_content(element) is None

    def test_long_content_is_truncated(self):
        element = Element(tag_name="P", text_content="x" * 500)
        content = get_element_content(element)

        assert content == "x" * 400 + " [...]"

    def test_exactly_limit_is_kept(self):
        element = Element(tag_name="P", text_content="y" * 400)
        assert get_element_content(element) == "y" * 400
