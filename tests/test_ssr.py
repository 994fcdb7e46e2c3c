import pytest

from mogview.ssr import VOID_TAGS, Container, Text, render, tag_is_voidable


def test_text_renders_verbatim():
    assert render(Text("hello & bye")) == "hello & bye"


def test_nested_with_attributes_and_style():
    node = Container(
        "div",
        [("style", "float: left;")],
        [Container("p", [("class", "p_class")], [Text("here")])],
    )
    assert render(node) == '<div style="float: left;"><p class="p_class">here</p></div>'


def test_empty_non_void_element_with_attribute():
    assert render(Container("div", [("class", "now")])) == '<div class="now"></div>'


def test_children_are_trimmed_and_joined_with_spaces():
    node = Container("p", [("id", "main")], [Text("Zero "), Text("One")])
    assert render(node) == '<p id="main">Zero One</p>'


def test_text_children_join():
    node = Container(
        "div", [], [Text("here is some text "), Text("66"), Text(" &lt;- number")]
    )
    assert render(node) == "<div>here is some text 66 &lt;- number</div>"


def test_void_element_without_attributes():
    assert render(Container("br")) == "<br />"


def test_void_element_with_bare_attribute():
    assert render(Container("input", [("disabled", None)])) == "<input disabled />"


@pytest.mark.parametrize("tag", sorted(VOID_TAGS))
def test_every_void_tag_self_closes(tag):
    assert tag_is_voidable(tag)
    out = render(Container(tag))
    assert out.startswith(f"<{tag}")
    assert out.endswith(" />")
    assert f"</{tag}>" not in out


@pytest.mark.parametrize("tag", ["div", "p", "span", "script", "BR"])
def test_non_void_tags(tag):
    assert not tag_is_voidable(tag)
    assert render(Container(tag)) == f"<{tag}></{tag}>"


def test_void_tag_with_children_is_closed_normally():
    out = render(Container("img", [], [Text("x")]))
    assert out.endswith("</img>")


def test_str_matches_render():
    node = Container("div", [("class", "now")], [Text("here")])
    assert str(node) == render(node)
    assert str(Text("here")) == "here"


def test_render_rejects_other_types():
    with pytest.raises(TypeError):
        render("<div></div>")