import pytest

from tagsoup import StructureNotFoundError, extract_span, strip_elements


def test_span_covers_inner_content_only():
    svg = (
        '<svg><g id="options"><g id="a"><g id="a1"/></g><g id="b"></g></g>'
        '<g id="after"></g></svg>'
    )
    span = extract_span(svg, "g", "id", "options")
    assert span.slice(svg) == '<g id="a"><g id="a1"/></g><g id="b"></g>'


@pytest.mark.parametrize("n", [1, 2, 3, 5])
def test_nested_groups_never_overrun_siblings(n):
    inner = "<g>" * (n - 1) + "x" + "</g>" * (n - 1)
    svg = f'<g id="before"></g><g id="t">{inner}</g><g id="sib"><g></g></g>'
    assert extract_span(svg, "g", "id", "t").slice(svg) == inner


def test_target_attribute_need_not_be_first():
    svg = '<g class="c" id="options">in</g>'
    assert extract_span(svg, "g", "id", "options").slice(svg) == "in"


def test_first_matching_element_wins():
    svg = '<g id="options">one</g><g id="options">two</g>'
    assert extract_span(svg, "g", "id", "options").slice(svg) == "one"


def test_self_closing_target_has_empty_span():
    svg = '<svg><g id="options"/></svg>'
    span = extract_span(svg, "g", "id", "options")
    assert span.start == span.end


def test_missing_element():
    with pytest.raises(StructureNotFoundError):
        extract_span('<svg><g id="other"></g></svg>', "g", "id", "options")


def test_unterminated_element():
    with pytest.raises(StructureNotFoundError):
        extract_span('<svg><g id="options"><g id="a"></g>', "g", "id", "options")


def test_strip_elements_removes_tag_and_content():
    svg = '<svg><title>Plan A</title><g><desc lang="en">multi\nline</desc></g><desc/></svg>'
    svg, n_title = strip_elements(svg, "title")
    svg, n_desc = strip_elements(svg, "desc")
    assert (n_title, n_desc) == (1, 2)
    assert svg == "<svg><g></g></svg>"


def test_strip_elements_leaves_unterminated_element():
    assert strip_elements("<svg><title>x", "title") == ("<svg><title>x", 0)
