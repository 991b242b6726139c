import pytest

from tagsoup import (
    MalformedSelectorError,
    apply_rename_mapping,
    merge_class,
    merge_style,
    parse_start_tag,
    reclassify_by_substring,
    rename_with_dependents,
    scan_tags,
    strip_data_attributes,
)


def _patched(source, fn, *args, **kwargs):
    tag = parse_start_tag(source)
    changed = fn(tag, *args, **kwargs)
    return changed, tag.render()


# ---------------------------------------------------------------------------
# merge_class
# ---------------------------------------------------------------------------

def test_merge_class_replaces_id_with_class():
    assert _patched('<g id="sofa-furniture" fill="red">', merge_class, "furniture") == (
        True, '<g class="furniture" fill="red">',
    )


def test_merge_class_appends_to_existing_class():
    assert _patched('<g id="x" class="a">', merge_class, "furniture") == (
        True, '<g class="a furniture">',
    )


def test_merge_class_is_idempotent():
    tag = parse_start_tag('<g id="x" class="a">')
    merge_class(tag, "furniture")
    once = tag.render()
    assert merge_class(tag, "furniture") is False
    assert tag.render() == once
    assert tag.get("class").split().count("furniture") == 1


def test_merge_class_checks_whole_tokens():
    assert _patched('<g class="furniture-old">', merge_class, "furniture")[1] == (
        '<g class="furniture-old furniture">'
    )


# ---------------------------------------------------------------------------
# merge_style
# ---------------------------------------------------------------------------

def test_merge_style_never_overwrites_existing_property():
    source = '<g style="color:red;visibility:visible">'
    assert _patched(source, merge_style, "visibility", "hidden") == (False, source)


@pytest.mark.parametrize("source, expected", [
    ("<g>", '<g style="visibility:hidden">'),
    ('<g style="fill:#fff">', '<g style="fill:#fff;visibility:hidden">'),
    ('<g style="fill:#fff;">', '<g style="fill:#fff;visibility:hidden">'),
    ('<g style="">', '<g style="visibility:hidden">'),
])
def test_merge_style_adds_declaration(source, expected):
    assert _patched(source, merge_style, "visibility", "hidden") == (True, expected)


# ---------------------------------------------------------------------------
# rename_with_dependents / apply_rename_mapping
# ---------------------------------------------------------------------------

def test_rename_updates_id_display_name_and_hides():
    svg = '<g id="opt2" data-name="Old"><g id="opt2x"/></g>'
    assert rename_with_dependents(svg, "g", "opt2", "Storage") == (
        '<g id="Storage" data-name="Storage" style="visibility:hidden"><g id="opt2x"/></g>', 1,
    )


def test_rename_without_new_name_only_hides():
    assert rename_with_dependents('<g id="a">x</g>', "g", "a", None) == (
        '<g id="a" style="visibility:hidden">x</g>', 1,
    )


def test_rename_rejects_unsafe_selector():
    with pytest.raises(MalformedSelectorError):
        rename_with_dependents('<g id="a">', "g", 'a"b', "x")


def test_mapping_is_applied_in_one_pass():
    outcome = apply_rename_mapping('<g id="a"/><g id="b"/>', "g", ["a", "b"], {"a": "b", "b": "c"})
    assert outcome.text == (
        '<g id="b" data-name="b" style="visibility:hidden"/>'
        '<g id="c" data-name="c" style="visibility:hidden"/>'
    )
    assert outcome.matched == 2
    assert outcome.patched == 2


def test_mapping_skips_unsafe_ids():
    svg = "<g id=\"ok\"/><g id=\"we'ird\"/>"
    outcome = apply_rename_mapping(svg, "g", ["ok", "we'ird"], {"we'ird": "fine"})
    assert outcome.skipped == ["we'ird"]
    assert outcome.text == '<g id="ok" style="visibility:hidden"/><g id="we\'ird"/>'


# ---------------------------------------------------------------------------
# reclassify_by_substring
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("n", [0, 1, 4])
def test_reclassify_is_exhaustive_and_removes_ids(n):
    parts = [f'<g id="{"FURNITURE" if i % 2 else "furniture"}-{i}" fill="#000"/>' for i in range(n)]
    parts += ['<g id="wall"/>', '<g class="x" id="bed_Furniture">b</g>']
    svg = "<svg>" + "".join(parts) + "</svg>"

    out, changed = reclassify_by_substring(svg, "g", "furniture", "furniture")

    assert changed == n + 1
    tags = [parse_start_tag(out[o.start:o.end]) for o in scan_tags(out, "g") if o.is_start]
    with_token = [t for t in tags if "furniture" in (t.get("class") or "").split()]
    assert len(with_token) == n + 1
    assert not any("furniture" in (t.get("id") or "").lower() for t in tags)
    assert '<g id="wall"/>' in out


def test_reclassify_when_id_is_not_first():
    assert reclassify_by_substring('<g fill="red" id="label-1">', "g", "label", "labels") == (
        '<g fill="red" class="labels">', 1,
    )


# ---------------------------------------------------------------------------
# strip_data_attributes
# ---------------------------------------------------------------------------

def test_strip_data_attributes_keeps_data_name():
    svg = '<svg data-foo="1"><g data-name="Kitchen" data-x-y="2" id="k"/></svg>'
    assert strip_data_attributes(svg) == ('<svg><g data-name="Kitchen" id="k"/></svg>', 2)


def test_strip_data_attributes_ignores_text_content():
    svg = '<text>data-a="1"</text>'
    assert strip_data_attributes(svg) == (svg, 0)


# ---------------------------------------------------------------------------
# równowaga tagów
# ---------------------------------------------------------------------------

def _kinds(text):
    return [o.kind for o in scan_tags(text, "g")]


@pytest.mark.parametrize("patch", [
    lambda s: reclassify_by_substring(s, "g", "furniture", "furniture")[0],
    lambda s: strip_data_attributes(s)[0],
    lambda s: apply_rename_mapping(s, "g", ["sofa-furniture", "b"], {"b": "Bed"}).text,
])
def test_patches_keep_unquoted_self_closing_tags_self_closing(patch):
    svg = '<svg><g id=sofa-furniture/><g id=b data-x=1/><g id="x"></g></svg>'
    out = patch(svg)
    assert out != svg
    assert _kinds(out) == _kinds(svg)


def test_reclassify_unquoted_self_closing_id():
    svg = '<svg><g id=sofa-furniture/><g id="x"></g></svg>'
    assert reclassify_by_substring(svg, "g", "furniture", "furniture") == (
        '<svg><g class="furniture"/><g id="x"></g></svg>', 1,
    )


def test_mapping_counts_matched_tags_even_when_unchanged():
    svg = '<g id="a" style="visibility:hidden"/><g id="b"/>'
    outcome = apply_rename_mapping(svg, "g", ["a", "b"], {})
    assert outcome.matched == 2
    assert outcome.patched == 1
