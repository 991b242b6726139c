"""
tagsoup — edycja surowego znacznikowania bez parsera drzewa.

Interfejs publiczny:
    scan_tags, parse_start_tag          — skaner znaczników i tokenizer atrybutów
    extract_span, strip_elements        — granice elementu licznikiem głębokości
    enumerate_children                  — bezpośrednie dzieci elementu
    merge_class, merge_style, ...       — idempotentne łatki atrybutów

Typowe użycie:
    from tagsoup import extract_span, enumerate_children

    span     = extract_span(svg, "g", "id", "options")
    children = enumerate_children(svg, span, "g")
    for child in children:
        print(child.id, child.display_name)
"""

from .types import (
    Attribute,
    BoundarySpan,
    ChildDescriptor,
    MalformedSelectorError,
    StartTag,
    StructureNotFoundError,
    TagKind,
    TagOccurrence,
    TagSoupError,
)
from .scanner import find_tag_end, parse_start_tag, scan_tags
from .boundary import extract_span, find_matching_close, find_start_tag, strip_elements
from .children import enumerate_children
from .patcher import (
    HIDDEN,
    RenameOutcome,
    apply_rename_mapping,
    check_selector,
    merge_class,
    merge_style,
    reclassify_by_substring,
    rename_tag,
    rename_with_dependents,
    rewrite_start_tags,
    strip_data_attributes,
)

__all__ = [
    "Attribute",
    "BoundarySpan",
    "ChildDescriptor",
    "MalformedSelectorError",
    "StartTag",
    "StructureNotFoundError",
    "TagKind",
    "TagOccurrence",
    "TagSoupError",
    "find_tag_end",
    "parse_start_tag",
    "scan_tags",
    "extract_span",
    "find_matching_close",
    "find_start_tag",
    "strip_elements",
    "enumerate_children",
    "HIDDEN",
    "RenameOutcome",
    "apply_rename_mapping",
    "check_selector",
    "merge_class",
    "merge_style",
    "reclassify_by_substring",
    "rename_tag",
    "rename_with_dependents",
    "rewrite_start_tags",
    "strip_data_attributes",
]
