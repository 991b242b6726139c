"""tagsoup/children.py — bezpośrednie dzieci zlokalizowanego elementu."""

from __future__ import annotations

from .scanner import parse_start_tag, scan_tags
from .types import BoundarySpan, ChildDescriptor, TagKind


def enumerate_children(
    text: str,
    span: BoundarySpan,
    name: str,
    id_attr: str = "id",
    display_attr: str = "data-name",
) -> list[ChildDescriptor]:
    """
    Zbiera dzieci pierwszego poziomu wewnątrz span, w kolejności dokumentu.

    Dzieci bez atrybutu id_attr są pomijane (ale ich wnętrze nadal liczy się
    do głębokości). Potomkowie głębsi niż jeden poziom są niewidoczni.
    """
    children: list[ChildDescriptor] = []
    depth = 0
    for occ in scan_tags(text, name, span.start, span.end):
        if occ.kind is TagKind.CLOSE:
            depth -= 1
            continue
        if depth == 0:
            source = text[occ.start:occ.end]
            tag = parse_start_tag(source)
            child_id = tag.get(id_attr)
            if child_id:
                children.append(ChildDescriptor(
                    id=child_id,
                    display_name=tag.get(display_attr),
                    source=source,
                    offset=occ.start,
                ))
        if occ.kind is TagKind.OPEN:
            depth += 1
    return children
