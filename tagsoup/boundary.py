"""
tagsoup/boundary.py — wyznaczanie granic elementu licznikiem głębokości.

Dokument nie jest parsowany do drzewa. Wnętrze elementu wyznacza liniowy
skan: licznik startuje od 1 tuż za tagiem otwierającym, każdy otwierający
(nie samozamykający) tag tego samego rodzaju go zwiększa, każdy zamykający
zmniejsza. Powrót do 0 wyznacza koniec wnętrza.

Publiczne API:
  find_start_tag(text, name, attr, value)   -> TagOccurrence | None
  find_matching_close(text, name, pos)      -> TagOccurrence | None
  extract_span(text, name, attr, value)     -> BoundarySpan
  strip_elements(text, name)                -> (str, int)
"""

from __future__ import annotations

from .scanner import parse_start_tag, scan_tags
from .types import BoundarySpan, StructureNotFoundError, TagKind, TagOccurrence


def find_start_tag(
    text: str,
    name: str,
    attr: str,
    value: str,
) -> TagOccurrence | None:
    """Pierwszy tag otwierający elementu name z atrybutem attr == value."""
    for occ in scan_tags(text, name):
        if not occ.is_start:
            continue
        if parse_start_tag(text[occ.start:occ.end]).get(attr) == value:
            return occ
    return None


def find_matching_close(text: str, name: str, pos: int) -> TagOccurrence | None:
    """
    Szuka tagu zamykającego dla elementu, którego wnętrze zaczyna się w pos.
    None gdy głębokość nie wraca do 0 przed końcem tekstu.
    """
    depth = 1
    for occ in scan_tags(text, name, pos):
        if occ.kind is TagKind.OPEN:
            depth += 1
        elif occ.kind is TagKind.CLOSE:
            depth -= 1
            if depth == 0:
                return occ
    return None


def extract_span(text: str, name: str, attr: str, value: str) -> BoundarySpan:
    """
    Zwraca zakres wnętrza pierwszego elementu name z attr == value.

    Samozamykający element ma puste wnętrze (start == end).
    Rzuca StructureNotFoundError gdy elementu nie ma albo nie jest domknięty.
    """
    opening = find_start_tag(text, name, attr, value)
    if opening is None:
        raise StructureNotFoundError(f'Brak elementu <{name} {attr}="{value}">')
    if opening.self_closing:
        return BoundarySpan(opening.end, opening.end)

    closing = find_matching_close(text, name, opening.end)
    if closing is None:
        raise StructureNotFoundError(
            f'Element <{name} {attr}="{value}"> nie jest domknięty przed końcem dokumentu'
        )
    return BoundarySpan(opening.end, closing.start)


def strip_elements(text: str, name: str) -> tuple[str, int]:
    """
    Usuwa wszystkie elementy name razem z zawartością.

    Niedomknięty element zostaje w tekście (skan się na nim kończy).
    Zwraca (nowy tekst, liczba usuniętych elementów).
    """
    parts: list[str] = []
    removed = 0
    pos = 0
    while True:
        opening = next((o for o in scan_tags(text, name, pos) if o.is_start), None)
        if opening is None:
            break
        if opening.self_closing:
            stop = opening.end
        else:
            closing = find_matching_close(text, name, opening.end)
            if closing is None:
                break
            stop = closing.end
        parts.append(text[pos:opening.start])
        pos = stop
        removed += 1

    parts.append(text[pos:])
    return "".join(parts), removed
