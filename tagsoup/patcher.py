"""
tagsoup/patcher.py — idempotentne łatki atrybutów na tagach otwierających.

Każda łatka działa na StartTag i zwraca True gdy coś zmieniła. Atrybuty,
których łatka nie dotyczy, zostają w tekście dosłownie (łącznie z
cudzysłowami i białymi znakami).

Operacje na tagu:
  merge_class(tag, token, drop)                   -> bool
  merge_style(tag, prop, value)                   -> bool
  rename_tag(tag, new_name, ...)                  -> bool

Operacje na dokumencie:
  rewrite_start_tags(text, name, fn)              -> (str, int)
  reclassify_by_substring(text, name, substring, token)
  rename_with_dependents(text, name, old_id, new_name)
  apply_rename_mapping(text, name, ids, mapping)  -> RenameOutcome
  strip_data_attributes(text, keep)               -> (str, int)
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field

from .scanner import parse_start_tag, scan_tags
from .types import MalformedSelectorError, StartTag

# Znaki, które psują wyszukiwanie elementu po wartości identyfikatora.
_SELECTOR_UNSAFE = set("\"'\\<>")

HIDDEN = ("visibility", "hidden")


# ---------------------------------------------------------------------------
# Łatki pojedynczego tagu
# ---------------------------------------------------------------------------

def merge_class(tag: StartTag, token: str, drop: str | None = "id") -> bool:
    """
    Dopisuje token do atrybutu class (tylko gdy nie ma go jako całego tokenu)
    albo tworzy class na miejscu atrybutu drop. Atrybut drop jest usuwany.
    """
    changed = False
    current = tag.get("class")
    if current is None:
        at = tag.index(drop) if drop else None
        tag.set("class", token, at=at)
        changed = True
    elif token not in current.split():
        tag.set("class", f"{current.rstrip()} {token}" if current.strip() else token)
        changed = True

    if drop and tag.remove(drop):
        changed = True
    return changed


def _style_properties(style: str) -> set[str]:
    props: set[str] = set()
    for part in style.split(";"):
        if ":" in part:
            props.add(part.split(":", 1)[0].strip().lower())
    return props


def merge_style(tag: StartTag, prop: str, value: str) -> bool:
    """
    Dopisuje deklarację prop:value do style. Istniejąca deklaracja prop nie
    jest nadpisywana.
    """
    current = tag.get("style")
    if current is None:
        tag.set("style", f"{prop}:{value}")
        return True
    if prop.lower() in _style_properties(current):
        return False
    base = current.rstrip().rstrip(";")
    tag.set("style", f"{base};{prop}:{value}" if base else f"{prop}:{value}")
    return True


def rename_tag(
    tag: StartTag,
    new_name: str | None,
    id_attr: str = "id",
    display_attr: str = "data-name",
    hidden: tuple[str, str] = HIDDEN,
) -> bool:
    """
    Zmienia id (i data-name) na new_name, gdy podano nową nazwę; zawsze
    dokłada deklarację ukrywającą element.
    """
    changed = False
    if new_name is not None:
        if tag.get(id_attr) != new_name:
            tag.set(id_attr, new_name)
            changed = True
        if tag.get(display_attr) != new_name:
            tag.set(display_attr, new_name)
            changed = True
    if merge_style(tag, *hidden):
        changed = True
    return changed


def check_selector(value: str) -> str:
    """Zwraca value albo rzuca MalformedSelectorError dla niebezpiecznych znaków."""
    bad = sorted(_SELECTOR_UNSAFE.intersection(value))
    if bad:
        raise MalformedSelectorError(
            f"Identyfikator {value!r} zawiera niedozwolone znaki: {' '.join(bad)}"
        )
    return value


# ---------------------------------------------------------------------------
# Łatki dokumentu
# ---------------------------------------------------------------------------

def rewrite_start_tags(
    text: str,
    name: str | None,
    fn: Callable[[StartTag], bool],
) -> tuple[str, int]:
    """
    Przepuszcza każdy tag otwierający elementu name (None = dowolny) przez fn.
    Tagi, dla których fn zwróci True, są składane na nowo z render().
    Zwraca (nowy tekst, liczba zmienionych tagów).
    """
    parts: list[str] = []
    changed = 0
    pos = 0
    for occ in scan_tags(text, name):
        if not occ.is_start:
            continue
        tag = parse_start_tag(text[occ.start:occ.end])
        if not fn(tag):
            continue
        parts.append(text[pos:occ.start])
        parts.append(tag.render())
        pos = occ.end
        changed += 1

    if not changed:
        return text, 0
    parts.append(text[pos:])
    return "".join(parts), changed


def reclassify_by_substring(
    text: str,
    name: str,
    substring: str,
    token: str,
    id_attr: str = "id",
) -> tuple[str, int]:
    """
    Każdy element name, którego id zawiera substring (bez rozróżniania
    wielkości liter), dostaje token w class i traci id.
    """
    needle = substring.lower()

    def patch(tag: StartTag) -> bool:
        value = tag.get(id_attr)
        if value is None or needle not in value.lower():
            return False
        return merge_class(tag, token, drop=id_attr)

    return rewrite_start_tags(text, name, patch)


def rename_with_dependents(
    text: str,
    name: str,
    old_id: str,
    new_name: str | None,
    id_attr: str = "id",
    display_attr: str = "data-name",
    hidden: tuple[str, str] = HIDDEN,
) -> tuple[str, int]:
    """
    Zmienia nazwę wszystkich elementów z id == old_id i ukrywa je.
    Rzuca MalformedSelectorError gdy old_id zawiera niebezpieczne znaki.
    """
    check_selector(old_id)

    def patch(tag: StartTag) -> bool:
        if tag.get(id_attr) != old_id:
            return False
        return rename_tag(tag, new_name, id_attr, display_attr, hidden)

    return rewrite_start_tags(text, name, patch)


@dataclass(slots=True)
class RenameOutcome:
    """
    Wynik zastosowania mapowania nazw.

    - matched: liczba tagów docelowych (przetworzonych), także bez zmian w tekście
    - patched: liczba tagów, których tekst się zmienił
    """
    text:    str
    matched: int = 0
    patched: int = 0
    skipped: list[str] = field(default_factory=list)


def apply_rename_mapping(
    text: str,
    name: str,
    ids: Iterable[str],
    mapping: Mapping[str, str],
    id_attr: str = "id",
    display_attr: str = "data-name",
    hidden: tuple[str, str] = HIDDEN,
) -> RenameOutcome:
    """
    Stosuje rename_with_dependents dla wszystkich ids w jednym przebiegu.

    Nowa nazwa jednego elementu nigdy nie jest dopasowywana jako stare id
    innego. Identyfikatory z niebezpiecznymi znakami trafiają do skipped
    i nie są dotykane.
    """
    outcome = RenameOutcome(text=text)
    targets: set[str] = set()
    for old_id in ids:
        try:
            targets.add(check_selector(old_id))
        except MalformedSelectorError:
            outcome.skipped.append(old_id)

    if not targets:
        return outcome

    def patch(tag: StartTag) -> bool:
        old_id = tag.get(id_attr)
        if old_id not in targets:
            return False
        outcome.matched += 1
        return rename_tag(tag, mapping.get(old_id), id_attr, display_attr, hidden)

    outcome.text, outcome.patched = rewrite_start_tags(text, name, patch)
    return outcome


def strip_data_attributes(text: str, keep: Iterable[str] = ("data-name",)) -> tuple[str, int]:
    """Usuwa atrybuty data-* ze wszystkich tagów, poza wymienionymi w keep."""
    kept = {k.lower() for k in keep}
    removed = 0

    def patch(tag: StartTag) -> bool:
        nonlocal removed
        before = len(tag.attributes)
        tag.attributes = [
            a for a in tag.attributes
            if not a.name.lower().startswith("data-") or a.name.lower() in kept
        ]
        removed += before - len(tag.attributes)
        return len(tag.attributes) != before

    text, _ = rewrite_start_tags(text, None, patch)
    return text, removed
