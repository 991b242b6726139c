"""
tagsoup/types.py — typy danych skanera znaczników i łatek atrybutów.

TagOccurrence   — pojedyncze wystąpienie znacznika (open / close / self-closing)
BoundarySpan    — zakres (start, end) wnętrza jednego zlokalizowanego elementu
ChildDescriptor — bezpośrednie dziecko elementu: id, data-name, tekst tagu
Attribute       — jeden atrybut tagu otwierającego, z dosłownym tekstem źródła
StartTag        — tag otwierający rozbity na atrybuty; render() składa go z powrotem
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from html import escape


# ---------------------------------------------------------------------------
# Błędy
# ---------------------------------------------------------------------------

class TagSoupError(Exception):
    """Bazowy wyjątek pakietu tagsoup."""


class StructureNotFoundError(TagSoupError):
    """Element nie istnieje albo skan głębokości nie wrócił do 0 przed końcem tekstu."""


class MalformedSelectorError(TagSoupError, ValueError):
    """Wartość identyfikatora zawiera znaki, których nie da się bezpiecznie wyszukać."""


# ---------------------------------------------------------------------------
# Wystąpienia znaczników
# ---------------------------------------------------------------------------

class TagKind(StrEnum):
    OPEN         = "open"
    CLOSE        = "close"
    SELF_CLOSING = "self-closing"


@dataclass(frozen=True, slots=True)
class TagOccurrence:
    """
    Wystąpienie znacznika w tekście.

    - kind:  open / close / self-closing
    - name:  nazwa elementu tak, jak zapisano ją w tekście
    - start: offset znaku '<'
    - end:   offset tuż za znakiem '>'
    """
    kind:  TagKind
    name:  str
    start: int
    end:   int

    @property
    def self_closing(self) -> bool:
        return self.kind is TagKind.SELF_CLOSING

    @property
    def is_start(self) -> bool:
        """True dla tagów otwierających, także samozamykających."""
        return self.kind is not TagKind.CLOSE


@dataclass(frozen=True, slots=True)
class BoundarySpan:
    """Zakres wnętrza elementu. Ważny tylko do następnej mutacji dokumentu."""
    start: int
    end:   int

    def slice(self, text: str) -> str:
        return text[self.start:self.end]


@dataclass(frozen=True, slots=True)
class ChildDescriptor:
    """Bezpośrednie dziecko kontenera opcji."""
    id:           str
    display_name: str | None
    source:       str
    offset:       int


# ---------------------------------------------------------------------------
# Atrybuty
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class Attribute:
    """
    Atrybut tagu otwierającego.

    raw przechowuje dosłowny tekst źródła razem z poprzedzającymi białymi
    znakami; dopóki atrybut nie zostanie zmieniony, render() oddaje go bajt
    w bajt.
    """
    name:  str
    value: str | None
    raw:   str

    @classmethod
    def build(cls, name: str, value: str) -> Attribute:
        return cls(name=name, value=value, raw=f' {name}="{escape(value, quote=True)}"')


@dataclass(slots=True)
class StartTag:
    """Tag otwierający: nazwa, lista atrybutów i końcówka (białe znaki, opcjonalne '/')."""
    name:       str
    attributes: list[Attribute] = field(default_factory=list)
    tail:       str = ""

    @property
    def self_closing(self) -> bool:
        return self.tail.rstrip().endswith("/")

    def index(self, name: str) -> int | None:
        for i, attr in enumerate(self.attributes):
            if attr.name == name:
                return i
        return None

    def get(self, name: str) -> str | None:
        i = self.index(name)
        return None if i is None else self.attributes[i].value

    def has(self, name: str) -> bool:
        return self.index(name) is not None

    def set(self, name: str, value: str, at: int | None = None) -> None:
        """Ustawia wartość; nowy atrybut trafia na pozycję at albo na koniec listy."""
        i = self.index(name)
        if i is not None:
            self.attributes[i] = Attribute.build(name, value)
        elif at is None:
            self.attributes.append(Attribute.build(name, value))
        else:
            self.attributes.insert(at, Attribute.build(name, value))

    def remove(self, name: str) -> bool:
        i = self.index(name)
        if i is None:
            return False
        del self.attributes[i]
        return True

    def render(self) -> str:
        return f"<{self.name}{''.join(a.raw for a in self.attributes)}{self.tail}>"
