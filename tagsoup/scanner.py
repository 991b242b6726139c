"""
tagsoup/scanner.py — liniowy skaner znaczników bez parsera drzewa.

Skaner szuka w surowym tekście wystąpień elementu o podanej nazwie (lub
dowolnego elementu, gdy name=None) i klasyfikuje je jako open / close /
self-closing. Wartości atrybutów nie są interpretowane; jedyne co skaner
respektuje przy szukaniu końca tagu to cudzysłowy, więc '>' i '/' wewnątrz
wartości nie zamykają tagu.

Komentarze, sekcje CDATA, instrukcje przetwarzania i deklaracje są
przeskakiwane w całości.

Ucięty tekst (brak '>' zamykającego tag) kończy skan po cichu.

Publiczne API:
  scan_tags(text, name, start, end)   -> Iterator[TagOccurrence]
  find_tag_end(text, pos)             -> int | None
  parse_start_tag(source)             -> StartTag
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from html import unescape

from .types import Attribute, StartTag, TagKind, TagOccurrence

# ---------------------------------------------------------------------------
# Stałe
# ---------------------------------------------------------------------------

# Początek tagu albo konstrukcja, którą trzeba przeskoczyć w całości.
_MARKUP_RE = re.compile(
    r"<!--.*?-->"
    r"|<!\[CDATA\[.*?\]\]>"
    r"|<\?.*?\?>"
    r"|<!.*?>"
    r"|<(/?)([A-Za-z_][\w:.-]*)",
    re.DOTALL,
)

# Białe znaki dopuszczalne wewnątrz tagu.
_SPACE = " \t\r\n\f"

# Znaki kończące nazwę atrybutu.
_NAME_STOP = _SPACE + "=/>"


# ---------------------------------------------------------------------------
# Publiczne API
# ---------------------------------------------------------------------------

def find_tag_end(text: str, pos: int) -> int | None:
    """
    Zwraca offset tuż za '>' zamykającym tag zaczynający się przed pos.
    Cudzysłowy ' i " są respektowane. None gdy tekst urywa się w środku tagu.
    """
    quote: str | None = None
    for i in range(pos, len(text)):
        ch = text[i]
        if quote:
            if ch == quote:
                quote = None
        elif ch in "\"'":
            quote = ch
        elif ch == ">":
            return i + 1
    return None


def scan_tags(
    text: str,
    name: str | None = None,
    start: int = 0,
    end: int | None = None,
) -> Iterator[TagOccurrence]:
    """
    Generuje wystąpienia znaczników w kolejności dokumentu.

    name:  nazwa elementu (np. "g"); None = dowolny element
    start: offset od którego zaczyna się skan
    end:   offset, przed którym musi zaczynać się zgłoszony tag
           (domyślnie koniec tekstu)
    """
    limit = len(text) if end is None else end
    pos = start
    while pos < limit:
        m = _MARKUP_RE.search(text, pos, limit)
        if m is None:
            return
        tag_name = m.group(2)
        if tag_name is None:
            # komentarz / CDATA / deklaracja
            pos = m.end()
            continue
        tag_end = find_tag_end(text, m.end())
        if tag_end is None:
            return
        pos = tag_end
        if name is not None and tag_name != name:
            continue
        if m.group(1):
            kind = TagKind.CLOSE
        elif text[m.end():tag_end - 1].rstrip(_SPACE).endswith("/"):
            kind = TagKind.SELF_CLOSING
        else:
            kind = TagKind.OPEN
        yield TagOccurrence(kind=kind, name=tag_name, start=m.start(), end=tag_end)


def parse_start_tag(source: str) -> StartTag:
    """
    Rozbija tekst tagu otwierającego (od '<' do '>') na nazwę i atrybuty.

    Tokenizacja jest jawna, bez wyrażeń regularnych na wartościach; wartości
    w cudzysłowach mogą zawierać '>' i '/'. Każdy atrybut zachowuje dosłowny
    tekst źródła (razem z wiodącymi białymi znakami) w polu raw.
    """
    if not source.startswith("<") or not source.endswith(">"):
        raise ValueError(f"To nie jest tag: {source[:40]!r}")

    body = source[1:-1]
    i = 0
    n = len(body)
    while i < n and body[i] not in _SPACE and body[i] != "/":
        i += 1
    tag = StartTag(name=body[:i])

    while i < n:
        token_start = i
        while i < n and body[i] in _SPACE:
            i += 1
        # Samotne '/' (np. przed '>'): wszystko od token_start to końcówka,
        # chyba że za nim jeszcze coś stoi (wtedy traktujemy je jak separator).
        if i < n and body[i] == "/":
            rest = body[i + 1:]
            if not rest.strip(_SPACE):
                tag.tail = body[token_start:]
                return tag
            i += 1
            continue
        if i >= n:
            tag.tail = body[token_start:]
            return tag

        name_start = i
        while i < n and body[i] not in _NAME_STOP:
            i += 1
        attr_name = body[name_start:i]

        # opcjonalne "= wartość"
        j = i
        while j < n and body[j] in _SPACE:
            j += 1
        value: str | None = None
        if j < n and body[j] == "=":
            j += 1
            while j < n and body[j] in _SPACE:
                j += 1
            if j < n and body[j] in "\"'":
                quote = body[j]
                close = body.find(quote, j + 1)
                if close == -1:
                    close = n
                value = body[j + 1:close]
                i = min(close + 1, n)
            else:
                v_start = j
                while j < n and body[j] not in _SPACE and body[j] != ">":
                    j += 1
                # '/' na końcu ostatniej wartości zamyka tag, tak jak w scan_tags
                if j > v_start and body[j - 1] == "/" and not body[j:].strip(_SPACE):
                    j -= 1
                value = body[v_start:j]
                i = j
        elif i == name_start:
            # śmieciowy znak bez nazwy, zachowany dosłownie
            i += 1
        tag.attributes.append(
            Attribute(
                name=attr_name,
                value=None if value is None else unescape(value),
                raw=body[token_start:i],
            )
        )

    return tag
