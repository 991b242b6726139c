"""
floorplan/negotiator.py — interaktywne zbieranie nowych nazw opcji.

Protokół jest ściśle sekwencyjny: jedno pytanie na dziecko kontenera opcji,
w kolejności dokumentu. Pusta odpowiedź (lub same białe znaki) = bez zmian;
każda inna, po obcięciu białych znaków, staje się nową nazwą.

Kanał interakcji należy do wywołującego. Sesja interaktywna przekazuje
jeden wspólny kanał do każdego wywołania; bez kanału negocjator otwiera
własny i zamyka go po ostatnim pytaniu.

Publiczne API:
  Channel                                  — protokół kanału (say / ask / close)
  ConsoleChannel(console)                  — kanał na terminalu (rich)
  ScriptedChannel(responses)               — kanał z gotowymi odpowiedziami
  session_channel(shared)                  -> context manager z kanałem
  negotiate_renames(children, channel)     -> RenameMapping
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Sequence
from contextlib import contextmanager
from typing import Protocol

from rich.console import Console
from rich.markup import escape

from tagsoup import ChildDescriptor

# Klucz: oryginalne id dziecka; wartość: nowa nazwa. Brak klucza = bez zmian.
type RenameMapping = dict[str, str]

RULE   = "━" * 35
PROMPT = "Nowa nazwa (Enter = bez zmian): "


class ChannelClosedError(EOFError):
    """Źródło odpowiedzi zamknęło się w trakcie negocjacji."""


class Channel(Protocol):
    def say(self, message: str) -> None: ...
    def ask(self, prompt: str) -> str: ...
    def close(self) -> None: ...


# ---------------------------------------------------------------------------
# Kanały
# ---------------------------------------------------------------------------

class ConsoleChannel:
    """Kanał terminalowy: komunikaty i pytania idą przez jedną konsolę rich."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console(stderr=True)
        self.closed = False

    def say(self, message: str) -> None:
        self.console.print(message, highlight=False)

    def ask(self, prompt: str) -> str:
        if self.closed:
            raise ChannelClosedError("Kanał interakcji jest zamknięty")
        try:
            return self.console.input(prompt)
        except EOFError as e:
            self.closed = True
            raise ChannelClosedError("Wejście zamknięte w trakcie negocjacji nazw") from e

    def close(self) -> None:
        self.closed = True


class ScriptedChannel:
    """
    Kanał z listą gotowych odpowiedzi (testy, tryb wsadowy).

    transcript zbiera wszystkie komunikaty i pytania w kolejności.
    Po wyczerpaniu odpowiedzi ask() rzuca ChannelClosedError.
    """

    def __init__(self, responses: Iterable[str]) -> None:
        self._responses = list(responses)
        self.transcript: list[str] = []
        self.asked = 0
        self.closed = False

    def say(self, message: str) -> None:
        self.transcript.append(message)

    def ask(self, prompt: str) -> str:
        self.transcript.append(prompt)
        if self.closed or self.asked >= len(self._responses):
            raise ChannelClosedError("Brak kolejnej odpowiedzi")
        answer = self._responses[self.asked]
        self.asked += 1
        return answer

    def close(self) -> None:
        self.closed = True


@contextmanager
def session_channel(
    shared: Channel | None,
    factory: Callable[[], Channel] = ConsoleChannel,
) -> Iterator[Channel]:
    """Wspólny kanał przechodzi bez zmian; prywatny jest tworzony i zamykany."""
    if shared is not None:
        yield shared
        return
    channel = factory()
    try:
        yield channel
    finally:
        channel.close()


# ---------------------------------------------------------------------------
# Negocjacja
# ---------------------------------------------------------------------------

def negotiate_renames(
    children: Sequence[ChildDescriptor],
    channel: Channel | None = None,
    factory: Callable[[], Channel] = ConsoleChannel,
) -> RenameMapping:
    """
    Pyta o nową nazwę każdego dziecka po kolei i zwraca mapowanie.

    ChannelClosedError przerywa całą negocjację; częściowe mapowanie
    nie jest zwracane.
    """
    mapping: RenameMapping = {}
    if not children:
        return mapping

    total = len(children)
    with session_channel(channel, factory) as ch:
        ch.say(f"\n{RULE}")
        ch.say(f"Opcje do zmiany nazwy: {total}")
        ch.say(RULE)
        for i, child in enumerate(children, start=1):
            ch.say(f'\n[{i}/{total}] Obecne ID: "{escape(child.id)}"')
            answer = ch.ask(PROMPT).strip()
            if answer:
                mapping[child.id] = answer
                ch.say(f'[green]✓ Nowa nazwa: "{escape(answer)}"[/green]')
            else:
                ch.say(f'[dim]✓ Bez zmian: "{escape(child.id)}"[/dim]')
    return mapping
