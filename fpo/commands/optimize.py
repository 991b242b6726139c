"""Komenda: fpo optimize — jednorazowe przekształcenie pliku SVG."""

from __future__ import annotations

import argparse

from rich.console import Console
from rich.markup import escape

from floorplan import ChannelClosedError, load_config
from fpo._files import process_file

console = Console(stderr=True)


def run(args: argparse.Namespace) -> None:
    cfg = load_config()
    try:
        # channel=None: negocjator otworzy i zamknie własny kanał
        process_file(args.input, args.output, None, cfg, console)
    except FileNotFoundError as e:
        console.print(f"[red]Błąd:[/red] {escape(str(e))}")
        raise SystemExit(1)
    except ChannelClosedError as e:
        console.print(f"[red]Przerwano negocjację nazw:[/red] {escape(str(e))}. Plik nie został zapisany.")
        raise SystemExit(1)
    except (OSError, UnicodeDecodeError) as e:
        console.print(f"[red]Błąd przetwarzania pliku:[/red] {escape(str(e))}")
        raise SystemExit(1)


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "optimize",
        help="Przekształca jeden plik SVG (z pytaniami o nazwy opcji).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Przekształca rzut piętra SVG:
  - id zawierające "furniture" / "label" → class="furniture" / class="labels"
  - dzieci <g id="options"> dostają nowe nazwy (pytanie per opcja)
    i style="visibility:hidden"
  - usuwa <title>, <desc> i atrybuty data-* (poza data-name)

Bez pliku wyjściowego wynik trafia obok wejścia z sufiksem -web
(zmienna FLOORPLAN_OUTPUT_SUFFIX).

Przykłady:
  fpo optimize plan.svg
  fpo optimize plan.svg plan-public.svg
        """,
    )
    p.add_argument("input", metavar="WEJŚCIE", help="Plik SVG do przekształcenia.")
    p.add_argument(
        "output",
        metavar="WYJŚCIE",
        nargs="?",
        default=None,
        help="Plik wynikowy (domyślnie: <nazwa>-web.svg).",
    )
    p.set_defaults(func=run)
