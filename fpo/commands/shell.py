"""
Komenda: fpo shell — sesja interaktywna.

Cała sesja korzysta z jednego kanału konsoli: prompt powłoki, narracja
potoku i pytania o nazwy opcji przeplatają się na tym samym terminalu.
"""

from __future__ import annotations

import argparse

from rich.console import Console
from rich.markup import escape

from floorplan import Channel, ChannelClosedError, ConsoleChannel, PipelineConfig, load_config
from fpo._files import process_file

console = Console()

PROMPT = "\nfloorplan> "
RULE   = "━" * 35

HELP = """\
Komendy:
  <plik.svg>              przetwarza plik, wynik z domyślną nazwą
  <we.svg> <wy.svg>       przetwarza plik z własną nazwą wyniku
  help                    pokazuje tę pomoc
  exit / quit             kończy sesję"""


def split_command_line(line: str) -> list[str]:
    """
    Dzieli linię na argumenty.

    Cudzysłowy ' i " grupują spacje. Backslash escapuje tylko następującą
    spację lub cudzysłów; inne backslashe zostają dosłownie (ścieżki Windows).
    """
    args: list[str] = []
    current = ""
    quote: str | None = None
    i = 0
    while i < len(line):
        ch = line[i]
        if ch == "\\" and i + 1 < len(line) and line[i + 1] in " \"'":
            current += line[i + 1]
            i += 2
            continue
        if ch in "\"'":
            if quote is None:
                quote = ch
            elif ch == quote:
                quote = None
            else:
                current += ch
        elif ch == " " and quote is None:
            if current:
                args.append(current)
                current = ""
        else:
            current += ch
        i += 1
    if current:
        args.append(current)
    return args


def handle_line(line: str, channel: Channel, cfg: PipelineConfig, out: Console) -> bool:
    """
    Obsługuje jedną linię sesji. Zwraca False, gdy sesja ma się zakończyć.

    ChannelClosedError z negocjacji nazw przechodzi dalej: bez wejścia
    sesja i tak nie może trwać.
    """
    text = line.strip()
    if text in ("", "help"):
        out.print(f"\n{HELP}", highlight=False)
        return True
    if text in ("exit", "quit"):
        return False

    args = split_command_line(text)
    if not args:
        return True
    output = args[1] if len(args) > 1 else None

    try:
        process_file(args[0], output, channel, cfg, out)
    except FileNotFoundError as e:
        out.print(f"[red]Błąd:[/red] {escape(str(e))}")
    except (OSError, UnicodeDecodeError) as e:
        out.print(f"[red]Błąd przetwarzania pliku:[/red] {escape(str(e))}")
    return True


def run_session(channel: ConsoleChannel, cfg: PipelineConfig) -> None:
    out = channel.console
    out.print(RULE)
    out.print("[bold]Floorplan SVG Optimiser[/bold] — tryb interaktywny")
    out.print(RULE)
    out.print(HELP, highlight=False)
    out.print(RULE)

    try:
        while True:
            line = channel.ask(PROMPT)
            if not handle_line(line, channel, cfg, out):
                break
    except ChannelClosedError:
        pass  # koniec wejścia kończy sesję
    except KeyboardInterrupt:
        out.print()
    finally:
        channel.close()
        out.print("\nDo widzenia!")


def run(args: argparse.Namespace) -> None:
    run_session(ConsoleChannel(console), load_config())


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "shell",
        help="Sesja interaktywna: wiele plików, jeden terminal.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Uruchamia powłokę "floorplan>". Każda linia to ścieżka pliku wejściowego
i opcjonalnie wyjściowego; ścieżki ze spacjami w cudzysłowach albo ze
spacją poprzedzoną backslashem.

To samo robi "fpo" bez argumentów oraz "fpo -i".
        """,
    )
    p.set_defaults(func=run)
