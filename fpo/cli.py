"""
fpo — narzędzie CLI do przygotowania rzutów pięter SVG.

Użycie:
  fpo <komenda> [opcje]
  fpo               (bez argumentów: sesja interaktywna)
  fpo -i            (to samo; z inną komendą niż shell to błąd)

Komendy:
  optimize     Przekształca jeden plik SVG (id → class, nazwy opcji, czyszczenie).
  shell        Sesja interaktywna dla wielu plików.
  options      Listuje opcje rzutu piętra bez zmian w pliku.
"""

from __future__ import annotations

import argparse
import sys

# Windows: terminal może używać cp1252, więc wymuszamy UTF-8 (polskie znaki
# i ramki).
if hasattr(sys.stdout, "reconfigure"):
    sys.stdout.reconfigure(encoding="utf-8", errors="replace")
if hasattr(sys.stderr, "reconfigure"):
    sys.stderr.reconfigure(encoding="utf-8", errors="replace")

from fpo.commands import optimize as cmd_optimize
from fpo.commands import shell as cmd_shell
from fpo.commands import options as cmd_options


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fpo",
        description="Floorplan SVG Optimiser — narzędzie CLI.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", action="version", version="fpo 0.1.0"
    )
    parser.add_argument(
        "-i", "--interactive",
        action="store_true",
        help="Uruchom sesję interaktywną (jak 'fpo shell').",
    )

    subparsers = parser.add_subparsers(
        title="komendy",
        metavar="<komenda>",
        dest="command",
    )

    cmd_optimize.add_parser(subparsers)
    cmd_shell.add_parser(subparsers)
    cmd_options.add_parser(subparsers)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.interactive and args.command not in (None, "shell"):
        parser.error(f"-i/--interactive nie łączy się z komendą '{args.command}'")
    if args.command is None:
        cmd_shell.run(args)
        return
    args.func(args)


if __name__ == "__main__":
    main()
