"""Komenda: fpo options — listowanie opcji rzutu piętra bez zmian w pliku."""

from __future__ import annotations

import argparse
import pathlib

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from floorplan import find_options, load_config

console = Console(width=160)


def run(args: argparse.Namespace) -> None:
    cfg = load_config()
    path = pathlib.Path(args.input)
    try:
        svg = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        console.print(f"[red]Błąd odczytu:[/red] {escape(str(e))}")
        raise SystemExit(1)

    children = find_options(svg, cfg, console)
    if children is None:
        return
    if not children:
        console.print("[yellow]Kontener opcji nie ma bezpośrednich dzieci.[/yellow]")
        return

    table = Table(
        box=box.SIMPLE_HEAD,
        show_header=True,
        header_style="bold white",
        row_styles=["", "dim"],
        expand=False,
    )
    table.add_column("#",         justify="right", style="dim")
    table.add_column("ID",        style="bold cyan", no_wrap=True)
    table.add_column("DATA-NAME", no_wrap=True)
    table.add_column("TAG",       no_wrap=False, max_width=80)

    for i, child in enumerate(children, start=1):
        name_txt = Text(child.display_name) if child.display_name else Text("—", style="dim")
        table.add_row(str(i), Text(child.id), name_txt, Text(child.source, style="dim"))

    console.print()
    console.print(table)
    console.print(f"[dim]Opcji: {len(children)}[/dim]")


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "options",
        help="Listuje bezpośrednie dzieci kontenera opcji (bez zmian w pliku).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Pokazuje dzieci pierwszego poziomu elementu <g id="options"> — te same,
o które pyta "fpo optimize". Plik nie jest modyfikowany.

Przykłady:
  fpo options plan.svg
        """,
    )
    p.add_argument("input", metavar="PLIK", help="Plik SVG.")
    p.set_defaults(func=run)
