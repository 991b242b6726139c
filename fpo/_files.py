"""Odczyt, zapis i raport rozmiaru plików SVG — wspólne dla komend fpo."""

from __future__ import annotations

import pathlib

from rich.console import Console
from rich.markup import escape

from floorplan import Channel, PipelineConfig, TransformResult, transform


def default_output(input_path: str | pathlib.Path, suffix: str = "-web") -> pathlib.Path:
    """plan.svg → plan-web.svg w tym samym katalogu."""
    path = pathlib.Path(input_path)
    return path.with_name(f"{path.stem}{suffix}{path.suffix}")


def size_reduction(original: int, optimized: int) -> str:
    """Procent zmniejszenia z dwoma miejscami po przecinku (ujemny gdy plik urósł)."""
    if original == 0:
        return "0.00"
    return f"{(original - optimized) / original * 100:.2f}"


def process_file(
    input_path: str | pathlib.Path,
    output_path: str | pathlib.Path | None,
    channel: Channel | None,
    cfg: PipelineConfig,
    out: Console,
) -> TransformResult:
    """
    Czyta plik, uruchamia potok i zapisuje wynik.

    Rzuca FileNotFoundError gdy nie ma pliku wejściowego. ChannelClosedError
    z negocjacji przechodzi dalej i plik wyjściowy nie powstaje.
    """
    src = pathlib.Path(input_path)
    if not src.is_file():
        raise FileNotFoundError(f'Plik wejściowy "{src}" nie istnieje')
    dst = pathlib.Path(output_path) if output_path else default_output(src, cfg.output_suffix)

    svg = src.read_text(encoding="utf-8")
    out.print("Przekształcam rzut piętra...")
    result = transform(svg, channel, cfg, out)

    dst.write_text(result.text, encoding="utf-8")
    original  = len(svg.encode("utf-8"))
    optimized = len(result.text.encode("utf-8"))
    out.print(f"\n[green]Zapisano wynik do: [bold]{escape(str(dst))}[/bold][/green]")
    out.print(f"Rozmiar oryginalny: {original} B")
    out.print(f"Rozmiar po zmianach: {optimized} B")
    out.print(f"Zmniejszenie: {size_reduction(original, optimized)}%")
    return result
