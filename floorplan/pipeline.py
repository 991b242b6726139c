"""
floorplan/pipeline.py — przekształcenie dokumentu rzutu piętra.

Etapy (liniowo, bez powrotów; każdy skanuje aktualny tekst od nowa):
  1. id zawierające "furniture" → class="furniture", id usunięte
  2. id zawierające "label"     → class="labels",    id usunięte
  3. lokalizacja kontenera id="options" i jego bezpośrednich dzieci
  4. negocjacja nowych nazw (tylko gdy są dzieci)
  5. zmiana nazw + visibility:hidden dla każdego dziecka
  6. usunięcie elementów title i desc razem z treścią
  7. usunięcie atrybutów data-* poza data-name

Brak kontenera opcji lub niedomknięty kontener pomija etapy 4–5.
ChannelClosedError z etapu 4 przerywa cały potok; wynik nie powstaje.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from rich.console import Console
from rich.markup import escape

from tagsoup import (
    ChildDescriptor,
    StructureNotFoundError,
    apply_rename_mapping,
    enumerate_children,
    extract_span,
    reclassify_by_substring,
    strip_data_attributes,
    strip_elements,
)

from .config import PipelineConfig
from .negotiator import Channel, ConsoleChannel, RenameMapping, negotiate_renames

console = Console(stderr=True)


@dataclass(slots=True)
class TransformResult:
    """
    Wynik potoku.

    - text:            przekształcony dokument
    - reclassified:    token class → liczba przeklasyfikowanych elementów
    - options_found:   liczba bezpośrednich dzieci kontenera opcji
    - options_processed: liczba tagów opcji objętych zmianą nazwy / ukryciem
    - options_changed:   ile z nich faktycznie zmieniło tekst
    - renames:         zastosowane mapowanie nazw
    - skipped:         id dzieci pominięte z powodu niebezpiecznych znaków
    - stripped:        nazwa elementu → liczba usuniętych elementów
    - data_attrs_removed: liczba usuniętych atrybutów data-*
    """
    text:               str
    reclassified:       dict[str, int] = field(default_factory=dict)
    options_found:      int = 0
    options_processed:  int = 0
    options_changed:    int = 0
    renames:            RenameMapping = field(default_factory=dict)
    skipped:            list[str] = field(default_factory=list)
    stripped:           dict[str, int] = field(default_factory=dict)
    data_attrs_removed: int = 0


def find_options(
    svg: str,
    cfg: PipelineConfig,
    out: Console | None = None,
) -> list[ChildDescriptor] | None:
    """
    Bezpośrednie dzieci kontenera opcji albo None, gdy kontenera nie ma
    (lub nie jest domknięty).
    """
    out = out or console
    try:
        span = extract_span(svg, cfg.element, cfg.id_attr, cfg.options_id)
    except StructureNotFoundError as e:
        out.print(f"[yellow]✓ Pomijam zmianę nazw opcji: {escape(str(e))}[/yellow]")
        return None
    return enumerate_children(svg, span, cfg.element, cfg.id_attr, cfg.display_attr)


def transform(
    svg: str,
    channel: Channel | None = None,
    cfg: PipelineConfig | None = None,
    out: Console | None = None,
) -> TransformResult:
    """
    Uruchamia wszystkie etapy na tekście svg i zwraca TransformResult.

    channel: wspólny kanał sesji interaktywnej; None = negocjator otworzy
             prywatny kanał na czas pytań.
    out:     konsola na narrację (domyślnie stderr).
    """
    cfg = cfg or PipelineConfig()
    out = out or console
    result = TransformResult(text=svg)

    # --- etapy 1–2: id → class ---
    for rule in cfg.reclass_rules:
        out.print(f"Zamiana id zawierających [bold]{rule.substring}[/bold] na klasę...")
        result.text, n = reclassify_by_substring(
            result.text, cfg.element, rule.substring, rule.token, cfg.id_attr,
        )
        result.reclassified[rule.token] = n
        out.print(f"  [green]class=\"{rule.token}\": {n}[/green]")

    # --- etap 3: kontener opcji ---
    children = find_options(result.text, cfg, out)
    if children is not None:
        result.options_found = len(children)
        if not children:
            out.print("[yellow]✓ Kontener opcji nie ma bezpośrednich dzieci do zmiany nazwy.[/yellow]")
        else:
            # --- etap 4: negocjacja ---
            result.renames = negotiate_renames(
                children,
                channel,
                factory=lambda: ConsoleChannel(out),
            )

            # --- etap 5: zmiana nazw + ukrycie ---
            out.print("\nNakładam zmiany na opcje...")
            outcome = apply_rename_mapping(
                result.text,
                cfg.element,
                [c.id for c in children],
                result.renames,
                cfg.id_attr,
                cfg.display_attr,
                cfg.hidden,
            )
            result.text = outcome.text
            result.options_processed = outcome.matched
            result.options_changed = outcome.patched
            result.skipped = outcome.skipped
            for bad in outcome.skipped:
                out.print(
                    f"[yellow]Uwaga: pomijam opcję o niebezpiecznym id {escape(repr(bad))}[/yellow]"
                )
            out.print(
                f"  [green]opcje przetworzone: {outcome.matched}"
                f" (zmienione: {outcome.patched}, zmiany nazw: {len(result.renames)})[/green]"
            )

    # --- etap 6: title / desc ---
    for name in cfg.strip_elements:
        result.text, n = strip_elements(result.text, name)
        result.stripped[name] = n
    out.print(
        "Usunięte elementy: "
        + ", ".join(f"{name}={n}" for name, n in result.stripped.items())
    )

    # --- etap 7: atrybuty data-* ---
    result.text, result.data_attrs_removed = strip_data_attributes(
        result.text, cfg.keep_data_attrs,
    )
    out.print(f"Usunięte atrybuty data-*: {result.data_attrs_removed}")

    return result
