"""
floorplan/config.py — konfiguracja potoku przez zmienne środowiskowe.

Zmienne środowiskowe (opcjonalnie plik .env w katalogu głównym projektu):
  FLOORPLAN_ELEMENT         rodzaj elementu skanowanego przez rdzeń (domyślnie: g)
  FLOORPLAN_OPTIONS_ID      id kontenera opcji (domyślnie: options)
  FLOORPLAN_OUTPUT_SUFFIX   sufiks domyślnej nazwy pliku wyjściowego (domyślnie: -web)
"""

from __future__ import annotations

import os
import pathlib
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv(pathlib.Path(__file__).resolve().parent.parent / ".env")


@dataclass(frozen=True, slots=True)
class ReclassRule:
    """Element, którego id zawiera substring, dostaje token w class."""
    substring: str
    token:     str


@dataclass(frozen=True, slots=True)
class PipelineConfig:
    element:        str = "g"
    id_attr:        str = "id"
    display_attr:   str = "data-name"
    options_id:     str = "options"
    reclass_rules:  tuple[ReclassRule, ...] = (
        ReclassRule("furniture", "furniture"),
        ReclassRule("label",     "labels"),
    )
    hidden:         tuple[str, str] = ("visibility", "hidden")
    strip_elements: tuple[str, ...] = ("title", "desc")
    keep_data_attrs: tuple[str, ...] = ("data-name",)
    output_suffix:  str = "-web"


def load_config() -> PipelineConfig:
    return PipelineConfig(
        element       = os.getenv("FLOORPLAN_ELEMENT",       "g"),
        options_id    = os.getenv("FLOORPLAN_OPTIONS_ID",    "options"),
        output_suffix = os.getenv("FLOORPLAN_OUTPUT_SUFFIX", "-web"),
    )
