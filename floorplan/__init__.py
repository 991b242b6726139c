"""
floorplan — przygotowanie rzutów pięter SVG do publikacji.

Publiczne API:
  transform(svg, channel, cfg, out)        -> TransformResult
  find_options(svg, cfg, out)              -> list[ChildDescriptor] | None
  negotiate_renames(children, channel)     -> RenameMapping
  load_config()                            -> PipelineConfig
  ConsoleChannel, ScriptedChannel, ChannelClosedError
"""

from .config import PipelineConfig, ReclassRule, load_config
from .negotiator import (
    Channel,
    ChannelClosedError,
    ConsoleChannel,
    RenameMapping,
    ScriptedChannel,
    negotiate_renames,
    session_channel,
)
from .pipeline import TransformResult, find_options, transform

__all__ = [
    "PipelineConfig",
    "ReclassRule",
    "load_config",
    "Channel",
    "ChannelClosedError",
    "ConsoleChannel",
    "RenameMapping",
    "ScriptedChannel",
    "negotiate_renames",
    "session_channel",
    "TransformResult",
    "find_options",
    "transform",
]
