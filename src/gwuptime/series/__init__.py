"""Timeline reconstruction and the views derived from it."""

from gwuptime.series.aggregate import aggregate, format_duration, outages, recent_transitions
from gwuptime.series.raster import rasterize, render_slots
from gwuptime.series.reconstruct import Reconstruction, SeriesReconstructor, build_intervals, decode_timeline

__all__ = [
    "Reconstruction",
    "SeriesReconstructor",
    "aggregate",
    "build_intervals",
    "decode_timeline",
    "format_duration",
    "outages",
    "rasterize",
    "recent_transitions",
    "render_slots",
]
