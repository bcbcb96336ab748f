"""Public API for Multibrot rendering utilities."""

from .collector import collect
from .config import ConfigError, dump_config, load_config
from .escape import BOUNDED, Bounded, Diverged, EscapeResult, diverges_within, escape_iteration, in_main_cardioid
from .generator import points, sample_points, samples
from .imaging import launch_viewer, read_png, viewer_command, write_png
from .palette import INTERIOR_COLOR, ONE_THIRD, PaletteConfig
from .renderer import RenderConfig, RenderResult, render, render_frame
from .view import InvalidGeometryError, View, make_view
from .workers import PixelResult, WorkerPool, partition_rows, run_worker

__all__ = [
    "BOUNDED",
    "Bounded",
    "ConfigError",
    "Diverged",
    "EscapeResult",
    "INTERIOR_COLOR",
    "InvalidGeometryError",
    "ONE_THIRD",
    "PaletteConfig",
    "PixelResult",
    "RenderConfig",
    "RenderResult",
    "View",
    "WorkerPool",
    "collect",
    "diverges_within",
    "dump_config",
    "escape_iteration",
    "in_main_cardioid",
    "launch_viewer",
    "load_config",
    "make_view",
    "partition_rows",
    "points",
    "read_png",
    "render",
    "render_frame",
    "run_worker",
    "sample_points",
    "samples",
    "viewer_command",
    "write_png",
]
