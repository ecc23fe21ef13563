"""Parallel mean (box) filter for RGB images, split into row bands."""
from __future__ import annotations

from .bands import Band, partition_rows
from .box_filter import box_filter, filter_band, neighborhood_average
from .errors import (
    ConfigurationError,
    FilterCancelled,
    FilterStateError,
    ImageIOError,
    MeanFilterError,
    WorkerError,
)
from .parallel import FilterState, MeanFilterJob, apply_filter
from .utils import Color, RGBImage, blank_image, to_rgb_list

__all__ = [
    "Band",
    "Color",
    "ConfigurationError",
    "FilterCancelled",
    "FilterState",
    "FilterStateError",
    "ImageIOError",
    "MeanFilterError",
    "MeanFilterJob",
    "RGBImage",
    "WorkerError",
    "apply_filter",
    "blank_image",
    "box_filter",
    "filter_band",
    "neighborhood_average",
    "partition_rows",
    "to_rgb_list",
]
