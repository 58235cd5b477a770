"""Graphics module for painting evaluated transitions."""

from framemotion.graphics.surface import Surface, ImageSurface
from framemotion.graphics.painter import paint_nodes, paint_node, parse_color
from framemotion.graphics.assets import AssetCache
from framemotion.graphics.paths import flatten_path

__all__ = [
    # Surfaces
    "Surface",
    "ImageSurface",
    # Painting
    "paint_nodes",
    "paint_node",
    "parse_color",
    # Assets
    "AssetCache",
    "flatten_path",
]
