"""
Drawing surfaces for painted transitions.

A surface is an accumulating 2D canvas: painting composites layers
on top of what is already there until the surface is cleared.
"""

from abc import ABC, abstractmethod
from typing import Optional

import numpy as np
from numpy.typing import NDArray
from PIL import Image

Color = tuple[int, int, int, int]


class Surface(ABC):
    """Abstract base class for raster targets."""

    @property
    @abstractmethod
    def width(self) -> int:
        """Surface width in pixels."""
        ...

    @property
    @abstractmethod
    def height(self) -> int:
        """Surface height in pixels."""
        ...

    @abstractmethod
    def clear(self, color: Optional[Color] = None) -> None:
        """Reset every pixel to ``color`` (transparent when None)."""
        ...

    @abstractmethod
    def composite(self, layer: Image.Image) -> None:
        """
        Alpha-composite a full-size RGBA layer over the surface.

        Args:
            layer: RGBA image of the surface's size
        """
        ...

    @abstractmethod
    def get_buffer(self) -> NDArray[np.uint8]:
        """Get copy of the RGB contents, shape (height, width, 3)."""
        ...

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)


class ImageSurface(Surface):
    """
    Surface backed by a Pillow RGBA image.

    Uses an in-memory image so headless rendering and tests can read
    back exact pixels.
    """

    def __init__(self, width: int, height: int) -> None:
        self._width = max(1, int(width))
        self._height = max(1, int(height))
        self._image = Image.new("RGBA", (self._width, self._height), (0, 0, 0, 0))

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def image(self) -> Image.Image:
        """The backing image (live, not a copy)."""
        return self._image

    def clear(self, color: Optional[Color] = None) -> None:
        self._image.paste(color or (0, 0, 0, 0), (0, 0, self._width, self._height))

    def composite(self, layer: Image.Image) -> None:
        if layer.size != self._image.size:
            resized = Image.new("RGBA", self._image.size, (0, 0, 0, 0))
            resized.paste(layer, (0, 0))
            layer = resized
        self._image.alpha_composite(layer)

    def get_buffer(self) -> NDArray[np.uint8]:
        return np.array(self._image.convert("RGB"), dtype=np.uint8)

    def get_pixel(self, x: int, y: int) -> Color:
        """RGBA value of one pixel."""
        return self._image.getpixel((x, y))
