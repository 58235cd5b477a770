"""Flatten SVG path data into polygons for raster painting."""

from functools import lru_cache
import logging

from svgpathtools import Line, parse_path

logger = logging.getLogger(__name__)

Point = tuple[float, float]

# Samples per curved segment
CURVE_SAMPLES = 16


@lru_cache(maxsize=256)
def flatten_path(path_data: str, samples: int = CURVE_SAMPLES) -> tuple[tuple[Point, ...], ...]:
    """Convert SVG path data into one point list per continuous subpath.

    Straight segments contribute their endpoints; curves and arcs are
    sampled ``samples`` times. Unparseable data yields no subpaths.
    """
    if not path_data or not path_data.strip():
        return ()

    try:
        path = parse_path(path_data)
        subpaths = path.continuous_subpaths()
    except Exception as e:
        # svgpathtools raises bare Exception/ValueError/IndexError on bad data
        logger.debug(f"Cannot parse path data {path_data[:40]!r}: {e}")
        return ()

    polylines = []
    for subpath in subpaths:
        if len(subpath) == 0:
            continue
        points: list[Point] = [(subpath[0].start.real, subpath[0].start.imag)]
        for segment in subpath:
            if isinstance(segment, Line):
                points.append((segment.end.real, segment.end.imag))
                continue
            for i in range(1, samples + 1):
                p = segment.point(i / samples)
                points.append((p.real, p.imag))
        polylines.append(tuple(points))
    return tuple(polylines)


def path_bounds(polylines: tuple[tuple[Point, ...], ...]) -> tuple[float, float, float, float] | None:
    """Bounding box (min_x, min_y, max_x, max_y) of flattened subpaths."""
    xs = [p[0] for poly in polylines for p in poly]
    ys = [p[1] for poly in polylines for p in poly]
    if not xs:
        return None
    return (min(xs), min(ys), max(xs), max(ys))
