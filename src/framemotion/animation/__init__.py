"""Animation module for framemotion.

The playback driver lives in :mod:`framemotion.animation.player`; it is
not re-exported here because it depends on the motion and graphics
packages, which themselves use the easing functions below.
"""

from framemotion.animation.easing import (
    Easing,
    DEFAULT_EASING,
    get_easing,
    resolve_easing,
    interpolate,
    list_easings,
)
from framemotion.animation.scheduler import Scheduler, AsyncioScheduler, ManualScheduler

__all__ = [
    # Easing
    "Easing",
    "DEFAULT_EASING",
    "get_easing",
    "resolve_easing",
    "interpolate",
    "list_easings",
    # Scheduling
    "Scheduler",
    "AsyncioScheduler",
    "ManualScheduler",
]
