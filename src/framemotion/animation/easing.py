"""Easing functions for transition tracks.

All functions take a normalized time t (0.0 to 1.0) and return a normalized
value. Spring, bounce and overshoot may leave the [0, 1] range.
"""

from enum import Enum
from typing import Callable
import logging
import math

logger = logging.getLogger(__name__)


class Easing(str, Enum):
    """Available easing presets, valued by their scene names."""

    LINEAR = "linear"
    EASE = "ease"
    EASE_IN = "ease-in"
    EASE_OUT = "ease-out"
    SPRING = "spring"
    BOUNCE = "bounce"
    OVERSHOOT = "overshoot"


# Type alias for easing functions
EasingFunc = Callable[[float], float]

DEFAULT_EASING = Easing.EASE


def linear(t: float) -> float:
    """Linear interpolation (no easing)."""
    return t


def ease_in_quad(t: float) -> float:
    """Accelerate from zero velocity."""
    return t * t


def ease_out_quad(t: float) -> float:
    """Decelerate to zero velocity."""
    return 1 - (1 - t) * (1 - t)


def ease_in_out_quad(t: float) -> float:
    """Accelerate then decelerate."""
    if t < 0.5:
        return 2 * t * t
    return 1 - pow(-2 * t + 2, 2) / 2


def spring(t: float) -> float:
    """Decaying oscillation that settles near 1."""
    return 1 - math.cos(t * math.pi * 4) * math.exp(-t * 6)


def ease_out_bounce(t: float) -> float:
    """Decelerate with bounce effect."""
    n1 = 7.5625
    d1 = 2.75

    if t < 1 / d1:
        return n1 * t * t
    elif t < 2 / d1:
        t -= 1.5 / d1
        return n1 * t * t + 0.75
    elif t < 2.5 / d1:
        t -= 2.25 / d1
        return n1 * t * t + 0.9375
    else:
        t -= 2.625 / d1
        return n1 * t * t + 0.984375


def ease_out_back(t: float) -> float:
    """Decelerate with slight overshoot."""
    c1 = 1.70158
    c3 = c1 + 1
    return 1 + c3 * pow(t - 1, 3) + c1 * pow(t - 1, 2)


# Mapping from enum to function
_EASING_FUNCTIONS: dict[Easing, EasingFunc] = {
    Easing.LINEAR: linear,
    Easing.EASE: ease_in_out_quad,
    Easing.EASE_IN: ease_in_quad,
    Easing.EASE_OUT: ease_out_quad,
    Easing.SPRING: spring,
    Easing.BOUNCE: ease_out_bounce,
    Easing.OVERSHOOT: ease_out_back,
}


def resolve_easing(easing: Easing | str | None) -> Easing:
    """Resolve an easing name to a preset, falling back to ``ease``.

    Unknown names are a configuration error that is recovered here;
    this never raises.
    """
    if isinstance(easing, Easing):
        return easing
    if isinstance(easing, str):
        try:
            return Easing(easing.strip().lower())
        except ValueError:
            pass
    logger.debug(f"Unknown easing {easing!r}, using {DEFAULT_EASING.value}")
    return DEFAULT_EASING


def get_easing(easing: Easing | str | None) -> EasingFunc:
    """Get an easing function by enum or name.

    Args:
        easing: Easing enum value or scene name (e.g., "ease-out")

    Returns:
        The easing function; ``ease`` for unrecognized names
    """
    return _EASING_FUNCTIONS[resolve_easing(easing)]


def interpolate(start: float, end: float, t: float, easing: Easing | str = Easing.LINEAR) -> float:
    """Interpolate between two values using an easing function.

    Args:
        start: Starting value
        end: Ending value
        t: Progress, clamped to 0.0..1.0
        easing: Easing function to use

    Returns:
        Interpolated value
    """
    easing_func = get_easing(easing)
    eased_t = easing_func(max(0.0, min(1.0, t)))
    return start + (end - start) * eased_t


def list_easings() -> list[str]:
    """Get the scene names of every easing preset."""
    return [easing.value for easing in Easing]
