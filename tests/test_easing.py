"""Easing presets: endpoints, monotonicity and name resolution."""

import pytest

from framemotion.animation.easing import (
    DEFAULT_EASING,
    Easing,
    get_easing,
    interpolate,
    list_easings,
    resolve_easing,
)


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


class TestEndpoints:
    """Every preset maps 0 to 0; the settling presets end at 1."""

    @pytest.mark.parametrize("easing", list(Easing))
    def test_starts_at_zero(self, easing):
        assert get_easing(easing)(0.0) == pytest.approx(0.0)

    @pytest.mark.parametrize(
        "easing",
        [Easing.LINEAR, Easing.EASE, Easing.EASE_IN, Easing.EASE_OUT, Easing.BOUNCE, Easing.OVERSHOOT],
    )
    def test_ends_at_one(self, easing):
        assert get_easing(easing)(1.0) == pytest.approx(1.0)

    def test_spring_settles_near_one(self):
        """Spring is a decaying oscillation; it is close to, not exactly, 1."""
        assert get_easing(Easing.SPRING)(1.0) == pytest.approx(1.0, abs=0.01)

    def test_ease_midpoint(self):
        assert get_easing("ease")(0.5) == pytest.approx(0.5)


# ---------------------------------------------------------------------------
# Shape
# ---------------------------------------------------------------------------


class TestShape:
    """Curve shape properties."""

    @pytest.mark.parametrize("easing", ["linear", "ease-in", "ease-out", "ease"])
    def test_monotonic(self, easing):
        func = get_easing(easing)
        values = [func(i / 100) for i in range(101)]
        assert all(b >= a for a, b in zip(values, values[1:]))

    def test_ease_in_starts_slow(self):
        assert get_easing("ease-in")(0.25) < 0.25

    def test_ease_out_starts_fast(self):
        assert get_easing("ease-out")(0.25) > 0.25

    def test_overshoot_exceeds_one(self):
        func = get_easing(Easing.OVERSHOOT)
        assert max(func(i / 100) for i in range(101)) > 1.0

    def test_spring_oscillates(self):
        func = get_easing(Easing.SPRING)
        assert max(func(i / 100) for i in range(101)) > 1.0


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------


class TestResolution:
    """Names resolve to presets; unknown names fall back to ease."""

    def test_resolve_by_name(self):
        assert resolve_easing("ease-out") is Easing.EASE_OUT

    def test_resolve_is_case_insensitive(self):
        assert resolve_easing(" Bounce ") is Easing.BOUNCE

    def test_enum_passes_through(self):
        assert resolve_easing(Easing.SPRING) is Easing.SPRING

    @pytest.mark.parametrize("name", ["wobble", "", None, 42])
    def test_unknown_falls_back(self, name):
        assert resolve_easing(name) is DEFAULT_EASING
        assert get_easing(name)(0.5) == pytest.approx(0.5)

    def test_list_easings(self):
        names = list_easings()
        assert "linear" in names
        assert "overshoot" in names
        assert len(names) == len(Easing)


# ---------------------------------------------------------------------------
# Interpolation
# ---------------------------------------------------------------------------


class TestInterpolate:

    def test_linear_midpoint(self):
        assert interpolate(0, 200, 0.5) == pytest.approx(100)

    def test_progress_is_clamped(self):
        assert interpolate(10, 20, -1) == pytest.approx(10)
        assert interpolate(10, 20, 5) == pytest.approx(20)

    def test_named_easing(self):
        assert interpolate(0, 100, 0.5, "ease-in") == pytest.approx(25)
