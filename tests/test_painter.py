"""Raster painting of evaluated nodes."""

import base64
import io

import numpy as np
import pytest
from PIL import Image

from framemotion.graphics.assets import AssetCache
from framemotion.graphics.painter import (
    node_matrix,
    paint_node,
    paint_nodes,
    parse_color,
    rounded_rect_points,
)
from framemotion.graphics.paths import flatten_path, path_bounds
from framemotion.graphics.surface import ImageSurface
from framemotion.scene import (
    EllipseNode,
    GroupNode,
    ImageNode,
    LineNode,
    MeshNode,
    PathNode,
    RectNode,
    TextNode,
)

RED = (255, 0, 0, 255)
CLEAR = (0, 0, 0, 0)


def red_rect(**kwargs):
    kwargs.setdefault("width", 40)
    kwargs.setdefault("height", 40)
    return RectNode(id="r", name="R", fill="#ff0000", **kwargs)


@pytest.fixture
def surface():
    return ImageSurface(100, 100)


def png_data_uri(color=(0, 0, 255, 255), size=(4, 4)):
    buffer = io.BytesIO()
    Image.new("RGBA", size, color).save(buffer, format="PNG")
    return "data:image/png;base64," + base64.b64encode(buffer.getvalue()).decode("ascii")


# ---------------------------------------------------------------------------
# Colours and geometry helpers
# ---------------------------------------------------------------------------


class TestHelpers:

    def test_parse_hex(self):
        assert parse_color("#ff0000") == RED

    def test_parse_named_with_opacity(self):
        assert parse_color("blue", 0.5) == (0, 0, 255, 128)

    @pytest.mark.parametrize("value", [None, "", "none", "transparent", "not-a-colour"])
    def test_unpaintable_colours(self, value):
        assert parse_color(value) is None

    def test_identity_matrix(self):
        matrix = node_matrix(red_rect(x=10, y=20))
        point = matrix @ np.array([0, 0, 1])
        assert point[:2] == pytest.approx([10, 20])

    def test_rotation_about_center(self):
        node = red_rect(x=0, y=0, rotation=90)
        center = node_matrix(node) @ np.array([20, 20, 1])
        corner = node_matrix(node) @ np.array([0, 0, 1])
        assert center[:2] == pytest.approx([20, 20])
        assert corner[:2] == pytest.approx([40, 0])

    def test_rounded_rect_radii_are_clamped(self):
        points = rounded_rect_points(10, 20, (100, 0, 0, 0))
        xs = [p[0] for p in points]
        ys = [p[1] for p in points]
        assert min(xs) == pytest.approx(0)
        assert max(xs) == pytest.approx(10)
        assert min(ys) == pytest.approx(0)
        assert max(ys) == pytest.approx(20)

    def test_flatten_path(self):
        (polyline,) = flatten_path("M 0 0 L 10 0 L 10 10 Z")
        assert polyline[0] == (0, 0)
        assert (10, 10) in polyline
        assert path_bounds((polyline,)) == (0, 0, 10, 10)

    def test_flatten_curve_is_sampled(self):
        (polyline,) = flatten_path("M 0 0 Q 5 10 10 0", samples=8)
        assert len(polyline) == 9
        assert polyline[-1] == pytest.approx((10, 0))

    def test_flatten_bad_path(self):
        assert flatten_path("M 10") == ()
        assert flatten_path("") == ()


# ---------------------------------------------------------------------------
# Surfaces
# ---------------------------------------------------------------------------


class TestSurface:

    def test_starts_transparent(self, surface):
        assert surface.get_pixel(0, 0) == CLEAR

    def test_clear_with_colour(self, surface):
        surface.clear((1, 2, 3, 255))
        assert surface.get_pixel(50, 50) == (1, 2, 3, 255)

    def test_buffer_shape(self, surface):
        buffer = surface.get_buffer()
        assert buffer.shape == (100, 100, 3)
        assert buffer.dtype == np.uint8


# ---------------------------------------------------------------------------
# Painting
# ---------------------------------------------------------------------------


class TestPaintNodes:

    def test_background_and_rect(self, surface):
        painted = paint_nodes(surface, [red_rect(x=10, y=10)], "#00ff00")
        assert painted == 1
        assert surface.get_pixel(30, 30) == RED
        assert surface.get_pixel(80, 80) == (0, 255, 0, 255)

    def test_no_background_is_transparent(self, surface):
        paint_nodes(surface, [red_rect(x=10, y=10)], None)
        assert surface.get_pixel(80, 80) == CLEAR

    def test_clears_previous_paint(self, surface):
        paint_nodes(surface, [red_rect(x=0, y=0)])
        paint_nodes(surface, [])
        assert surface.get_pixel(20, 20) == CLEAR

    def test_hidden_and_transparent_nodes_skipped(self, surface):
        nodes = [red_rect(visible=False), red_rect(opacity=0.0)]
        assert paint_nodes(surface, nodes) == 0
        assert surface.get_pixel(20, 20) == CLEAR

    def test_later_nodes_paint_on_top(self, surface):
        blue = RectNode(id="b", name="B", x=0, y=0, width=40, height=40, fill="#0000ff")
        paint_nodes(surface, [red_rect(x=0, y=0), blue])
        assert surface.get_pixel(20, 20) == (0, 0, 255, 255)

    def test_opacity_scales_alpha(self, surface):
        paint_nodes(surface, [red_rect(x=0, y=0, opacity=0.5)])
        r, g, b, a = surface.get_pixel(20, 20)
        assert r == pytest.approx(255, abs=1)
        assert a == pytest.approx(127, abs=2)

    def test_fill_opacity(self, surface):
        paint_nodes(surface, [red_rect(x=0, y=0, fill_opacity=0.5)])
        assert surface.get_pixel(20, 20)[3] == pytest.approx(128, abs=2)

    def test_translation(self, surface):
        paint_nodes(surface, [red_rect(x=50, y=50)])
        assert surface.get_pixel(20, 20) == CLEAR
        assert surface.get_pixel(70, 70) == RED

    def test_scale_about_center(self, surface):
        # 40x40 at (30, 30) scaled by 2 covers 10..90
        paint_nodes(surface, [red_rect(x=30, y=30, scale_x=2, scale_y=2)])
        assert surface.get_pixel(15, 15) == RED
        assert surface.get_pixel(5, 5) == CLEAR

    def test_rotation(self, surface):
        # 80x10 bar rotated 90 degrees about its center (50, 50) becomes vertical
        bar = red_rect(x=10, y=45, width=80, height=10, rotation=90)
        paint_nodes(surface, [bar])
        assert surface.get_pixel(50, 15) == RED
        assert surface.get_pixel(15, 50) == CLEAR

    def test_zero_scale_paints_nothing(self, surface):
        assert paint_nodes(surface, [red_rect(scale_x=0)]) == 0

    def test_rounded_corners_cut(self, surface):
        paint_nodes(surface, [red_rect(x=10, y=10, width=60, height=60, corner_radius=20)])
        assert surface.get_pixel(11, 11) == CLEAR
        assert surface.get_pixel(40, 40) == RED

    def test_ellipse(self, surface):
        paint_nodes(surface, [EllipseNode(id="e", name="E", x=0, y=0, width=100, height=100, fill="#ff0000")])
        assert surface.get_pixel(50, 50) == RED
        assert surface.get_pixel(2, 2) == CLEAR

    def test_line(self, surface):
        line = LineNode(id="l", name="L", points=[0, 50, 100, 50], stroke="#ff0000", stroke_width=4)
        paint_nodes(surface, [line])
        assert surface.get_pixel(50, 50) == RED
        assert surface.get_pixel(50, 80) == CLEAR

    def test_path(self, surface):
        path = PathNode(id="p", name="P", path_data="M 10 10 L 90 10 L 90 90 L 10 90 Z", fill="#ff0000")
        paint_nodes(surface, [path])
        assert surface.get_pixel(50, 50) == RED

    def test_mesh(self, surface):
        mesh = MeshNode(
            id="m", name="M", fill="#ff0000",
            vertices=[0, 0, 100, 0, 0, 100], triangles=[0, 1, 2],
        )
        paint_nodes(surface, [mesh])
        assert surface.get_pixel(10, 10) == RED
        assert surface.get_pixel(90, 90) == CLEAR

    def test_text_paints_something(self, surface):
        text = TextNode(id="t", name="T", x=10, y=10, width=80, height=30,
                        text="Hello", font_size=24, fill="#000000")
        paint_nodes(surface, [text])
        alpha = np.array(surface.image.getchannel("A"))
        assert alpha.max() > 0

    def test_group_paints_nothing(self, surface):
        assert paint_node(surface, GroupNode(id="g", name="G", width=50, height=50, fill="#ff0000")) is False

    def test_blur_softens_edges(self, surface):
        paint_nodes(surface, [red_rect(x=30, y=30, blur_radius=4)])
        edge_alpha = surface.get_pixel(30, 50)[3]
        assert 0 < edge_alpha < 255

    def test_shadow_is_painted_below(self, surface):
        node = red_rect(x=10, y=10, shadow_color="#000000", shadow_offset_x=20, shadow_offset_y=20)
        paint_nodes(surface, [node])
        assert surface.get_pixel(60, 60) == (0, 0, 0, 255)
        assert surface.get_pixel(30, 30) == RED


# ---------------------------------------------------------------------------
# Image assets
# ---------------------------------------------------------------------------


class TestImages:

    def test_image_without_assets_is_skipped(self, surface):
        node = ImageNode(id="i", name="I", width=20, height=20, src=png_data_uri())
        paint_nodes(surface, [node])
        assert surface.get_pixel(10, 10) == CLEAR

    def test_first_request_loads_in_background(self, surface):
        assets = AssetCache()
        loaded = []
        assets.on_load(loaded.append)
        src = png_data_uri()
        node = ImageNode(id="i", name="I", width=20, height=20, src=src)
        try:
            paint_nodes(surface, [node], assets=assets)
            assets.wait(timeout=5)
            assert loaded == [src]
            paint_nodes(surface, [node], assets=assets)
            assert surface.get_pixel(10, 10) == (0, 0, 255, 255)
        finally:
            assets.shutdown()

    def test_file_source_relative_to_base_path(self, tmp_path):
        Image.new("RGBA", (2, 2), (0, 255, 0, 255)).save(tmp_path / "dot.png")
        assets = AssetCache(base_path=tmp_path)
        try:
            image = assets.preload("dot.png")
            assert image.size == (2, 2)
            assert image.getpixel((0, 0)) == (0, 255, 0, 255)
        finally:
            assets.shutdown()

    def test_failed_load_is_not_retried(self, tmp_path):
        assets = AssetCache(base_path=tmp_path)
        try:
            assert assets.preload("missing.png") is None
            assert assets.get("missing.png") is None
            assert assets.wait(timeout=1) is None
        finally:
            assets.shutdown()
