"""Shared fixtures: small scenes built directly from the document types."""

import pytest

from framemotion.scene import AnimationMode, EllipseNode, StaggerConfig

from helpers import rect, two_frame_scene


@pytest.fixture
def box_scene():
    """Box moves from x=0 to x=200 over 300ms, linear."""
    return two_frame_scene(
        [rect("box", "Box", x=0, y=0, fill="#ff0000")],
        [rect("box", "Box", x=200, y=0, fill="#ff0000")],
    )


@pytest.fixture
def exit_scene():
    """Alpha exits; Beta is unchanged."""
    return two_frame_scene(
        [rect("alpha", "Alpha", x=10, y=20, z_index=0), rect("beta", "Beta", x=100, y=20, z_index=1)],
        [rect("beta", "Beta", x=100, y=20, z_index=1)],
    )


@pytest.fixture
def instant_exit_scene():
    return two_frame_scene(
        [rect("alpha", "Alpha", x=10, y=20, z_index=0), rect("beta", "Beta", x=100, y=20, z_index=1)],
        [rect("beta", "Beta", x=100, y=20, z_index=1)],
        animation=AnimationMode.INSTANT,
    )


@pytest.fixture
def stagger_scene():
    """Three nodes enter with an order stagger of 100ms."""
    return two_frame_scene(
        [],
        [
            rect("c", "C", x=0, y=0, z_index=2),
            rect("a", "A", x=0, y=0, z_index=0),
            EllipseNode(id="b", name="B", x=0, y=0, width=20, height=20, z_index=1),
        ],
        stagger=StaggerConfig(mode="order", amount=100),
    )


@pytest.fixture
def scene_document():
    """Scene in the camelCase document format."""
    return {
        "name": "Demo",
        "startFrameId": "f1",
        "frames": [
            {
                "id": "f1",
                "name": "Start",
                "width": 200,
                "height": 100,
                "background": "#102030",
                "nodes": [
                    {"id": "r1", "name": "Card", "type": "rect", "x": 10, "y": 10,
                     "width": 50, "height": 30, "fill": "#ff0000", "cornerRadius": 4, "zIndex": 0},
                    {"id": "l1", "name": "Rule", "type": "line", "points": [0, 0, 30, 40],
                     "stroke": "#00ff00", "strokeWidth": 2, "zIndex": 1},
                ],
            },
            {
                "id": "f2",
                "name": "End",
                "width": 200,
                "height": 100,
                "nodes": [
                    {"id": "r1", "name": "Card", "type": "rect", "x": 100, "y": 10,
                     "width": 50, "height": 30, "fill": "#ff0000", "cornerRadius": 12, "zIndex": 0},
                    {"id": "t1", "name": "Title", "type": "text", "text": "Hi", "fontSize": 12,
                     "x": 5, "y": 60, "zIndex": 2},
                ],
            },
        ],
        "transitions": [
            {
                "id": "go",
                "fromFrameId": "f1",
                "toFrameId": "f2",
                "duration": 400,
                "delay": 50,
                "easing": "ease-out",
                "animation": "auto",
                "overrides": [{"nodeId": "r1", "property": "x", "easing": "bounce"}],
                "stagger": {"mode": "order", "amount": 20},
            }
        ],
    }
