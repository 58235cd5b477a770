"""Scene builders shared by the test modules."""

from framemotion.scene import Frame, RectNode, Scene, Transition


def rect(node_id, name=None, **kwargs):
    """Rect node with sensible defaults for tests."""
    kwargs.setdefault("width", 40.0)
    kwargs.setdefault("height", 40.0)
    return RectNode(id=node_id, name=name or node_id, **kwargs)


def two_frame_scene(from_nodes, to_nodes, **transition_kwargs):
    """Scene with frames A and B and a single transition "t1" from A to B."""
    transition_kwargs.setdefault("duration", 300.0)
    transition_kwargs.setdefault("delay", 0.0)
    transition_kwargs.setdefault("easing", "linear")
    return Scene(
        name="test",
        frames=[
            Frame(id="A", name="A", width=400, height=300, background="#ffffff", nodes=list(from_nodes)),
            Frame(id="B", name="B", width=400, height=300, background="#000000", nodes=list(to_nodes)),
        ],
        transitions=[Transition(id="t1", from_frame_id="A", to_frame_id="B", **transition_kwargs)],
        start_frame_id="A",
    )
