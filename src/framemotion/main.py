"""
Command-line entry point for framemotion.

Commands:
    inspect   Print the synthesized motion model as JSON
    sample    Print the evaluated nodes of a transition at a time as JSON
    render    Paint a transition at a time into a PNG file
    preview   Play a transition in a pygame window
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from framemotion import __version__
from framemotion.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def setup_logging(debug: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )

    # Reduce noise from per-node paint logging
    if not debug:
        logging.getLogger("framemotion.graphics").setLevel(logging.WARNING)


def _node_summary(node) -> Dict[str, Any]:
    from framemotion.scene.properties import MOTION_PROPERTIES, motion_value

    summary: Dict[str, Any] = {
        "id": node.id,
        "name": node.name,
        "type": node.type.value,
        "zIndex": node.z_index,
    }
    for prop in MOTION_PROPERTIES:
        value = motion_value(node, prop)
        if value is not None:
            summary[prop.value] = round(value, 4)
    return summary


def _load(path: str):
    """Load a scene and synthesize its motion model."""
    from framemotion.motion.builder import build_motion_model
    from framemotion.scene.loader import load_scene_file

    scene = load_scene_file(path)
    motion = build_motion_model(scene)
    logger.debug(
        f"Loaded {path}: {len(scene.frames)} frames, "
        f"{len(motion.transitions)} transitions, {motion.track_count} tracks"
    )
    return scene, motion


def _asset_cache(settings: Settings, scene_path: str):
    from framemotion.graphics.assets import AssetCache

    base_path = settings.assets_path or Path(scene_path).resolve().parent
    return AssetCache(max_workers=settings.asset_workers, base_path=base_path)


def _require_transition(motion, transition_id: str) -> None:
    from framemotion.scene.loader import SceneError

    if motion.get(transition_id) is None:
        known = ", ".join(t.id for t in motion.transitions) or "none"
        raise SceneError(f"Unknown transition {transition_id!r} (known: {known})")


def cmd_inspect(args: argparse.Namespace, settings: Settings) -> int:
    _, motion = _load(args.scene)
    if args.transition:
        _require_transition(motion, args.transition)
        data = motion.get(args.transition).to_dict()
    else:
        data = motion.to_dict()
    print(json.dumps(data, indent=2))
    return 0


def cmd_sample(args: argparse.Namespace, settings: Settings) -> int:
    from framemotion.motion.evaluator import evaluate_transition

    scene, motion = _load(args.scene)
    _require_transition(motion, args.transition)
    nodes = evaluate_transition(scene, motion, args.transition, args.time_ms)
    payload = {
        "transition": args.transition,
        "time": args.time_ms,
        "nodes": [_node_summary(node) for node in nodes],
    }
    print(json.dumps(payload, indent=2))
    return 0


def cmd_render(args: argparse.Namespace, settings: Settings) -> int:
    from framemotion.graphics.painter import paint_nodes
    from framemotion.graphics.surface import ImageSurface
    from framemotion.motion.evaluator import evaluate_transition

    scene, motion = _load(args.scene)
    _require_transition(motion, args.transition)
    transition = motion.get(args.transition)
    frame = scene.frame(transition.from_frame_id)
    if frame is None:
        logger.error(f"Transition {args.transition!r} has no source frame")
        return 1

    assets = _asset_cache(settings, args.scene)
    try:
        nodes = evaluate_transition(scene, motion, args.transition, args.time_ms)
        # Bitmaps load in the background; request them all first
        for node in nodes:
            src = getattr(node, "src", None)
            if src:
                assets.preload(src)

        surface = ImageSurface(frame.width, frame.height)
        painted = paint_nodes(surface, nodes, frame.background, assets)
        surface.image.save(args.output)
    finally:
        assets.shutdown()

    logger.info(f"Rendered {painted} nodes at {args.time_ms:.0f}ms to {args.output}")
    return 0


def cmd_preview(args: argparse.Namespace, settings: Settings) -> int:
    from framemotion.simulator.preview import PreviewConfig, PreviewWindow

    scene, motion = _load(args.scene)
    _require_transition(motion, args.transition)

    config = PreviewConfig(
        width=settings.preview.width,
        height=settings.preview.height,
        scale=settings.preview.scale,
        title=settings.preview.title,
        fps=settings.fps,
        bg_color=settings.preview.background,
    )
    speed = settings.speed if args.speed is None else max(0.0, args.speed)
    assets = _asset_cache(settings, args.scene)
    window = PreviewWindow(
        scene,
        motion,
        args.transition,
        config=config,
        loop=args.loop or settings.loop,
        speed=speed,
        assets=assets,
    )
    try:
        asyncio.run(window.run())
    finally:
        assets.shutdown()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="framemotion",
        description="Synthesize and play animations between scene frames.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    inspect = commands.add_parser("inspect", help="Print the motion model as JSON")
    inspect.add_argument("scene", help="Scene file (.json, .yaml)")
    inspect.add_argument("--transition", help="Only print this transition")
    inspect.set_defaults(handler=cmd_inspect)

    sample = commands.add_parser("sample", help="Print evaluated nodes at a time")
    sample.add_argument("scene", help="Scene file (.json, .yaml)")
    sample.add_argument("transition", help="Transition id")
    sample.add_argument("time_ms", type=float, help="Milliseconds since the transition started")
    sample.set_defaults(handler=cmd_sample)

    render = commands.add_parser("render", help="Paint a transition at a time to PNG")
    render.add_argument("scene", help="Scene file (.json, .yaml)")
    render.add_argument("transition", help="Transition id")
    render.add_argument("time_ms", type=float, help="Milliseconds since the transition started")
    render.add_argument("-o", "--output", default="frame.png", help="Output image path")
    render.set_defaults(handler=cmd_render)

    preview = commands.add_parser("preview", help="Play a transition in a window")
    preview.add_argument("scene", help="Scene file (.json, .yaml)")
    preview.add_argument("transition", help="Transition id")
    preview.add_argument("--loop", action="store_true", help="Loop playback")
    preview.add_argument("--speed", type=float, default=None, help="Playback speed multiplier")
    preview.set_defaults(handler=cmd_preview)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    from dotenv import load_dotenv

    from framemotion.scene.loader import SceneError

    # Load environment variables
    load_dotenv()

    args = build_parser().parse_args(argv)
    settings = get_settings()
    setup_logging(args.debug or settings.debug)

    try:
        return args.handler(args, settings)
    except SceneError as e:
        logger.error(f"Invalid scene: {e}")
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
