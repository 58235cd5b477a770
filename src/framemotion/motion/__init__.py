"""Motion synthesis and evaluation for framemotion."""

from framemotion.motion.model import MotionTrack, MotionTransition, MotionModel
from framemotion.motion.matcher import MatchKind, Pairing, match_nodes
from framemotion.motion.synthesizer import ENTER_OFFSET, TrackSynthesizer, synthesize_tracks
from framemotion.motion.builder import build_motion_model, build_motion_transition
from framemotion.motion.evaluator import evaluate_transition, sample_track, blend_frames

__all__ = [
    # Model
    "MotionTrack",
    "MotionTransition",
    "MotionModel",
    # Matching
    "MatchKind",
    "Pairing",
    "match_nodes",
    # Synthesis
    "ENTER_OFFSET",
    "TrackSynthesizer",
    "synthesize_tracks",
    "build_motion_model",
    "build_motion_transition",
    # Evaluation
    "evaluate_transition",
    "sample_track",
    "blend_frames",
]
