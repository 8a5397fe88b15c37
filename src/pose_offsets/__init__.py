"""Find the translation offsets that map a model pose set onto a space pose set."""

from .geometry import Pose, PoseSet
from .offsets import (
    DEFAULT_EPSILON,
    DEFAULT_RESOLUTION,
    OffsetCandidate,
    OffsetSearchResult,
    blocks_match,
    candidate_offsets,
    find_common_offsets,
)
from .pose_io import PoseSourceUnavailable, load_pose_set, write_offsets_json

__all__ = [
    "DEFAULT_EPSILON",
    "DEFAULT_RESOLUTION",
    "OffsetCandidate",
    "OffsetSearchResult",
    "Pose",
    "PoseSet",
    "PoseSourceUnavailable",
    "blocks_match",
    "candidate_offsets",
    "find_common_offsets",
    "load_pose_set",
    "write_offsets_json",
]
