"""Pytest configuration and shared fixtures.

The package lives under ./src; put it on sys.path so the suite also runs
from a plain checkout without an editable install.
"""

from __future__ import annotations

import sys
from pathlib import Path

import numpy as np
import pytest

_SRC = Path(__file__).resolve().parents[1] / "src"
if str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))

from pose_offsets.geometry import Pose, PoseSet  # noqa: E402


def _rotmat_z(angle_rad: float) -> np.ndarray:
    c, s = float(np.cos(angle_rad)), float(np.sin(angle_rad))
    return np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]], dtype=np.float64)


@pytest.fixture
def rotmat_z():
    """Rotation block about z for a given angle in radians."""
    return _rotmat_z


@pytest.fixture
def rotated_block() -> np.ndarray:
    """A block that matches no identity-oriented pose."""
    return _rotmat_z(np.pi / 2)


@pytest.fixture
def grid_model() -> PoseSet:
    """Four identity-oriented model poses on a small grid."""
    return PoseSet(
        (
            Pose.from_translation((0.0, 0.0, 0.0)),
            Pose.from_translation((1.0, 0.0, 0.0)),
            Pose.from_translation((0.0, 1.0, 0.0)),
            Pose.from_translation((0.0, 0.0, 1.0)),
        )
    )


@pytest.fixture
def grid_space(grid_model: PoseSet) -> PoseSet:
    """``grid_model`` shifted by (10, -2, 0.5) plus two distractors."""
    shift = np.array([10.0, -2.0, 0.5])
    shifted = [Pose.from_translation(p.translation + shift) for p in grid_model]
    distractors = [
        Pose.from_translation((3.0, 3.0, 3.0)),
        Pose.from_translation((10.0, -2.0, 0.5), block=_rotmat_z(0.3)),
    ]
    return PoseSet(tuple(shifted + distractors))
