"""Translation-offset search between a model pose set and a space pose set.

For every model pose, each space pose with the same orientation/scale block
(within an absolute ``epsilon``) proposes the offset
``space.translation - model.translation``.  Offsets proposed by *every*
model pose are the consistent ones.

Offsets are compared on a grid of ``resolution``: components that round to
the same cell are the same offset; a component whose cell is not finite
is compared by its raw value.  ``resolution=None`` (or ``0``) compares
the raw float tuples exactly.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Union

import numpy as np
from loguru import logger

from .geometry import Pose, PoseSet

DEFAULT_EPSILON = 1e-4
DEFAULT_RESOLUTION = 1e-6

Offset = tuple[float, float, float]
OffsetKey = tuple[Union[int, float], Union[int, float], Union[int, float]]


@dataclass(frozen=True)
class OffsetCandidate:
    offset: Offset
    support: int = 1


CandidateMap = dict[OffsetKey, OffsetCandidate]


@dataclass(frozen=True)
class OffsetSearchResult:
    candidates: CandidateMap = field(default_factory=dict)
    processed: int = 0  # model poses folded in

    @property
    def offsets(self) -> list[Offset]:
        return [c.offset for c in self.candidates.values()]

    def __len__(self) -> int:
        return len(self.candidates)

    def __bool__(self) -> bool:
        return bool(self.candidates)


def offset_key(offset: Offset, resolution: float | None = DEFAULT_RESOLUTION) -> OffsetKey:
    if not resolution:
        return offset
    key = []
    for c in offset:
        cell = c / resolution
        # Cells that overflow (or NaN components) are keyed on the raw value.
        key.append(int(round(cell)) if math.isfinite(cell) else c)
    dx, dy, dz = key
    return dx, dy, dz


def blocks_match(a: Pose, b: Pose, epsilon: float = DEFAULT_EPSILON) -> bool:
    """True iff all nine block components differ by less than ``epsilon``."""
    return bool(np.all(np.abs(a.block - b.block) < epsilon))


def match_mask(pose: Pose, space: PoseSet, epsilon: float = DEFAULT_EPSILON) -> np.ndarray:
    """Vectorised :func:`blocks_match` of ``pose`` against every space pose -> (N,) bool."""
    if len(space) == 0:
        return np.zeros(0, dtype=bool)
    diff = np.abs(space.blocks() - pose.block[None, :, :])
    return np.all(diff < epsilon, axis=(1, 2))


def candidate_offsets(
    model_pose: Pose,
    space: PoseSet,
    epsilon: float = DEFAULT_EPSILON,
    resolution: float | None = DEFAULT_RESOLUTION,
) -> CandidateMap:
    mask = match_mask(model_pose, space, epsilon)
    if not mask.any():
        return {}

    deltas = space.translations()[mask] - model_pose.translation[None, :]
    out: CandidateMap = {}
    for d in deltas.tolist():
        offset: Offset = (float(d[0]), float(d[1]), float(d[2]))
        key = offset_key(offset, resolution)
        if key not in out:
            out[key] = OffsetCandidate(offset=offset)
    return out


def _intersect(acc: CandidateMap, current: CandidateMap) -> CandidateMap:
    # Survivors keep the accumulator's representative offset.
    return {
        key: OffsetCandidate(offset=cand.offset, support=cand.support + 1)
        for key, cand in acc.items()
        if key in current
    }


def find_common_offsets(
    model: PoseSet,
    space: PoseSet,
    epsilon: float = DEFAULT_EPSILON,
    resolution: float | None = DEFAULT_RESOLUTION,
) -> OffsetSearchResult:
    """Offsets consistent with every model pose.

    Folds the per-pose candidate maps by intersection in model order and
    stops scanning as soon as nothing survives.  Ties are all returned.
    """
    if len(model) == 0 or len(space) == 0:
        logger.debug(f"empty input (model={len(model)}, space={len(space)}): no offsets")
        return OffsetSearchResult()

    acc = candidate_offsets(model[0], space, epsilon, resolution)
    processed = 1
    logger.debug(f"model[0]: {len(acc)} candidate offset(s)")

    for i in range(1, len(model)):
        if not acc:
            break
        acc = _intersect(acc, candidate_offsets(model[i], space, epsilon, resolution))
        processed += 1
        logger.debug(f"model[{i}]: {len(acc)} offset(s) survive")

    if not acc and processed < len(model):
        logger.debug(f"no consistent offset; stopped after {processed}/{len(model)} model poses")

    return OffsetSearchResult(candidates=acc, processed=processed)
