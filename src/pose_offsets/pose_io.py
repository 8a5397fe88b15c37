from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable

from loguru import logger

from .geometry import RECORD_FIELDS, Pose, PoseSet
from .offsets import Offset


class PoseSourceUnavailable(FileNotFoundError):
    """A pose document is missing or cannot be read."""


def pose_set_from_records(records: object) -> PoseSet:
    """Parse a list of ``m00..m33`` records into a :class:`PoseSet`."""

    if records is None:
        return PoseSet()
    if not isinstance(records, list):
        raise ValueError(f"Expected a list of matrix records, got {type(records).__name__}")

    poses: list[Pose] = []
    for i, rec in enumerate(records):
        if not isinstance(rec, dict):
            raise ValueError(f"Record {i}: expected an object, got {type(rec).__name__}")
        missing = [k for k in RECORD_FIELDS if k not in rec]
        if missing:
            raise ValueError(f"Record {i}: missing field(s) {', '.join(missing)}")
        try:
            poses.append(Pose.from_record(rec))
        except (TypeError, ValueError) as e:
            raise ValueError(f"Record {i}: non-numeric matrix field ({e})") from e
    return PoseSet(tuple(poses))


def load_pose_set(path: str | Path, *, missing_ok: bool = False) -> PoseSet:
    """Load a JSON pose document -> PoseSet.

    A missing file raises :class:`PoseSourceUnavailable`, or yields an empty
    set when ``missing_ok`` is true.
    """

    path = Path(path)
    if not path.exists():
        if missing_ok:
            logger.error(f"Pose file not found, using an empty set: {path}")
            return PoseSet()
        raise PoseSourceUnavailable(f"Pose file not found: {path}")

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise PoseSourceUnavailable(f"Cannot read pose file {path}: {e}") from e

    pose_set = pose_set_from_records(raw)
    logger.info(f"Loaded {len(pose_set)} matrices from {path.name}")
    return pose_set


def write_pose_set_json(pose_set: PoseSet, out_path: Path) -> Path:
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(json.dumps([p.to_record() for p in pose_set], indent=2), encoding="utf-8")
    return out_path


def write_offsets_json(offsets: Iterable[Offset], out_path: Path) -> Path:
    """Write offsets as a JSON list of ``{"x", "y", "z"}`` objects."""

    out_path = Path(out_path)
    result = [{"x": float(dx), "y": float(dy), "z": float(dz)} for dx, dy, dz in offsets]
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(json.dumps(result, indent=2), encoding="utf-8")
    logger.info(f"Exported {len(result)} offset(s): {out_path}")
    return out_path


def load_offsets_json(path: Path) -> list[Offset]:
    raw = json.loads(Path(path).read_text(encoding="utf-8"))
    return [(float(o["x"]), float(o["y"]), float(o["z"])) for o in raw]
