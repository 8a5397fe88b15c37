from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Mapping, Sequence

import numpy as np

# Row-major field names of a 4x4 matrix record: mRC = row R, column C.
RECORD_FIELDS: tuple[str, ...] = tuple(f"m{r}{c}" for r in range(4) for c in range(4))


# ---------------------------------------------------------------------------
# Pose data classes
# ---------------------------------------------------------------------------


@dataclass(frozen=True, eq=False)
class Pose:
    matrix: np.ndarray  # (4,4) float64

    def __post_init__(self) -> None:
        m = np.asarray(self.matrix, dtype=np.float64)
        if m.shape != (4, 4):
            raise ValueError(f"Expected a (4,4) pose matrix, got shape {m.shape}")
        m = m.copy()
        m.setflags(write=False)
        object.__setattr__(self, "matrix", m)

    @property
    def block(self) -> np.ndarray:
        """Upper-left 3x3 orientation/scale block."""
        return self.matrix[:3, :3]

    @property
    def translation(self) -> np.ndarray:
        return self.matrix[:3, 3]

    @classmethod
    def from_record(cls, record: Mapping[str, object]) -> Pose:
        """Build a pose from the sixteen ``m00..m33`` fields of a record."""
        values = [float(record[k]) for k in RECORD_FIELDS]  # type: ignore[arg-type]
        return cls(np.asarray(values, dtype=np.float64).reshape(4, 4))

    def to_record(self) -> dict[str, float]:
        return {k: float(v) for k, v in zip(RECORD_FIELDS, self.matrix.reshape(-1).tolist())}

    @classmethod
    def from_translation(cls, t: Sequence[float], block: np.ndarray | None = None) -> Pose:
        T = np.eye(4, dtype=np.float64)
        if block is not None:
            T[:3, :3] = np.asarray(block, dtype=np.float64).reshape(3, 3)
        T[:3, 3] = np.asarray(t, dtype=np.float64).reshape(3)
        return cls(T)


@dataclass(frozen=True)
class PoseSet:
    poses: tuple[Pose, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "poses", tuple(self.poses))

    def __len__(self) -> int:
        return len(self.poses)

    def __iter__(self) -> Iterator[Pose]:
        return iter(self.poses)

    def __getitem__(self, i: int) -> Pose:
        return self.poses[i]

    def blocks(self) -> np.ndarray:
        """Stacked orientation/scale blocks, shape (N,3,3)."""
        if not self.poses:
            return np.zeros((0, 3, 3), dtype=np.float64)
        return np.stack([p.block for p in self.poses], axis=0)

    def translations(self) -> np.ndarray:
        """Stacked translations, shape (N,3)."""
        if not self.poses:
            return np.zeros((0, 3), dtype=np.float64)
        return np.stack([p.translation for p in self.poses], axis=0)

