from __future__ import annotations

from pathlib import Path
from typing import Sequence

import numpy as np

from .geometry import PoseSet
from .offsets import Offset


def _best_plane(xyz: np.ndarray) -> str:
    if xyz.shape[0] < 2:
        return "xy"
    v = np.var(xyz, axis=0)
    score_xy = float(v[0] * v[1])
    score_xz = float(v[0] * v[2])
    score_yz = float(v[1] * v[2])
    if score_xz >= score_xy and score_xz >= score_yz:
        return "xz"
    if score_yz >= score_xy and score_yz >= score_xz:
        return "yz"
    return "xy"


def _project(xyz: np.ndarray, plane: str) -> tuple[np.ndarray, np.ndarray]:
    if plane == "xy":
        return xyz[:, 0], xyz[:, 1]
    if plane == "xz":
        return xyz[:, 0], xyz[:, 2]
    if plane == "yz":
        return xyz[:, 1], xyz[:, 2]
    raise ValueError(f"Unknown plane: {plane}")


def plot_offsets(
    model: PoseSet,
    space: PoseSet,
    offsets: Sequence[Offset],
    *,
    out_path: Path,
    model_color: str = "tab:blue",
    space_color: str = "tab:red",
    aspect: str = "equal",
) -> Path:
    """Scatter model and space positions, plus the model shifted by each offset.

    Points are projected onto the plane with the largest spread.
    """
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    model_xyz = model.translations()
    space_xyz = space.translations()
    all_xyz = np.concatenate([model_xyz, space_xyz], axis=0)
    plane = _best_plane(all_xyz)

    fig, ax = plt.subplots(figsize=(10, 7))
    if space_xyz.shape[0]:
        x, y = _project(space_xyz, plane)
        ax.scatter(x, y, s=36, color=space_color, label="space")
    if model_xyz.shape[0]:
        x, y = _project(model_xyz, plane)
        ax.scatter(x, y, s=36, color=model_color, label="model")

        for i, off in enumerate(offsets):
            shifted = model_xyz + np.asarray(off, dtype=np.float64).reshape(1, 3)
            xs, ys = _project(shifted, plane)
            ax.scatter(
                xs, ys, s=90, facecolors="none", edgecolors="0.2", linewidths=1.2,
                label="model + offset" if i == 0 else None,
            )

    title = f"model={len(model)} | space={len(space)} | offsets={len(offsets)}"
    if len(offsets) == 1:
        dx, dy, dz = offsets[0]
        title += f" | d=({dx:.4g}, {dy:.4g}, {dz:.4g})"
    ax.set_title(f"{title}\n(projected on {plane} plane)")

    if aspect == "equal":
        ax.set_aspect("equal", adjustable="datalim")
    else:
        ax.set_aspect("auto")
    ax.grid(True, linestyle="--", linewidth=0.5)
    if model_xyz.shape[0] or space_xyz.shape[0]:
        ax.legend(loc="best")

    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(out_path, dpi=150, bbox_inches="tight")
    plt.close(fig)
    return out_path
