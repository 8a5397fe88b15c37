from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path

from loguru import logger

from .config import LOG_LEVELS, OffsetConfig, load_config
from .offsets import find_common_offsets
from .plot import plot_offsets
from .pose_io import PoseSourceUnavailable, load_pose_set, write_offsets_json


def setup_logging(level: str = "INFO") -> None:
    logger.remove()
    logger.add(
        sys.stderr,
        level=level.upper(),
        format="{time:HH:mm:ss} | {level: <7} | {name} | {message}",
    )


def _build_config(ap: argparse.ArgumentParser, args: argparse.Namespace) -> OffsetConfig:
    if args.config is not None:
        cfg = load_config(args.config)
    elif args.model is not None and args.space is not None:
        cfg = OffsetConfig(model_path=args.model, space_path=args.space)
    else:
        ap.error("give MODEL and SPACE documents or --config")

    overrides = {}
    if args.model is not None:
        overrides["model_path"] = args.model
    if args.space is not None:
        overrides["space_path"] = args.space
    if args.out is not None:
        overrides["output_path"] = args.out
    if args.plot is not None:
        overrides["plot_path"] = args.plot
    if args.epsilon is not None:
        overrides["epsilon"] = args.epsilon
    if args.resolution is not None:
        overrides["offset_resolution"] = args.resolution
    if args.allow_missing:
        overrides["allow_missing"] = True
    if args.log_level is not None:
        overrides["log_level"] = args.log_level
    return replace(cfg, **overrides) if overrides else cfg


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Find translation offsets mapping a model pose set onto a space pose set.")
    ap.add_argument("model", type=Path, nargs="?", default=None, help="model poses (JSON list of m00..m33 records)")
    ap.add_argument("space", type=Path, nargs="?", default=None, help="space poses (JSON list of m00..m33 records)")
    ap.add_argument("--config", type=Path, default=None, help="YAML config file")
    ap.add_argument("--out", type=Path, default=None, help="offsets JSON output path")
    ap.add_argument("--plot", type=Path, default=None, help="write a PNG of the poses and offsets")
    ap.add_argument("--epsilon", type=float, default=None, help="orientation block tolerance (default 1e-4)")
    ap.add_argument("--resolution", type=float, default=None, help="offset grid resolution, 0 for exact keys")
    ap.add_argument("--allow-missing", action="store_true", help="treat a missing pose file as an empty set")
    ap.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS, default=None)
    args = ap.parse_args(argv)

    try:
        cfg = _build_config(ap, args)
    except (FileNotFoundError, ValueError, TypeError) as e:
        setup_logging("INFO")
        logger.error(f"Invalid configuration: {e}")
        return 1

    setup_logging(cfg.log_level)

    logger.info(f"model : {cfg.model_path}")
    logger.info(f"space : {cfg.space_path}")
    logger.info(f"out   : {cfg.output_path}")

    # 1) load
    try:
        model = load_pose_set(cfg.model_path, missing_ok=cfg.allow_missing)
        space = load_pose_set(cfg.space_path, missing_ok=cfg.allow_missing)
    except (PoseSourceUnavailable, ValueError) as e:
        logger.error(f"[1/4] load failed: {e}")
        return 1
    logger.info(f"[1/4] loaded model={len(model)} space={len(space)}")

    # 2) search
    result = find_common_offsets(model, space, epsilon=cfg.epsilon, resolution=cfg.offset_resolution)
    logger.info(
        f"[2/4] {len(result)} consistent offset(s) after {result.processed}/{len(model)} model poses "
        f"(epsilon={cfg.epsilon:g})"
    )
    for dx, dy, dz in result.offsets:
        logger.debug(f"offset ({dx:.6g}, {dy:.6g}, {dz:.6g})")

    # 3) export
    write_offsets_json(result.offsets, cfg.output_path)
    logger.info(f"[3/4] offsets: {cfg.output_path}")

    # 4) plot
    if cfg.plot_path is not None:
        plot_offsets(model, space, result.offsets, out_path=cfg.plot_path)
        logger.info(f"[4/4] plot: {cfg.plot_path}")
    else:
        logger.info("[4/4] plot: skipped")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
