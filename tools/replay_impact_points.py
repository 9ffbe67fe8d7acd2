"""离线回放：把记录下来的 3D 点流喂给在线会话，打印每次预测结果。

用途：
- 输入为 JSONL（每行一个 {"t":..,"x":..,"y":..,"z":..}）或带表头的 CSV（列 t,x,y,z）。
- t 为单调时间（秒）；会话按 t 判定间隔超时与预测后暂停，行为与在线一致。
- 每次预测输出一行 JSON（PredictionResult 的字段 + 路径点数）。

示例：
    python tools/replay_impact_points.py --input points.jsonl --config impact_point.yaml --seed 0 --log-level DEBUG
"""

from __future__ import annotations

import argparse
import csv
import json
from collections.abc import Iterator
from dataclasses import asdict, replace
from pathlib import Path
from typing import Any

from impact_point import ImpactPointConfig, ImpactPointEstimator
from impact_point.config_yaml import load_impact_point_config_yaml
from impact_point.utils import default_logger


def _iter_rows(path: Path) -> Iterator[tuple[float, float, float, float]]:
    """按顺序读取 (t, x, y, z)。"""

    if path.suffix.lower() == ".csv":
        with path.open("r", encoding="utf-8", newline="") as f:
            for row in csv.DictReader(f):
                yield float(row["t"]), float(row["x"]), float(row["y"]), float(row["z"])
        return

    with path.open("r", encoding="utf-8") as f:
        for line_no, line in enumerate(f, start=1):
            s = line.strip()
            if not s:
                continue
            rec = json.loads(s)
            if not isinstance(rec, dict):
                raise RuntimeError(f"line {line_no}: expected JSON object, got {type(rec).__name__}")
            yield float(rec["t"]), float(rec["x"]), float(rec["y"]), float(rec["z"])


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Replay recorded 3D points through the impact point estimator.")
    p.add_argument("--input", type=Path, required=True, help="JSONL or CSV file with t,x,y,z")
    p.add_argument("--config", type=Path, default=None, help="optional YAML config")
    p.add_argument("--seed", type=int, default=None, help="RANSAC seed (overrides config)")
    p.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="impact_point logger level (logs go to stderr)",
    )
    return p


def replay(path: Path, cfg: ImpactPointConfig) -> list[dict[str, Any]]:
    """回放一个点流文件，返回每次预测的输出记录。"""

    est = ImpactPointEstimator(cfg, time_source=lambda: 0.0)
    out: list[dict[str, Any]] = []
    for t, x, y, z in _iter_rows(path):
        pred = est.add_point(x, y, z, now=t)
        if pred is None:
            continue
        rec = asdict(pred.result)
        rec["t_now"] = float(t)
        rec["path_points"] = int(pred.path.shape[0])
        out.append(rec)
    return out


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    default_logger(args.log_level)

    cfg = load_impact_point_config_yaml(args.config) if args.config is not None else ImpactPointConfig()
    if args.seed is not None:
        cfg = replace(cfg, ransac=replace(cfg.ransac, seed=int(args.seed)))

    for rec in replay(args.input, cfg):
        print(json.dumps(rec, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
