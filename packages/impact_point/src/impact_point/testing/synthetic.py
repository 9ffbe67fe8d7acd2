"""合成数据生成工具（带噪/离群点）。

设计目标：
    - 仅依赖 NumPy，生成“可控、可复现”的抛体观测点。
    - 产物既可以是 ndarray（喂给拟合函数），也可以是 Sample 列表（喂给会话/编排器）。
    - 噪声模型保持简单：各轴独立高斯噪声；离群点按固定下标注入，位移大小可控。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from impact_point.types import BallisticParams, Sample


@dataclass(frozen=True)
class SyntheticNoise:
    """合成噪声配置。"""

    sigma_m: float = 0.0

    # 离群点：在 outlier_indices 处沿随机方向整体偏移 outlier_offset_m。
    outlier_indices: tuple[int, ...] = ()
    outlier_offset_m: float = 1.0

    # 随机种子：保证单测可复现。
    seed: int = 0


def make_ballistic_points(
    params: BallisticParams,
    times: Sequence[float] | np.ndarray,
    *,
    noise: SyntheticNoise | None = None,
) -> tuple[np.ndarray, np.ndarray]:
    """按抛体模型在给定时刻生成观测点。

    Returns:
        (points (N,3), times (N,))。
    """

    t = np.asarray(times, dtype=float).reshape(-1)
    pts = params.position_at(t)
    if noise is None:
        return pts, t

    rng = np.random.default_rng(int(noise.seed))
    if float(noise.sigma_m) > 0.0:
        pts = pts + rng.normal(scale=float(noise.sigma_m), size=pts.shape)

    for i in noise.outlier_indices:
        d = rng.normal(size=3)
        d = d / max(float(np.linalg.norm(d)), 1e-12)
        pts[int(i)] = pts[int(i)] + float(noise.outlier_offset_m) * d

    return pts, t


def make_ballistic_samples(
    params: BallisticParams,
    times: Sequence[float] | np.ndarray,
    *,
    noise: SyntheticNoise | None = None,
) -> list[Sample]:
    """与 `make_ballistic_points` 相同，但返回 Sample 列表。"""

    pts, t = make_ballistic_points(params, times, noise=noise)
    return [
        Sample(x=float(p[0]), y=float(p[1]), z=float(p[2]), t=float(tt))
        for p, tt in zip(pts, t)
    ]
