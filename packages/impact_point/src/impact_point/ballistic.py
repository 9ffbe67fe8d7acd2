"""抛体模型：参数拟合与轨迹重采样。

模型（lidar 坐标系，z 向上）：
    - x/y：匀速，x(t) = x0 + vx*t。
    - z：仅受重力，z(t) = z0 + vz*t - 0.5*g*t^2。

说明：
    三个方向各自是一个 2 参数线性最小二乘问题；z 方向把已知的重力项移到左边，
    对 z + 0.5*g*t^2 做直线拟合即可。
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from impact_point.fitting.polynomial import as_points
from impact_point.types import BallisticParams
from impact_point.utils.math_utils import all_finite, line_fit

DEFAULT_GRAVITY = 9.8


def fit_ballistic_trajectory(
    points: np.ndarray | Sequence[Sequence[float]],
    times: np.ndarray | Sequence[float],
    *,
    gravity: float = DEFAULT_GRAVITY,
) -> BallisticParams | None:
    """用观测点与相对时间拟合抛体参数。

    Args:
        points: 观测点，shape=(N,3)。
        times: 与 points 逐一对齐的相对时间（s），shape=(N,)。时间重复或非单调不会报错，
            只会降低拟合质量。
        gravity: 重力加速度（m/s^2）。

    Returns:
        BallisticParams；点数 < 2、输入含 NaN/Inf、或时间全部相同（秩亏）时返回 None。

    Raises:
        ValueError: points 与 times 长度不一致。
    """

    pts = as_points(points)
    t = np.asarray(times, dtype=float).reshape(-1)
    if t.size != pts.shape[0]:
        raise ValueError(f"times length {t.size} != number of points {pts.shape[0]}")

    if t.size < 2 or not all_finite(pts, t):
        return None

    g = float(gravity)

    fx = line_fit(t, pts[:, 0])
    fy = line_fit(t, pts[:, 1])
    fz = line_fit(t, pts[:, 2] + 0.5 * g * t * t)
    if fx is None or fy is None or fz is None:
        return None

    (x0, vx), (y0, vy), (z0, vz) = fx, fy, fz
    return BallisticParams(x0=x0, y0=y0, z0=z0, vx=vx, vy=vy, vz=vz, gravity=g)


def generate_trajectory_points(
    params: BallisticParams,
    impact_time: float,
    *,
    num_points: int = 50,
) -> np.ndarray:
    """在 [0, impact_time] 上等间隔采样抛体轨迹（含两端）。

    Returns:
        shape=(num_points,3) 的点序列。

    Raises:
        ValueError: impact_time 为负或非有限值，或 num_points < 2。
    """

    t_end = float(impact_time)
    if not math.isfinite(t_end) or t_end < 0.0:
        raise ValueError(f"impact_time must be finite and >= 0, got {impact_time}")
    if int(num_points) < 2:
        raise ValueError(f"num_points must be >= 2, got {num_points}")

    ts = np.linspace(0.0, t_end, int(num_points), dtype=float)
    return params.position_at(ts)
