"""逐轴多项式轨迹拟合与目标高度求根。

拟合参数 p 的口径：
    - 调用方提供 params 时使用它（编排器传入 episode 的相对时间，单位 s）。
    - 未提供时使用点序号 0..N-1。
    两种口径都满足“单调、与点下标对齐”。
"""

from __future__ import annotations

from dataclasses import replace
from typing import Sequence

import numpy as np

from impact_point.types import CubicFit
from impact_point.utils.math_utils import all_finite, least_squares_polyfit, real_polynomial_roots

DEFAULT_DEGREE = 3
DEFAULT_MAX_EXTRAPOLATION_RATIO = 10.0


def as_points(points: np.ndarray | Sequence[Sequence[float]]) -> np.ndarray:
    """把输入规整为 shape=(N,3) 的 float 数组。"""

    pts = np.asarray(points, dtype=float)
    if pts.size == 0:
        return np.zeros((0, 3), dtype=float)
    if pts.ndim != 2 or pts.shape[1] != 3:
        raise ValueError(f"points must have shape (N,3), got {pts.shape}")
    return pts


def fit_params(num_points: int, params: np.ndarray | Sequence[float] | None) -> np.ndarray:
    """返回拟合参数；params 为 None 时使用点序号。"""

    if params is None:
        return np.arange(int(num_points), dtype=float)
    p = np.asarray(params, dtype=float).reshape(-1)
    if p.size != int(num_points):
        raise ValueError(f"params length {p.size} != number of points {num_points}")
    return p


def fit_cubic_curve(
    points: np.ndarray | Sequence[Sequence[float]],
    params: np.ndarray | Sequence[float] | None = None,
    *,
    degree: int = DEFAULT_DEGREE,
    num_curve_points: int = 50,
) -> CubicFit | None:
    """对 x/y/z 三轴分别做多项式最小二乘拟合。

    Args:
        points: 观测点，shape=(N,3)。
        params: 拟合参数，shape=(N,)；None 表示使用点序号。
        degree: 多项式次数（默认 3）。
        num_curve_points: 输出曲线点数（在观测参数范围内等间隔采样）。

    Returns:
        CubicFit；样本不足 degree+1、输入含 NaN/Inf 或设计矩阵秩亏时返回 None。
    """

    pts = as_points(points)
    p = fit_params(pts.shape[0], params)

    coeffs = least_squares_polyfit(p, pts, int(degree))
    if coeffs is None:
        return None

    fit = CubicFit(
        coeffs_x=coeffs[:, 0].copy(),
        coeffs_y=coeffs[:, 1].copy(),
        coeffs_z=coeffs[:, 2].copy(),
        params=p.copy(),
        degree=int(degree),
    )

    p_lo, p_hi = fit.param_range
    grid = np.linspace(p_lo, p_hi, max(int(num_curve_points), 2), dtype=float)
    return replace(fit, curve_points=fit.evaluate(grid))


def curve_residuals(fit: CubicFit, points: np.ndarray, params: np.ndarray) -> np.ndarray:
    """每个点到曲线上同一拟合参数处的欧氏距离，shape=(N,)。"""

    pred = fit.evaluate(params)
    return np.linalg.norm(pred - np.asarray(points, dtype=float), axis=1)


def find_xy_at_target_height(
    fit: CubicFit,
    target_z: float,
    *,
    max_extrapolation_ratio: float = DEFAULT_MAX_EXTRAPOLATION_RATIO,
) -> tuple[float, float, float] | None:
    """在拟合曲线上求 z(p) == target_z 的参数，并读出 x/y。

    选根规则：
        - 只考虑非负实根，且不超过 p_max + max_extrapolation_ratio * (p_max - p_min)；
        - 优先选择落在观测参数区间内、或距离该区间最近的根；
        - 距离相同时取较小的根（即“第一次穿越”）。

    Returns:
        (p, x, y)；无可接受实根时返回 None。

    Raises:
        ValueError: max_extrapolation_ratio 为负或非有限值。
    """

    ratio = float(max_extrapolation_ratio)
    if not np.isfinite(ratio) or ratio < 0.0:
        raise ValueError(f"max_extrapolation_ratio must be finite and >= 0, got {max_extrapolation_ratio}")

    if not all_finite(np.array([float(target_z)])):
        return None

    cz = np.asarray(fit.coeffs_z, dtype=float).copy()
    cz[-1] -= float(target_z)
    p_lo, p_hi = fit.param_range
    # 近似退化的高次项会产生远离观测区间的伪实根，这里按外推长度截断。
    p_limit = p_hi + ratio * max(p_hi - p_lo, 1e-9)
    roots = [r for r in real_polynomial_roots(cz) if 0.0 <= r <= p_limit]
    if not roots:
        return None

    def _distance_to_range(r: float) -> float:
        if r < p_lo:
            return p_lo - r
        if r > p_hi:
            return r - p_hi
        return 0.0

    p_star = min(roots, key=lambda r: (_distance_to_range(r), r))
    xyz = fit.evaluate(p_star)[0]
    return float(p_star), float(xyz[0]), float(xyz[1])
