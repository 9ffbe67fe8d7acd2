"""RANSAC 鲁棒多项式轨迹拟合。

流程：
    1) 每次迭代随机抽取 degree+1 个不同的点，在该最小子集上精确拟合；
    2) 统计所有点到曲线（同一拟合参数处）的欧氏距离 <= threshold 的一致集；
    3) 保留一致集最大的迭代（并列时保留先出现的）；
    4) 在最佳一致集上重新做最小二乘拟合，作为最终结果。

输出系数总是来自第 4 步的重拟合，而不是最小子集的拟合。

随机源通过 `numpy.random.Generator` 注入，单测可用固定种子复现。
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from impact_point.fitting.polynomial import (
    DEFAULT_DEGREE,
    as_points,
    curve_residuals,
    fit_cubic_curve,
    fit_params,
)
from impact_point.types import RobustFit
from impact_point.utils.math_utils import all_finite

DEFAULT_THRESHOLD_M = 0.1
DEFAULT_MAX_ITERATIONS = 1000


def fit_cubic_curve_ransac(
    points: np.ndarray | Sequence[Sequence[float]],
    params: np.ndarray | Sequence[float] | None = None,
    *,
    threshold: float = DEFAULT_THRESHOLD_M,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    degree: int = DEFAULT_DEGREE,
    rng: np.random.Generator | None = None,
    num_curve_points: int = 50,
) -> RobustFit | None:
    """对观测点做 RANSAC 多项式拟合。

    Args:
        points: 观测点，shape=(N,3)。
        params: 拟合参数，shape=(N,)；None 表示使用点序号。
        threshold: 内点距离阈值（m）。
        max_iterations: 最大迭代次数。
        degree: 多项式次数；最小子集大小为 degree+1。
        rng: 随机源；None 时使用 `np.random.default_rng()`。
        num_curve_points: 最终曲线的采样点数。

    Returns:
        RobustFit；点数不足、输入含 NaN/Inf、没有任何迭代得到足够大的一致集，
        或一致集上的重拟合失败时返回 None。
    """

    pts = as_points(points)
    p = fit_params(pts.shape[0], params)
    n = int(pts.shape[0])
    k = int(degree) + 1

    if n < k or not all_finite(pts, p):
        return None

    rng = rng if rng is not None else np.random.default_rng()
    thr = float(threshold)

    best_mask: np.ndarray | None = None
    best_count = 0

    for _ in range(max(int(max_iterations), 1)):
        idx = rng.choice(n, size=k, replace=False)
        candidate = fit_cubic_curve(pts[idx], p[idx], degree=degree, num_curve_points=2)
        if candidate is None:
            # 最小子集里拟合参数重复，无法确定曲线。
            continue

        mask = curve_residuals(candidate, pts, p) <= thr
        count = int(np.count_nonzero(mask))
        if count > best_count:
            best_count = count
            best_mask = mask
            if best_count == n:
                break

    if best_mask is None or best_count < k:
        return None

    refit = fit_cubic_curve(pts[best_mask], p[best_mask], degree=degree, num_curve_points=num_curve_points)
    if refit is None:
        return None

    return RobustFit(fit=refit, inlier_mask=best_mask.copy(), num_inliers=int(best_count))
